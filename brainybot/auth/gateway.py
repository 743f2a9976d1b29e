"""Sign-up, sign-in and session refresh delegated to Supabase Auth."""

import logging
from typing import Protocol

from fastapi import HTTPException
from supabase import AuthError, Client, create_client

logger = logging.getLogger(__name__)


class AuthGateway(Protocol):
    def sign_up(self, email: str, password: str) -> dict: ...

    def sign_in(self, email: str, password: str) -> dict: ...

    def refresh(self, refresh_token: str) -> dict: ...


def _token_payload(response) -> dict:
    session = response.session
    user = response.user
    if session is None:
        # Email confirmation pending: the account exists but no session was issued yet.
        return {"user_id": user.id if user else None, "confirmation_required": True}
    return {
        "user_id": session.user.id,
        "access_token": session.access_token,
        "refresh_token": session.refresh_token,
        "token_type": "bearer",
        "expires_in": session.expires_in,
    }


class SupabaseAuthGateway:
    """Uses a fresh client per call so one user's session never leaks into another's."""

    def __init__(self, url: str, anon_key: str):
        self._url = url
        self._anon_key = anon_key

    def _client(self) -> Client:
        return create_client(self._url, self._anon_key)

    def sign_up(self, email: str, password: str) -> dict:
        try:
            response = self._client().auth.sign_up({"email": email, "password": password})
        except AuthError as exc:
            logger.info("Sign-up rejected for %s: %s", email, exc.message)
            raise HTTPException(status_code=400, detail=exc.message) from exc
        return _token_payload(response)

    def sign_in(self, email: str, password: str) -> dict:
        try:
            response = self._client().auth.sign_in_with_password({"email": email, "password": password})
        except AuthError as exc:
            raise HTTPException(status_code=401, detail="Invalid email or password") from exc
        return _token_payload(response)

    def refresh(self, refresh_token: str) -> dict:
        try:
            response = self._client().auth.refresh_session(refresh_token)
        except AuthError as exc:
            raise HTTPException(status_code=401, detail="Invalid or expired refresh token") from exc
        return _token_payload(response)

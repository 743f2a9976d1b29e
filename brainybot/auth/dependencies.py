"""Auth dependencies for FastAPI route injection."""

from dataclasses import dataclass

import jwt
from fastapi import Depends, HTTPException, Request

from brainybot.auth.jwt import verify_token
from brainybot.services import Services, get_services


@dataclass
class CurrentUser:
    id: str
    email: str


def _extract_bearer_token(request: Request) -> str | None:
    auth = request.headers.get("Authorization")
    if auth and auth.startswith("Bearer "):
        return auth[7:]
    return None


async def get_current_user(request: Request, services: Services = Depends(get_services)) -> CurrentUser:
    """FastAPI dependency: authenticate via a Supabase Bearer access token."""
    token = _extract_bearer_token(request)
    if not token:
        raise HTTPException(status_code=401, detail="Missing authentication credentials")

    try:
        payload = verify_token(token, services.settings.SUPABASE_JWT_SECRET)
    except jwt.PyJWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    if not payload.get("sub"):
        raise HTTPException(status_code=401, detail="User not authenticated")
    return CurrentUser(id=payload["sub"], email=payload.get("email", ""))

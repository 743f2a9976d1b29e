"""Verification of Supabase-issued access tokens."""

import jwt

SUPABASE_AUDIENCE = "authenticated"


def verify_token(token: str, secret: str) -> dict:
    """Decode and validate a Supabase JWT. Raises jwt.ExpiredSignatureError or jwt.InvalidTokenError."""
    return jwt.decode(token, secret, algorithms=["HS256"], audience=SUPABASE_AUDIENCE)

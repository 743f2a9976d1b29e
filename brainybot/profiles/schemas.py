"""Pydantic schemas for the profile endpoint."""

from pydantic import BaseModel


class ProfileRequest(BaseModel):
    # Both optional here so a missing field is reported with the profile message, not a 422
    age: int | None = None
    education_level: str | None = None

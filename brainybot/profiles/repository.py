"""Data access layer for user profiles."""

from supabase import Client

from brainybot.db.models import PROFILES


class ProfileRepository:
    def __init__(self, db: Client):
        self._db = db

    def get(self, user_id: str) -> dict | None:
        result = self._db.table(PROFILES).select("*").eq("user_id", user_id).limit(1).execute()
        return result.data[0] if result.data else None

    def upsert(self, user_id: str, age: int, education_level: str) -> dict:
        row = {"user_id": user_id, "age": age, "education_level": education_level}
        result = self._db.table(PROFILES).upsert(row, on_conflict="user_id").execute()
        return result.data[0]

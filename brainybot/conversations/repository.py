"""Data access layer for conversations."""

from datetime import datetime, timezone
from typing import Any

from supabase import Client

from brainybot.db.models import CONVERSATIONS, MESSAGES


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ConversationRepository:
    def __init__(self, db: Client):
        self._db = db

    def create(self, user_id: str, data: dict[str, Any]) -> dict:
        row = {"user_id": user_id, **data}
        result = self._db.table(CONVERSATIONS).insert(row).execute()
        return result.data[0]

    def list_by_user(self, user_id: str) -> list[dict]:
        """Conversations with their messages embedded, most recently updated first."""
        result = (
            self._db.table(CONVERSATIONS)
            .select(f"id, user_id, title, subject, created_at, updated_at, {MESSAGES}(content, role, created_at)")
            .eq("user_id", user_id)
            .order("updated_at", desc=True)
            .execute()
        )
        return result.data

    def get_latest(self, user_id: str) -> dict | None:
        result = (
            self._db.table(CONVERSATIONS)
            .select("*")
            .eq("user_id", user_id)
            .order("updated_at", desc=True)
            .limit(1)
            .execute()
        )
        return result.data[0] if result.data else None

    def get_by_id(self, conversation_id: str) -> dict | None:
        result = self._db.table(CONVERSATIONS).select("*").eq("id", conversation_id).execute()
        return result.data[0] if result.data else None

    def update(self, conversation_id: str, data: dict[str, Any]) -> dict | None:
        row = {**data, "updated_at": utc_now()}
        result = self._db.table(CONVERSATIONS).update(row).eq("id", conversation_id).execute()
        return result.data[0] if result.data else None

    def delete(self, conversation_id: str) -> bool:
        # The schema cascades too; deleting messages first keeps this correct without it.
        self._db.table(MESSAGES).delete().eq("conversation_id", conversation_id).execute()
        result = self._db.table(CONVERSATIONS).delete().eq("id", conversation_id).execute()
        return bool(result.data)

"""Data access layer for chat messages."""

from supabase import Client

from brainybot.db.models import MESSAGES


class MessageRepository:
    def __init__(self, db: Client):
        self._db = db

    def append(self, conversation_id: str, role: str, content: str, input_type: str | None = None) -> dict:
        row = {"conversation_id": conversation_id, "role": role, "content": content}
        if input_type:
            row["input_type"] = input_type
        result = self._db.table(MESSAGES).insert(row).execute()
        return result.data[0]

    def list_by_conversation(self, conversation_id: str) -> list[dict]:
        result = (
            self._db.table(MESSAGES)
            .select("*")
            .eq("conversation_id", conversation_id)
            .order("created_at")
            .execute()
        )
        return result.data

"""Pydantic schemas for conversation requests and responses."""

from typing import Literal

from pydantic import BaseModel, Field

from brainybot.db.models import DEFAULT_CONVERSATION_TITLE

Subject = Literal["general", "math", "science", "coding", "history", "language"]


# --- Requests ---

class CreateConversationRequest(BaseModel):
    title: str = Field(DEFAULT_CONVERSATION_TITLE, min_length=1, max_length=200)
    subject: Subject = "general"


class UpdateConversationRequest(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=200)
    subject: Subject | None = None


# --- Responses ---

class ConversationResponse(BaseModel):
    id: str
    user_id: str
    title: str
    subject: str
    created_at: str
    updated_at: str


class ConversationSummary(ConversationResponse):
    preview: str


class ConversationListResponse(BaseModel):
    status: str = "success"
    data: list[ConversationSummary]
    total: int

"""Pydantic schemas for message requests and responses."""

from typing import Literal

from pydantic import BaseModel

from brainybot.chat.schemas import CamelModel


class SendMessageRequest(CamelModel):
    content: str | None = None
    input_type: Literal["text", "voice", "image"] | None = None
    audio_data: str | None = None
    image_data: str | None = None


class MessageResponse(BaseModel):
    id: str
    conversation_id: str
    role: str
    content: str
    input_type: str | None = None
    created_at: str


class MessageListResponse(BaseModel):
    status: str = "success"
    data: list[MessageResponse]
    total: int

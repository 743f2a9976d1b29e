"""Pydantic schemas for the completion proxy and transcription endpoints."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HistoryEntry(CamelModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(CamelModel):
    message: str | None = None
    subject: str | None = None
    conversation_id: str | None = None
    image_data: str | None = None
    conversation_history: list[HistoryEntry] = Field(default_factory=list)


class TranscribeRequest(CamelModel):
    audio_data: str

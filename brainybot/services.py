"""Explicitly constructed service container and the FastAPI dependencies that expose it."""

from dataclasses import dataclass

from fastapi import Request

from brainybot.auth.gateway import AuthGateway, SupabaseAuthGateway
from brainybot.config.settings import Settings
from brainybot.conversations.repository import ConversationRepository
from brainybot.db.client import create_supabase
from brainybot.inputs.audio import AudioTranscriber, GeminiTranscriber
from brainybot.inputs.images import ImageDecoder, SignatureImageDecoder
from brainybot.llm.client import LLMClient, build_llm_client
from brainybot.messages.repository import MessageRepository
from brainybot.profiles.repository import ProfileRepository


@dataclass
class Services:
    settings: Settings
    conversations: ConversationRepository
    messages: MessageRepository
    profiles: ProfileRepository
    llm: LLMClient
    transcriber: AudioTranscriber
    image_decoder: ImageDecoder
    auth: AuthGateway


def build_services(settings: Settings) -> Services:
    db = create_supabase(settings)
    return Services(
        settings=settings,
        conversations=ConversationRepository(db),
        messages=MessageRepository(db),
        profiles=ProfileRepository(db),
        llm=build_llm_client(settings),
        transcriber=GeminiTranscriber(settings.GOOGLE_AI_API_KEY, settings.TRANSCRIPTION_MODEL),
        image_decoder=SignatureImageDecoder(settings.MAX_IMAGE_BYTES),
        auth=SupabaseAuthGateway(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY),
    )


def get_services(request: Request) -> Services:
    return request.app.state.services

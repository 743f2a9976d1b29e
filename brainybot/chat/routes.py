"""Completion proxy and speech transcription endpoints."""

import logging

from fastapi import APIRouter, Depends, Request

from brainybot.auth.dependencies import CurrentUser, get_current_user
from brainybot.chat.schemas import ChatRequest, TranscribeRequest
from brainybot.chat.service import CompletionProxy
from brainybot.inputs.audio import transcribe_data_url
from brainybot.llm.prompts import build_user_context
from brainybot.messages.streaming import relay, sse_response
from brainybot.services import Services, get_services

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Chat"])


def get_proxy(services: Services = Depends(get_services)) -> CompletionProxy:
    return CompletionProxy(services.llm, services.image_decoder, services.settings.HISTORY_TOKEN_BUDGET)


@router.post(
    "/chat",
    summary="Stream a tutor reply",
    description=(
        "Send a message and/or a data-URL image with optional history. Responds with `text/event-stream` "
        "frames `data: {\"text\": ...}` terminated by `data: [DONE]`, or a JSON error (400/402/429/500)."
    ),
)
async def chat(
    body: ChatRequest,
    request: Request,
    user: CurrentUser = Depends(get_current_user),
    services: Services = Depends(get_services),
    proxy: CompletionProxy = Depends(get_proxy),
):
    fragments = await proxy.open(
        body.message,
        subject=body.subject,
        image_data=body.image_data,
        history=[entry.model_dump() for entry in body.conversation_history],
        user_context=build_user_context(services.profiles.get(user.id)),
    )
    logger.info("Relaying completion for user %s conversation %s", user.id, body.conversation_id)
    return sse_response(relay(fragments, is_disconnected=request.is_disconnected))


@router.post("/transcribe", summary="Transcribe speech", description="Turn a recorded audio clip (data URL) into text.")
async def transcribe(
    body: TranscribeRequest,
    user: CurrentUser = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    text = await transcribe_data_url(body.audio_data, services.transcriber)
    return {"text": text}

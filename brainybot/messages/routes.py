"""Message endpoints: list and streamed send."""

from fastapi import APIRouter, Depends, Request

from brainybot.auth.dependencies import CurrentUser, get_current_user
from brainybot.chat.routes import get_proxy
from brainybot.chat.service import CompletionProxy
from brainybot.conversations.service import get_conversation, get_owned_conversation
from brainybot.messages.schemas import MessageListResponse, SendMessageRequest
from brainybot.messages.service import ChatSession, resolve_input
from brainybot.messages.streaming import sse_response
from brainybot.services import Services, get_services

router = APIRouter(prefix="/api/v1/conversations/{conversation_id}", tags=["Messages"])


@router.get("/messages", response_model=MessageListResponse, summary="List messages", description="All messages of a conversation in creation order.")
async def list_messages(
    conversation_id: str,
    user: CurrentUser = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    _, messages = get_conversation(services.conversations, services.messages, conversation_id, user.id)
    return MessageListResponse(data=messages, total=len(messages))


@router.post(
    "/messages/stream",
    summary="Send a message and stream the reply",
    description=(
        "Accepts text, a recorded audio clip or an image (data URLs). Stores the user message, streams the "
        "tutor's reply as SSE frames ending in `data: [DONE]`, and stores the reply once complete."
    ),
)
async def stream(
    conversation_id: str,
    body: SendMessageRequest,
    request: Request,
    user: CurrentUser = Depends(get_current_user),
    services: Services = Depends(get_services),
    proxy: CompletionProxy = Depends(get_proxy),
):
    conv = get_owned_conversation(services.conversations, conversation_id, user.id)
    prepared = await resolve_input(body, services.transcriber, services.image_decoder)
    session = ChatSession(services.conversations, services.messages, services.profiles, proxy)
    frames = await session.send(conv, user.id, prepared, is_disconnected=request.is_disconnected)
    return sse_response(frames)

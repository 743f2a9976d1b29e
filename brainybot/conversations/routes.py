"""Conversation CRUD endpoints."""

from fastapi import APIRouter, Depends

from brainybot.auth.dependencies import CurrentUser, get_current_user
from brainybot.conversations.schemas import (
    ConversationListResponse,
    CreateConversationRequest,
    UpdateConversationRequest,
)
from brainybot.conversations.service import (
    create_conversation,
    delete_conversation,
    get_conversation,
    get_latest_conversation,
    list_conversations,
    update_conversation,
)
from brainybot.services import Services, get_services

router = APIRouter(prefix="/api/v1/conversations", tags=["Conversations"])


@router.post("", status_code=201, summary="Create a conversation", description="Start a new conversation for a subject. The title defaults to \"New Conversation\".")
async def create(
    body: CreateConversationRequest,
    user: CurrentUser = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    conv = create_conversation(services.conversations, user.id, body.model_dump())
    return {"status": "success", "data": conv}


@router.get("", response_model=ConversationListResponse, summary="List conversations", description="List the authenticated user's conversations with a preview of the first question, most recently updated first.")
async def list_all(user: CurrentUser = Depends(get_current_user), services: Services = Depends(get_services)):
    conversations = list_conversations(services.conversations, user.id)
    return ConversationListResponse(data=conversations, total=len(conversations))


@router.get("/latest", summary="Get the latest conversation", description="The most recently updated conversation, or null when the user has none.")
async def latest(user: CurrentUser = Depends(get_current_user), services: Services = Depends(get_services)):
    return {"status": "success", "data": get_latest_conversation(services.conversations, user.id)}


@router.get("/{conversation_id}", summary="Get a conversation", description="Retrieve a single conversation with its full message history.")
async def get(
    conversation_id: str,
    user: CurrentUser = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    conv, messages = get_conversation(services.conversations, services.messages, conversation_id, user.id)
    return {"status": "success", "data": {**conv, "messages": messages}}


@router.patch("/{conversation_id}", summary="Update a conversation", description="Rename a conversation or change its subject.")
async def patch(
    conversation_id: str,
    body: UpdateConversationRequest,
    user: CurrentUser = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    updated = update_conversation(services.conversations, conversation_id, user.id, body.model_dump())
    return {"status": "success", "data": updated}


@router.delete("/{conversation_id}", status_code=204, summary="Delete a conversation", description="Permanently delete a conversation and all its messages.")
async def delete(
    conversation_id: str,
    user: CurrentUser = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    delete_conversation(services.conversations, conversation_id, user.id)

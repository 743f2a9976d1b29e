"""Business logic for conversations with ownership verification."""

from fastapi import HTTPException

from brainybot.conversations.repository import ConversationRepository
from brainybot.db.models import DEFAULT_CONVERSATION_TITLE, MESSAGES, ROLE_USER
from brainybot.messages.repository import MessageRepository

PREVIEW_LENGTH = 60
TITLE_LENGTH = 50


def verify_ownership(conversation: dict, user_id: str) -> None:
    if conversation["user_id"] != user_id:
        raise HTTPException(status_code=403, detail="You do not have access to this conversation")


def derive_title(first_message: str) -> str:
    """Conversation title taken from the opening user message."""
    text = " ".join(first_message.split())
    if not text:
        return DEFAULT_CONVERSATION_TITLE
    if len(text) > TITLE_LENGTH:
        return text[:TITLE_LENGTH].rstrip() + "..."
    return text


def preview(messages: list[dict]) -> str:
    ordered = sorted(messages, key=lambda m: m.get("created_at") or "")
    first_user = next((m for m in ordered if m["role"] == ROLE_USER and m.get("content")), None)
    if first_user is None:
        return "No messages yet"
    content = first_user["content"]
    return content[:PREVIEW_LENGTH] + ("..." if len(content) > PREVIEW_LENGTH else "")


def create_conversation(repo: ConversationRepository, user_id: str, data: dict) -> dict:
    return repo.create(user_id, data)


def list_conversations(repo: ConversationRepository, user_id: str) -> list[dict]:
    summaries = []
    for conv in repo.list_by_user(user_id):
        messages = conv.pop(MESSAGES, None) or []
        summaries.append({**conv, "preview": preview(messages)})
    return summaries


def get_latest_conversation(repo: ConversationRepository, user_id: str) -> dict | None:
    return repo.get_latest(user_id)


def get_owned_conversation(repo: ConversationRepository, conversation_id: str, user_id: str) -> dict:
    conv = repo.get_by_id(conversation_id)
    if not conv:
        raise HTTPException(status_code=404, detail="Conversation not found")
    verify_ownership(conv, user_id)
    return conv


def get_conversation(
    repo: ConversationRepository, messages: MessageRepository, conversation_id: str, user_id: str,
) -> tuple[dict, list[dict]]:
    conv = get_owned_conversation(repo, conversation_id, user_id)
    return conv, messages.list_by_conversation(conversation_id)


def update_conversation(repo: ConversationRepository, conversation_id: str, user_id: str, data: dict) -> dict:
    conv = get_owned_conversation(repo, conversation_id, user_id)
    # Filter out None values
    update_data = {k: v for k, v in data.items() if v is not None}
    if not update_data:
        return conv
    return repo.update(conversation_id, update_data)


def delete_conversation(repo: ConversationRepository, conversation_id: str, user_id: str) -> None:
    get_owned_conversation(repo, conversation_id, user_id)
    repo.delete(conversation_id)

"""Message business logic: resolve inputs, persist both sides of an exchange, relay the reply."""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass

from brainybot.chat.service import CompletionProxy
from brainybot.conversations.repository import ConversationRepository
from brainybot.conversations.service import derive_title
from brainybot.db.models import (
    DEFAULT_CONVERSATION_TITLE,
    INPUT_IMAGE,
    INPUT_TEXT,
    INPUT_VOICE,
    ROLE_ASSISTANT,
    ROLE_USER,
)
from brainybot.inputs.audio import AudioTranscriber, transcribe_data_url
from brainybot.inputs.images import ImageDecoder, ImagePart, image_from_data_url
from brainybot.llm.prompts import DEFAULT_IMAGE_PROMPT, build_user_context
from brainybot.messages.repository import MessageRepository
from brainybot.messages.schemas import SendMessageRequest
from brainybot.messages.streaming import relay
from brainybot.profiles.repository import ProfileRepository
from brainybot.utils.errors import ClientInputError

logger = logging.getLogger(__name__)


@dataclass
class PreparedInput:
    content: str
    input_type: str
    image: ImagePart | None = None


async def resolve_input(
    body: SendMessageRequest, transcriber: AudioTranscriber, image_decoder: ImageDecoder,
) -> PreparedInput:
    """Turn a text, voice or image submission into the user message to store and send."""
    content = (body.content or "").strip()

    if body.audio_data:
        transcript = await transcribe_data_url(body.audio_data, transcriber)
        return PreparedInput(content=transcript, input_type=INPUT_VOICE)

    if body.image_data:
        image = image_from_data_url(body.image_data, image_decoder)
        return PreparedInput(content=content or DEFAULT_IMAGE_PROMPT, input_type=INPUT_IMAGE, image=image)

    if not content:
        raise ClientInputError("Message or image is required")
    # Clients that ran speech recognition themselves send the transcript tagged as voice
    return PreparedInput(content=content, input_type=body.input_type or INPUT_TEXT)


class ChatSession:
    def __init__(
        self,
        conversations: ConversationRepository,
        messages: MessageRepository,
        profiles: ProfileRepository,
        proxy: CompletionProxy,
    ):
        self._conversations = conversations
        self._messages = messages
        self._profiles = profiles
        self._proxy = proxy

    def _record_user_message(self, conversation: dict, prepared: PreparedInput, history: list[dict]) -> None:
        self._messages.append(conversation["id"], ROLE_USER, prepared.content, input_type=prepared.input_type)
        first_question = not any(turn["role"] == ROLE_USER for turn in history)
        if first_question and conversation.get("title") == DEFAULT_CONVERSATION_TITLE:
            self._conversations.update(conversation["id"], {"title": derive_title(prepared.content)})
        else:
            self._conversations.update(conversation["id"], {})

    async def send(
        self,
        conversation: dict,
        user_id: str,
        prepared: PreparedInput,
        is_disconnected: Callable[[], Awaitable[bool]] | None = None,
    ) -> AsyncIterator[str]:
        """Persist the user message, open the completion and return the SSE frames.

        The assistant message is stored once the reply has fully arrived.
        """
        conversation_id = conversation["id"]
        history = [
            {"role": m["role"], "content": m["content"]}
            for m in self._messages.list_by_conversation(conversation_id)
        ]
        self._record_user_message(conversation, prepared, history)

        fragments = await self._proxy.open(
            prepared.content,
            subject=conversation.get("subject"),
            image=prepared.image,
            history=history,
            user_context=build_user_context(self._profiles.get(user_id)),
        )

        async def save_reply(text: str) -> None:
            if not text:
                logger.warning("Empty reply for conversation %s, nothing saved", conversation_id)
                return
            self._messages.append(conversation_id, ROLE_ASSISTANT, text)
            self._conversations.update(conversation_id, {})

        return relay(fragments, on_complete=save_reply, is_disconnected=is_disconnected)

"""Streaming completion proxy: request shaping in front of the model client."""

import logging
from collections.abc import AsyncIterator

from brainybot.inputs.images import ImageDecoder, ImagePart, image_from_data_url
from brainybot.llm.client import CompletionRequest, LLMClient
from brainybot.llm.context import build_context
from brainybot.llm.prompts import DEFAULT_IMAGE_PROMPT, build_system_prompt, resolve_subject
from brainybot.utils.errors import ClientInputError

logger = logging.getLogger(__name__)


class CompletionProxy:
    def __init__(self, llm: LLMClient, image_decoder: ImageDecoder, history_token_budget: int):
        self._llm = llm
        self._image_decoder = image_decoder
        self._history_token_budget = history_token_budget

    async def open(
        self,
        message: str | None,
        subject: str | None = None,
        image_data: str | None = None,
        image: ImagePart | None = None,
        history: list[dict] | None = None,
        user_context: str | None = None,
    ) -> AsyncIterator[str]:
        """Validate and shape the request, then open the upstream stream.

        Every failure raised here happens before a response stream exists.
        """
        message = (message or "").strip()
        if not message and not image_data and image is None:
            raise ClientInputError("Message or image is required")
        if image is None and image_data:
            image = image_from_data_url(image_data, self._image_decoder)

        request = CompletionRequest(
            system_prompt=build_system_prompt(subject, user_context),
            message=message or DEFAULT_IMAGE_PROMPT,
            history=build_context(history or [], self._history_token_budget),
            image=image,
        )
        logger.info(
            "Opening completion: subject=%s history_turns=%d image=%s",
            resolve_subject(subject), len(request.history), image.mime_type if image else None,
        )
        return await self._llm.stream(request)

"""LLM client abstraction with Google Gemini (default) and Groq providers."""

import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from dataclasses import dataclass, field

from google.api_core import exceptions as google_exceptions
from google.generativeai.types import BlockedPromptException, StopCandidateException

from brainybot.config.settings import Settings
from brainybot.inputs.data_url import encode_data_url
from brainybot.inputs.images import ImagePart
from brainybot.llm.context import to_gemini_history
from brainybot.utils.errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)

# Gemini SDK failures that carry no HTTP status
GEMINI_SDK_ERRORS = (
    BlockedPromptException,
    StopCandidateException,
    google_exceptions.RetryError,
    ValueError,
)


@dataclass
class CompletionRequest:
    system_prompt: str
    message: str
    history: list[dict] = field(default_factory=list)
    image: ImagePart | None = None


class LLMClient(ABC):
    @abstractmethod
    async def stream(self, request: CompletionRequest) -> AsyncIterator[str]:
        """Open a streaming generation and return an iterator of text fragments.

        Raises ConfigurationError before any network call when the client has
        no API key, and UpstreamError when the model API rejects the request.
        Both happen before this coroutine returns, so callers can answer with
        a plain error response instead of a broken stream.
        """
        ...


async def _prepend(first: str, rest: AsyncIterator[str]) -> AsyncIterator[str]:
    yield first
    async for fragment in rest:
        yield fragment


async def _empty() -> AsyncIterator[str]:
    return
    yield


class GeminiClient(LLMClient):
    def __init__(self, api_key: str, model: str, max_output_tokens: int = 1000, temperature: float = 0.7):
        import google.generativeai as genai

        self._api_key = api_key
        self._model = model
        self._generation_config = {"max_output_tokens": max_output_tokens, "temperature": temperature}
        self._genai = genai
        if api_key:
            genai.configure(api_key=api_key)

    def _contents(self, request: CompletionRequest) -> list[dict]:
        parts: list = [request.message]
        if request.image:
            parts.append({"mime_type": request.image.mime_type, "data": request.image.data})
        return to_gemini_history(request.history) + [{"role": "user", "parts": parts}]

    async def stream(self, request: CompletionRequest) -> AsyncIterator[str]:
        if not self._api_key:
            raise ConfigurationError("GOOGLE_AI_API_KEY is not configured")

        gen_model = self._genai.GenerativeModel(
            self._model,
            system_instruction=request.system_prompt,
            generation_config=self._generation_config,
        )
        fragments = self._fragments(gen_model, self._contents(request))
        # The first read sends the request; upstream rejections surface here.
        try:
            first = await fragments.__anext__()
        except StopAsyncIteration:
            return _empty()
        except google_exceptions.GoogleAPICallError as exc:
            raise UpstreamError(exc.code, exc.message) from exc
        except GEMINI_SDK_ERRORS as exc:
            raise UpstreamError(None, str(exc)) from exc
        return _prepend(first, fragments)

    async def _fragments(self, gen_model, contents: list[dict]) -> AsyncIterator[str]:
        response = await gen_model.generate_content_async(contents, stream=True)
        async for chunk in response:
            if chunk.text:
                yield chunk.text


class GroqClient(LLMClient):
    def __init__(self, api_key: str, model: str, max_output_tokens: int = 1000, temperature: float = 0.7):
        from groq import AsyncGroq

        self._api_key = api_key
        self._model = model
        self._max_output_tokens = max_output_tokens
        self._temperature = temperature
        self._client = AsyncGroq(api_key=api_key) if api_key else None

    def _messages(self, request: CompletionRequest) -> list[dict]:
        content: str | list[dict] = request.message
        if request.image:
            content = [
                {"type": "image_url", "image_url": {"url": encode_data_url(request.image.mime_type, request.image.data)}},
                {"type": "text", "text": request.message},
            ]
        return (
            [{"role": "system", "content": request.system_prompt}]
            + [{"role": turn["role"], "content": turn["content"]} for turn in request.history]
            + [{"role": "user", "content": content}]
        )

    async def stream(self, request: CompletionRequest) -> AsyncIterator[str]:
        from groq import APIConnectionError, APIStatusError

        if self._client is None:
            raise ConfigurationError("GROQ_API_KEY is not configured")
        try:
            stream = await self._client.chat.completions.create(
                model=self._model,
                messages=self._messages(request),
                max_tokens=self._max_output_tokens,
                temperature=self._temperature,
                stream=True,
            )
        except APIStatusError as exc:
            raise UpstreamError(exc.status_code, str(exc)) from exc
        except APIConnectionError as exc:
            raise UpstreamError(None, str(exc)) from exc
        return self._fragments(stream)

    async def _fragments(self, stream) -> AsyncIterator[str]:
        async for chunk in stream:
            if not chunk.choices:
                continue
            delta = chunk.choices[0].delta
            if delta.content:
                yield delta.content


def build_llm_client(settings: Settings) -> LLMClient:
    if settings.LLM_PROVIDER == "google":
        return GeminiClient(
            settings.GOOGLE_AI_API_KEY, settings.DEFAULT_MODEL,
            max_output_tokens=settings.MAX_OUTPUT_TOKENS, temperature=settings.TEMPERATURE,
        )
    if settings.LLM_PROVIDER == "groq":
        return GroqClient(
            settings.GROQ_API_KEY, settings.GROQ_MODEL,
            max_output_tokens=settings.MAX_OUTPUT_TOKENS, temperature=settings.TEMPERATURE,
        )
    raise ValueError(f"Unknown LLM provider: {settings.LLM_PROVIDER}")

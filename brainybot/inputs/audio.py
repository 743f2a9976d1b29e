"""Speech-to-text capability used by the chat input layer."""

import logging
from typing import Protocol

from google.api_core import exceptions as google_exceptions

from brainybot.inputs.data_url import decode_data_url
from brainybot.llm.client import GEMINI_SDK_ERRORS
from brainybot.llm.prompts import TRANSCRIPTION_PROMPT
from brainybot.utils.errors import ClientInputError, ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_AUDIO_MIME = "audio/webm"

NO_SPEECH_MESSAGE = "No speech detected. Please try again and speak clearly."


class AudioTranscriber(Protocol):
    async def transcribe(self, audio: bytes, mime_type: str = DEFAULT_AUDIO_MIME) -> str:
        ...


def _clean_transcript(text: str | None) -> str:
    if not text:
        return ""
    # collapse whitespace and drop wrapping quotes some models add
    return " ".join(text.split()).strip('"')


class GeminiTranscriber:
    """Transcribes recorded speech with a multimodal Gemini model."""

    def __init__(self, api_key: str, model: str):
        import google.generativeai as genai

        self._api_key = api_key
        self._model = model
        self._genai = genai
        if api_key:
            genai.configure(api_key=api_key)

    async def transcribe(self, audio: bytes, mime_type: str = DEFAULT_AUDIO_MIME) -> str:
        if not self._api_key:
            raise ConfigurationError("GOOGLE_AI_API_KEY is not configured")
        model = self._genai.GenerativeModel(self._model)
        try:
            response = await model.generate_content_async(
                [TRANSCRIPTION_PROMPT, {"mime_type": mime_type, "data": audio}]
            )
            text = response.text
        except google_exceptions.GoogleAPICallError as exc:
            raise UpstreamError(exc.code, exc.message) from exc
        except GEMINI_SDK_ERRORS as exc:
            raise UpstreamError(None, str(exc)) from exc
        transcript = _clean_transcript(text)
        logger.info("Transcribed %d bytes of %s into %d chars", len(audio), mime_type, len(transcript))
        return transcript


async def transcribe_data_url(audio_data: str, transcriber: AudioTranscriber) -> str:
    mime, audio = decode_data_url(audio_data, DEFAULT_AUDIO_MIME)
    if not mime.startswith("audio/"):
        raise ClientInputError("Please record or upload an audio clip")
    transcript = _clean_transcript(await transcriber.transcribe(audio, mime))
    if not transcript:
        raise ClientInputError(NO_SPEECH_MESSAGE)
    return transcript

"""SSE frame formatting and the streaming relay."""

import json
import logging
from collections.abc import AsyncIterator, Awaitable, Callable

from starlette.responses import StreamingResponse

logger = logging.getLogger(__name__)

DONE_SENTINEL = "[DONE]"
DONE_FRAME = f"data: {DONE_SENTINEL}\n\n"

SSE_HEADERS = {"Cache-Control": "no-cache", "Connection": "keep-alive", "X-Accel-Buffering": "no"}


def format_text_frame(text: str) -> str:
    return f"data: {json.dumps({'text': text})}\n\n"


async def relay(
    fragments: AsyncIterator[str],
    on_complete: Callable[[str], Awaitable[None]] | None = None,
    is_disconnected: Callable[[], Awaitable[bool]] | None = None,
) -> AsyncIterator[str]:
    """Forward upstream fragments as SSE frames, in arrival order, then the [DONE] frame.

    `on_complete` receives the concatenated text once the upstream stream is
    exhausted, before the sentinel is sent. Upstream errors are not caught:
    they abort the response so the client sees a broken stream. When
    `is_disconnected` reports the client gone, checked before each frame, the
    upstream read stops and nothing is stored.
    """
    parts: list[str] = []
    async for fragment in fragments:
        if is_disconnected is not None and await is_disconnected():
            logger.info("Client disconnected during stream")
            return
        parts.append(fragment)
        yield format_text_frame(fragment)

    if on_complete is not None:
        await on_complete("".join(parts))
    yield DONE_FRAME


def sse_response(frames: AsyncIterator[str]) -> StreamingResponse:
    return StreamingResponse(frames, media_type="text/event-stream", headers=SSE_HEADERS)

"""Parsing of base64 `data:` URLs sent by browser clients."""

import base64
import binascii
import re

from brainybot.utils.errors import ClientInputError

_HEADER = re.compile(r"^data:(?P<mime>[^;,]+)?(?P<params>(;[^;,]*)*),", re.IGNORECASE)


def decode_data_url(value: str, default_mime: str | None) -> tuple[str | None, bytes]:
    """Split a data URL into (mime type, raw bytes).

    A bare base64 string without a `data:` header is accepted and typed with
    `default_mime`, as is a header that carries no media type.
    """
    mime = default_mime
    payload = value
    if value.startswith("data:"):
        match = _HEADER.match(value)
        if not match:
            raise ClientInputError("Malformed data URL")
        if match.group("mime"):
            mime = match.group("mime").lower()
        if ";base64" not in (match.group("params") or "").lower():
            raise ClientInputError("Only base64-encoded data URLs are supported")
        payload = value[match.end():]

    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise ClientInputError("Data URL payload is not valid base64") from None
    if not data:
        raise ClientInputError("Data URL payload is empty")
    return mime, data


def encode_data_url(mime: str, data: bytes) -> str:
    return f"data:{mime};base64,{base64.b64encode(data).decode()}"

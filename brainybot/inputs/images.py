"""Image decoding capability used by the chat input layer."""

from dataclasses import dataclass
from typing import Protocol

from brainybot.inputs.data_url import decode_data_url
from brainybot.utils.errors import ClientInputError

DEFAULT_IMAGE_MIME = "image/jpeg"

# leading bytes -> mime type
_SIGNATURES = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"BM", "image/bmp"),
)


@dataclass(frozen=True)
class ImagePart:
    mime_type: str
    data: bytes


class ImageDecoder(Protocol):
    def decode(self, raw: bytes, declared_mime: str | None = None) -> tuple[str, bytes]:
        """Return (mime type, payload) for an uploaded image or raise ClientInputError."""
        ...


def sniff_image_mime(raw: bytes) -> str | None:
    for signature, mime in _SIGNATURES:
        if raw.startswith(signature):
            return mime
    if raw[:4] == b"RIFF" and raw[8:12] == b"WEBP":
        return "image/webp"
    if raw[4:12] in (b"ftypheic", b"ftypheix", b"ftypmif1"):
        return "image/heic"
    return None


class SignatureImageDecoder:
    """Accepts any `image/*` payload up to `max_bytes`.

    The declared type is trusted. Leading bytes only pick the type when the
    data URL carried none, falling back to JPEG.
    """

    def __init__(self, max_bytes: int):
        self._max_bytes = max_bytes

    def decode(self, raw: bytes, declared_mime: str | None = None) -> tuple[str, bytes]:
        if len(raw) > self._max_bytes:
            limit_mb = self._max_bytes // (1024 * 1024)
            raise ClientInputError(f"Image too large. Please choose an image under {limit_mb}MB.")
        if declared_mime is not None:
            if not declared_mime.startswith("image/"):
                raise ClientInputError("Please upload an image file")
            return declared_mime, raw
        return sniff_image_mime(raw) or DEFAULT_IMAGE_MIME, raw


def image_from_data_url(image_data: str, decoder: ImageDecoder) -> ImagePart:
    declared, raw = decode_data_url(image_data, None)
    mime, payload = decoder.decode(raw, declared)
    return ImagePart(mime_type=mime, data=payload)

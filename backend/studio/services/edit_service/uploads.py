"""Classify uploaded image buffers and label them for the multipart upstream call."""

from typing import List, Optional, Sequence, Tuple

from fastapi import UploadFile

from studio.handlers.error_handler import InvalidRequestError
from studio.models.payloads import Upload

PNG_SIGNATURE_HEX = "89504e47"
JPEG_SIGNATURE_HEX = "ffd8ffe"

PNG_MIME = "image/png"
JPEG_MIME = "image/jpeg"
WEBP_MIME = "image/webp"

EDIT_IMAGE_TYPES = (PNG_MIME, WEBP_MIME, JPEG_MIME)
VARIATION_IMAGE_TYPES = (PNG_MIME,)
MASK_TYPES = ("image/",)


def classify_mime(buffer: bytes) -> str:
    """
    Pick the MIME label from the leading bytes.

    PNG and JPEG are sniffed; anything else is labelled webp without
    checking, and the upstream API is left to reject it.
    """
    head = buffer[:4].hex()
    if head.startswith(PNG_SIGNATURE_HEX):
        return PNG_MIME
    if head.startswith(JPEG_SIGNATURE_HEX):
        return JPEG_MIME
    return WEBP_MIME


def source_upload(buffer: bytes, index: int) -> Upload:
    """Label the `index`-th source image by its detected type."""
    mime = classify_mime(buffer)
    return (f"image{index}.{mime.split('/')[1]}", buffer, mime)


def source_uploads(buffers: Sequence[bytes]) -> List[Upload]:
    """Label source images in submission order."""
    return [source_upload(buffer, index) for index, buffer in enumerate(buffers)]


def variation_upload(buffer: bytes) -> Upload:
    """Variation sources are PNG-only, checked at upload intake."""
    return ("image.png", buffer, PNG_MIME)


def mask_upload(buffer: Optional[bytes]) -> Optional[Upload]:
    """
    Masks must be PNG with alpha upstream, so they are always labelled PNG.
    This is a relabel only; the bytes are passed through untouched.
    """
    if buffer is None:
        return None
    return ("mask.png", buffer, PNG_MIME)


async def read_upload(
    file: UploadFile,
    allowed_types: Tuple[str, ...],
    max_bytes: int,
    label: str,
) -> bytes:
    """
    Read one multipart part after checking its declared type and size.

    `allowed_types` entries ending in "/" are treated as prefixes.
    """
    content_type = (file.content_type or "").lower()
    if not any(
        content_type.startswith(t) if t.endswith("/") else content_type == t
        for t in allowed_types
    ):
        raise InvalidRequestError(
            f"Unsupported file type for {label}: {content_type or 'unknown'}",
            details={"allowed_types": list(allowed_types)},
        )

    data = await file.read()
    if not data:
        raise InvalidRequestError(f"Uploaded {label} is empty")
    if len(data) > max_bytes:
        raise InvalidRequestError(
            f"Uploaded {label} exceeds the limit of {max_bytes} bytes"
        )
    return data

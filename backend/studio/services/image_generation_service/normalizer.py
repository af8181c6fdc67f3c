"""Turn the upstream per-image `url` / `b64_json` union into `<img src>` strings."""

from typing import Any, Iterable, List, Optional

from studio.handlers.error_handler import OpenAIImageError

DATA_URI_PREFIX = "data:image/png;base64,"


def _field(item: Any, name: str) -> Optional[str]:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def normalize_images(data: Optional[Iterable[Any]]) -> List[str]:
    """
    Map each upstream image to a URL (verbatim) or a PNG data URI.

    Order and length are preserved and an empty list passes through; deciding
    whether zero images is a failure is left to the caller. An item carrying
    neither field fails the whole call.
    """
    urls: List[str] = []
    for item in data or []:
        url = _field(item, "url")
        if url:
            urls.append(url)
            continue
        b64 = _field(item, "b64_json")
        if b64:
            urls.append(f"{DATA_URI_PREFIX}{b64}")
            continue
        raise OpenAIImageError(
            message="Invalid response format from OpenAI API",
            error_type="invalid_response",
        )
    return urls

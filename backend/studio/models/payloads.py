"""Upstream call payloads, one concrete type per (operation, model) pair.

Each class only declares the fields its target model accepts and forbids
anything else, so a payload can never carry a parameter the model rejects.
`to_kwargs()` drops unset optionals, so absent fields are omitted rather
than sent as null.
"""

from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel

from studio.models.generate import (
    Background,
    Moderation,
    OutputFormat,
    ResponseFormat,
    Style,
)

# (filename, raw bytes, mime type) as accepted by the OpenAI SDK
Upload = Tuple[str, bytes, str]

ClassicQuality = Literal["standard", "hd"]
NativeQuality = Literal["auto", "high", "medium", "low"]


class UpstreamPayload(BaseModel):
    """Common behaviour for all payload variants."""

    model_config = {"extra": "forbid", "frozen": True}

    def to_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for the SDK call, without unset fields."""
        return self.model_dump(exclude_none=True)


class DallE2Generation(UpstreamPayload):
    model: Literal["dall-e-2"] = "dall-e-2"
    prompt: str
    size: str
    n: int
    response_format: Optional[ResponseFormat] = None
    user: Optional[str] = None


class DallE3Generation(UpstreamPayload):
    model: Literal["dall-e-3"] = "dall-e-3"
    prompt: str
    size: str
    n: Literal[1] = 1
    quality: Optional[ClassicQuality] = None
    style: Optional[Style] = None
    response_format: Optional[ResponseFormat] = None
    user: Optional[str] = None


class GptImage1Generation(UpstreamPayload):
    """Always answers with base64, so there is no `response_format`."""

    model: Literal["gpt-image-1"] = "gpt-image-1"
    prompt: str
    size: str
    n: int
    quality: Optional[NativeQuality] = None
    output_format: Optional[OutputFormat] = None
    output_compression: Optional[int] = None
    background: Optional[Background] = None
    moderation: Optional[Moderation] = None
    user: Optional[str] = None


class DallE2Edit(UpstreamPayload):
    model: Literal["dall-e-2"] = "dall-e-2"
    prompt: str
    size: str
    n: int
    image: Upload
    mask: Optional[Upload] = None
    response_format: Optional[ResponseFormat] = None
    user: Optional[str] = None


class GptImage1Edit(UpstreamPayload):
    model: Literal["gpt-image-1"] = "gpt-image-1"
    prompt: str
    size: str
    n: int
    image: Union[Upload, List[Upload]]
    mask: Optional[Upload] = None
    quality: Optional[NativeQuality] = None
    output_format: Optional[OutputFormat] = None
    output_compression: Optional[int] = None
    background: Optional[Background] = None
    user: Optional[str] = None


class DallE2Variation(UpstreamPayload):
    model: Literal["dall-e-2"] = "dall-e-2"
    image: Upload
    n: int
    size: str
    response_format: ResponseFormat = "url"
    user: Optional[str] = None


GenerationPayload = Union[DallE2Generation, DallE3Generation, GptImage1Generation]
EditPayload = Union[DallE2Edit, GptImage1Edit]

"""Pydantic models for the generation, flower-template and batch endpoints."""

from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Literal, Optional

GenerationModel = Literal[
    "dall-e-2", "dall-e-3", "gpt-image-1", "gemini-2.5-flash-image-preview"
]
Quality = Literal["standard", "hd", "auto", "high", "medium", "low"]
Style = Literal["vivid", "natural"]
ResponseFormat = Literal["url", "b64_json"]
OutputFormat = Literal["png", "jpeg", "webp"]
Background = Literal["auto", "transparent", "opaque"]
Moderation = Literal["auto", "low"]

MODEL_CONFIG = {
    "populate_by_name": True,
    "str_strip_whitespace": True,
    "extra": "ignore",
}


class GenerationOptions(BaseModel):
    """Options shared by every text-to-image request."""

    model: GenerationModel = "dall-e-2"
    size: str = "512x512"
    n: int = Field(default=1, ge=1, le=10)
    quality: Optional[Quality] = None
    style: Optional[Style] = None
    response_format: Optional[ResponseFormat] = None
    output_format: Optional[OutputFormat] = None
    output_compression: Optional[int] = Field(default=None, ge=0, le=100)
    background: Optional[Background] = None
    moderation: Optional[Moderation] = None
    user: Optional[str] = None

    model_config = MODEL_CONFIG


class GenerateRequest(GenerationOptions):
    """Payload for `/api/generate`."""

    prompt: str

    @field_validator("prompt")
    def prompt_must_not_be_blank(cls, value: str) -> str:
        """Ensure the prompt has meaningful text before processing."""
        if not value.strip():
            raise ValueError("Prompt is required")
        return value


class FlowerGenerateRequest(GenerationOptions):
    """Payload for `/api/flower-generate`: a template plus its variables."""

    template_id: str = Field(alias="templateId", min_length=1)
    variables: Dict[str, str] = Field(default_factory=dict)
    size: str = "1024x1024"
    # Drive file ids from the browser; Drive access is not handled server-side.
    reference_images: Optional[List[str]] = Field(
        default=None, alias="referenceImages"
    )


class BatchItem(BaseModel):
    """One independent unit of work in a batch request."""

    reference_image_id: str = Field(alias="referenceImageId", min_length=1)
    variables: Dict[str, str] = Field(default_factory=dict)

    model_config = MODEL_CONFIG


class BatchFlowerRequest(GenerationOptions):
    """Payload for `/api/batch-flower-generate`."""

    template_id: str = Field(alias="templateId", min_length=1)
    items: List[BatchItem] = Field(min_length=1)
    size: str = "1024x1024"


class BatchResult(BaseModel):
    """Outcome of one batch item; `error` is set only when the item failed."""

    reference_image_id: str = Field(alias="referenceImageId")
    variables: Dict[str, str] = Field(default_factory=dict)
    processed_prompt: str = Field(default="", alias="processedPrompt")
    image_urls: List[str] = Field(default_factory=list, alias="imageUrls")
    error: Optional[str] = None

    model_config = {"populate_by_name": True}


class ImageUrlsResponse(BaseModel):
    """Uniform response: ordered image URLs or `data:` URIs."""

    image_urls: List[str] = Field(default_factory=list, alias="imageUrls")

    model_config = {"populate_by_name": True}


class BatchResponse(BaseModel):
    """Response envelope for batch generation, in submission order."""

    results: List[BatchResult] = Field(default_factory=list)


class TemplateVariable(BaseModel):
    name: str
    placeholder: str = ""
    default_value: str = Field(default="", alias="defaultValue")

    model_config = {"populate_by_name": True}


class FlowerTemplate(BaseModel):
    """A prompt template with `{{variable}}` placeholders."""

    id: str
    name: str
    description: str = ""
    variables: List[TemplateVariable] = Field(default_factory=list)
    prompt_template: str = Field(alias="promptTemplate")

    model_config = {"populate_by_name": True}


class TemplatesResponse(BaseModel):
    templates: List[FlowerTemplate] = Field(default_factory=list)

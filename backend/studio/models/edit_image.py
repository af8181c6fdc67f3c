"""Form models for the multipart edit and variation endpoints."""

from fastapi import Form
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from typing import Any, Dict, Literal, Optional, Type, TypeVar

from studio.models.generate import (
    MODEL_CONFIG,
    Background,
    OutputFormat,
    ResponseFormat,
)

EditModel = Literal["dall-e-2", "gpt-image-1"]
EditQuality = Literal["standard", "high", "medium", "low", "auto"]
VariationSize = Literal["256x256", "512x512", "1024x1024"]

FormModel = TypeVar("FormModel", bound="_FormFields")


class _FormFields(BaseModel):
    """Browsers post unset selects as empty strings; treat them as absent."""

    model_config = MODEL_CONFIG

    @model_validator(mode="before")
    @classmethod
    def drop_blank_fields(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {
                key: value
                for key, value in data.items()
                if not (isinstance(value, str) and value.strip() == "")
            }
        return data


class EditRequest(_FormFields):
    """Text fields of `/api/edit`; images travel as separate upload parts."""

    prompt: str
    model: EditModel = "dall-e-2"
    size: str = "1024x1024"
    n: int = Field(default=1, ge=1, le=10)
    quality: Optional[EditQuality] = None
    response_format: Optional[ResponseFormat] = None
    output_format: Optional[OutputFormat] = None
    output_compression: Optional[int] = Field(default=None, ge=0, le=100)
    background: Optional[Background] = None
    user: Optional[str] = None

    @field_validator("prompt")
    def prompt_must_not_be_blank(cls, value: str) -> str:
        """Ensure the edit prompt has meaningful text before processing."""
        if not value.strip():
            raise ValueError("Edit prompt is required")
        return value


class VariationRequest(_FormFields):
    """Text fields of `/api/variations`; the source image is a separate part."""

    n: int = Field(default=1, ge=1, le=10)
    size: VariationSize = "1024x1024"
    response_format: ResponseFormat = "url"
    user: Optional[str] = None


def _from_form(model: Type[FormModel], fields: Dict[str, Any]) -> FormModel:
    """Validate raw form strings, reporting failures like any body error."""
    try:
        return model.model_validate(
            {key: value for key, value in fields.items() if value is not None}
        )
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False)) from exc


def edit_form(
    prompt: Optional[str] = Form(default=None),
    model: Optional[str] = Form(default=None),
    size: Optional[str] = Form(default=None),
    n: Optional[str] = Form(default=None),
    quality: Optional[str] = Form(default=None),
    response_format: Optional[str] = Form(default=None),
    output_format: Optional[str] = Form(default=None),
    output_compression: Optional[str] = Form(default=None),
    background: Optional[str] = Form(default=None),
    user: Optional[str] = Form(default=None),
) -> EditRequest:
    """FastAPI dependency reading the edit form fields."""
    return _from_form(EditRequest, locals())


def variation_form(
    n: Optional[str] = Form(default=None),
    size: Optional[str] = Form(default=None),
    response_format: Optional[str] = Form(default=None),
    user: Optional[str] = Form(default=None),
) -> VariationRequest:
    """FastAPI dependency reading the variation form fields."""
    return _from_form(VariationRequest, locals())

"""API routes for image generation, template batches, edits and variations."""

from fastapi import APIRouter, Depends, File, UploadFile
from typing import Any, Dict, List, Optional

from studio.config.capabilities import ModelCatalog
from studio.config.settings import Settings, get_settings
from studio.handlers.error_handler import InvalidRequestError
from studio.models.edit_image import (
    EditRequest,
    VariationRequest,
    edit_form,
    variation_form,
)
from studio.models.generate import (
    BatchFlowerRequest,
    BatchResponse,
    FlowerGenerateRequest,
    GenerateRequest,
    ImageUrlsResponse,
    TemplatesResponse,
)
from studio.services.edit_service.editor import Editor
from studio.services.edit_service.main import ImageEditing as ie
from studio.services.edit_service.uploads import (
    EDIT_IMAGE_TYPES,
    MASK_TYPES,
    VARIATION_IMAGE_TYPES,
    read_upload,
)
from studio.services.image_generation_service.generate import Generation
from studio.services.image_generation_service.main import ImageGeneration as ig
from studio.services.prompt_service.templates import TemplateStore
from studio.utility.logger import AppLogger

router = APIRouter(prefix="/api", tags=["Image"])
logger = AppLogger.get_logger(__name__)


@router.get("/templates", response_model=TemplatesResponse)
async def list_templates(
    store: TemplateStore = Depends(ig.get_templates),
) -> TemplatesResponse:
    """Return the flower templates so clients can render variable forms."""
    return TemplatesResponse(templates=store.list_templates())


@router.get("/models")
async def list_models(
    catalog: ModelCatalog = Depends(ig.get_model_catalog),
) -> Dict[str, Any]:
    """Return per-model capabilities (sizes, quality vocabulary, options)."""
    return {"models": catalog.get_options()}


@router.post("/generate", response_model=ImageUrlsResponse)
async def generate(
    payload: GenerateRequest,
    service: Generation = Depends(ig.get_image_generation),
) -> ImageUrlsResponse:
    """Generate images from a free-text prompt."""
    logger.info(f"Generate request: model={payload.model} n={payload.n} size={payload.size}")
    image_urls = await service.generate_image(context=payload)
    return ImageUrlsResponse(image_urls=image_urls)


@router.post("/flower-generate", response_model=ImageUrlsResponse)
async def flower_generate(
    payload: FlowerGenerateRequest,
    service: Generation = Depends(ig.get_image_generation),
) -> ImageUrlsResponse:
    """Generate images from a flower template and its variables."""
    logger.info(
        f"Flower request: template={payload.template_id} model={payload.model}"
    )
    image_urls = await service.generate_flower(context=payload)
    return ImageUrlsResponse(image_urls=image_urls)


@router.post("/batch-flower-generate", response_model=BatchResponse)
async def batch_flower_generate(
    payload: BatchFlowerRequest,
    service: Generation = Depends(ig.get_image_generation),
) -> BatchResponse:
    """Generate one result per item; failed items carry an `error` instead."""
    results = await service.generate_batch(context=payload)
    return BatchResponse(results=results)


@router.post("/edit", response_model=ImageUrlsResponse)
async def edit_image(
    payload: EditRequest = Depends(edit_form),
    image: Optional[List[UploadFile]] = File(default=None),
    mask: Optional[UploadFile] = File(default=None),
    settings: Settings = Depends(get_settings),
    service: Editor = Depends(ie.get_editor),
) -> ImageUrlsResponse:
    """
    Edit up to 16 source images (repeated `image` part) with an optional
    `mask` part. dall-e-2 takes exactly one source image.
    """
    service.check_image_count(payload, len(image or []))
    sources = [
        await read_upload(
            f, EDIT_IMAGE_TYPES, settings.max_upload_bytes, f"original image {i}"
        )
        for i, f in enumerate(image or [])
    ]
    mask_bytes = (
        await read_upload(mask, MASK_TYPES, settings.max_upload_bytes, "mask")
        if mask is not None
        else None
    )
    logger.info(
        f"Edit request: model={payload.model} images={len(sources)} "
        f"mask={'yes' if mask_bytes else 'no'}"
    )
    image_urls = await service.edit_image(payload, sources, mask_bytes)
    return ImageUrlsResponse(image_urls=image_urls)


@router.post("/variations", response_model=ImageUrlsResponse)
async def create_variations(
    payload: VariationRequest = Depends(variation_form),
    image: Optional[UploadFile] = File(default=None),
    settings: Settings = Depends(get_settings),
    service: Editor = Depends(ie.get_editor),
) -> ImageUrlsResponse:
    """Create variations of a single PNG image."""
    if image is None:
        raise InvalidRequestError("Image file is required")
    source = await read_upload(
        image, VARIATION_IMAGE_TYPES, settings.max_upload_bytes, "variation image"
    )
    logger.info(f"Variation request: n={payload.n} size={payload.size}")
    image_urls = await service.create_variations(payload, source)
    return ImageUrlsResponse(image_urls=image_urls)

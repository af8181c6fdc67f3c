"""Editing service: masked/multi-image edits and single-image variations."""

import time
from typing import List, Optional, Sequence

from studio.config.capabilities import MAX_SOURCE_IMAGES, ModelCatalog
from studio.config.settings import Settings
from studio.handlers.error_handler import InvalidRequestError
from studio.models.edit_image import EditRequest, VariationRequest
from studio.services.edit_service.uploads import (
    mask_upload,
    source_uploads,
    variation_upload,
)
from studio.services.image_generation_service.image_client import OpenAIImageClient
from studio.services.image_generation_service.resolver import ParameterResolver
from studio.utility.logger import AppLogger

logger = AppLogger.get_logger(__name__)


class Editor:
    """Run edit and variation requests against the OpenAI Images API.

    Steps run strictly in order: validate, check credentials, classify
    files, resolve the payload, call upstream, normalize.
    """

    def __init__(
        self,
        settings: Settings,
        images: Optional[OpenAIImageClient] = None,
        catalog: Optional[ModelCatalog] = None,
    ):
        """Initialize collaborators, building defaults from settings."""
        self.catalog = catalog or ModelCatalog()
        self.resolver = ParameterResolver(self.catalog)
        self.images = images or OpenAIImageClient(settings)

    async def close(self) -> None:
        """Release the OpenAI client once the request is done."""
        await self.images.close()

    def check_image_count(self, context: EditRequest, image_count: int) -> None:
        """
        Reject a source image count the model cannot take. Safe to call
        before any upload is read.
        """
        if image_count == 0:
            raise InvalidRequestError("At least one original image is required")

        limit = min(self.catalog.get(context.model).max_edit_images, MAX_SOURCE_IMAGES)
        if image_count > limit:
            raise InvalidRequestError(
                f"{context.model} accepts at most {limit} original image(s), "
                f"got {image_count}",
                details={"max_images": limit},
            )

    def _validate_edit(self, context: EditRequest, image_count: int) -> None:
        """Check source image count and size against the selected model."""
        self.check_image_count(context, image_count)
        if not self.catalog.supports_size(context.model, context.size):
            raise InvalidRequestError(
                f"Size '{context.size}' is not supported by {context.model}",
                details={"supported_sizes": list(self.catalog.get(context.model).sizes)},
            )

    async def edit_image(
        self,
        context: EditRequest,
        images: Sequence[bytes],
        mask: Optional[bytes] = None,
    ) -> List[str]:
        """Edit one or more source images, optionally restricted by a mask."""
        start = time.time()
        self._validate_edit(context, len(images))
        self.images.ensure_configured()

        payload = self.resolver.resolve_edit(
            context, source_uploads(images), mask_upload(mask)
        )
        urls = await self.images.edit(payload)
        logger.info(f"Edited into {len(urls)} image(s) in {time.time() - start:.3f}s")
        return urls

    async def create_variations(
        self, context: VariationRequest, image: bytes
    ) -> List[str]:
        """Create `n` variations of a single PNG source image."""
        start = time.time()
        self.images.ensure_configured()

        payload = self.resolver.resolve_variation(context, variation_upload(image))
        urls = await self.images.create_variation(payload)
        logger.info(
            f"Created {len(urls)} variation(s) in {time.time() - start:.3f}s"
        )
        return urls

"""Factories for image generation dependencies and catalog providers."""

from typing import AsyncIterator

from studio.config.capabilities import ModelCatalog
from studio.config.settings import get_settings
from studio.services.image_generation_service.generate import Generation
from studio.services.prompt_service.templates import TemplateStore


class ImageGeneration:
    """Expose dependency providers for generation and configuration.

    Keeps FastAPI dependency wiring concise and centralized; tests swap
    these out through `app.dependency_overrides`.
    """

    @staticmethod
    async def get_image_generation() -> AsyncIterator[Generation]:
        """Provide a Generation service and close its clients after the request."""
        service = Generation(settings=get_settings())
        try:
            yield service
        finally:
            await service.close()

    @staticmethod
    def get_templates() -> TemplateStore:
        """Return the flower template store."""
        return TemplateStore()

    @staticmethod
    def get_model_catalog() -> ModelCatalog:
        """Return the model capability catalog."""
        return ModelCatalog()

"""Orchestrates plain, template-driven and batch image generation."""

import time
from typing import List, Optional

from studio.config.capabilities import GEMINI_FLASH_IMAGE, ModelCatalog
from studio.config.settings import Settings
from studio.handlers.error_handler import InvalidRequestError
from studio.models.generate import (
    BatchFlowerRequest,
    BatchResult,
    FlowerGenerateRequest,
    GenerateRequest,
    GenerationOptions,
)
from studio.services.batch_service.orchestrator import BatchOrchestrator
from studio.services.image_generation_service.image_client import OpenAIImageClient
from studio.services.image_generation_service.resolver import ParameterResolver
from studio.services.prompt_service.gemini_client import GeminiClient
from studio.services.prompt_service.templates import TemplateStore
from studio.utility.logger import AppLogger

logger = AppLogger.get_logger(__name__)


class Generation:
    """Coordinate validation, prompt preparation and dispatch for generation.

    Every step of a single request runs in sequence: validate, check
    credentials, resolve the payload, call upstream, normalize. Only the
    batch flow fans out, one task per item.
    """

    def __init__(
        self,
        settings: Settings,
        images: Optional[OpenAIImageClient] = None,
        gemini: Optional[GeminiClient] = None,
        templates: Optional[TemplateStore] = None,
        catalog: Optional[ModelCatalog] = None,
        orchestrator: Optional[BatchOrchestrator] = None,
    ):
        """Wire collaborators from settings unless they are injected."""
        self.catalog = catalog or ModelCatalog()
        self.resolver = ParameterResolver(self.catalog)
        self.images = images or OpenAIImageClient(settings)
        self.gemini = gemini or GeminiClient(api_key=settings.gemini_api_key)
        self.templates = templates or TemplateStore()
        self.orchestrator = orchestrator or BatchOrchestrator()

    async def close(self) -> None:
        """Release the vendor clients once the request is done."""
        await self.images.close()
        await self.gemini.close()

    def _validate(self, options: GenerationOptions, allow_rewrite: bool) -> None:
        """Reject endpoint/model pairings and sizes the target model cannot serve."""
        if options.model == GEMINI_FLASH_IMAGE and not allow_rewrite:
            raise InvalidRequestError(
                "Gemini model is only available for flower generation"
            )
        if not self.catalog.supports_size(options.model, options.size):
            image_model = self.catalog.image_model(options.model)
            raise InvalidRequestError(
                f"Size '{options.size}' is not supported by {image_model}",
                details={"supported_sizes": list(self.catalog.get(image_model).sizes)},
            )

    async def _render(self, options: GenerationOptions, prompt: str) -> List[str]:
        """
        Generate pixels for `prompt`. The Gemini model always takes two hops:
        a text rewrite, then the image-native OpenAI model.
        """
        if options.model == GEMINI_FLASH_IMAGE:
            enhanced = await self.gemini.enhance_prompt(prompt)
            payload = self.resolver.resolve_generation(
                options, enhanced, model=self.catalog.image_model(options.model)
            )
        else:
            payload = self.resolver.resolve_generation(options, prompt)
        return await self.images.generate(payload)

    async def generate_image(self, context: GenerateRequest) -> List[str]:
        """Generate images for a free-text prompt."""
        start = time.time()
        self._validate(context, allow_rewrite=False)
        self.images.ensure_configured()

        payload = self.resolver.resolve_generation(context, context.prompt)
        urls = await self.images.generate(payload)
        logger.info(f"Generated {len(urls)} image(s) in {time.time() - start:.3f}s")
        return urls

    async def generate_flower(self, context: FlowerGenerateRequest) -> List[str]:
        """Render a flower template with the caller's variables and generate."""
        start = time.time()
        self._validate(context, allow_rewrite=True)
        self.images.ensure_configured()

        template = self.templates.get(context.template_id)
        prompt = self.templates.render(template, context.variables)
        urls = await self._render(context, prompt)
        logger.info(
            f"Generated {len(urls)} '{template.id}' image(s) in "
            f"{time.time() - start:.3f}s"
        )
        return urls

    async def generate_batch(self, context: BatchFlowerRequest) -> List[BatchResult]:
        """Generate every batch item concurrently; item failures stay local."""
        self._validate(context, allow_rewrite=True)
        self.images.ensure_configured()

        template = self.templates.get(context.template_id)
        logger.info(
            f"Starting batch of {len(context.items)} '{template.id}' item(s) "
            f"with {context.model}"
        )

        return await self.orchestrator.run(
            context.items,
            resolve_prompt=lambda item: self.templates.render(template, item.variables),
            generate=lambda prompt: self._render(context, prompt),
        )

"""Thin async wrapper over the OpenAI Images API."""

from typing import Any, List

from openai import AsyncOpenAI

from studio.config.settings import Settings
from studio.handlers.error_handler import ConfigurationError, MapExceptions
from studio.models.payloads import DallE2Variation, EditPayload, GenerationPayload
from studio.services.image_generation_service.normalizer import normalize_images
from studio.utility.logger import AppLogger

logger = AppLogger.get_logger(__name__)


class OpenAIImageClient:
    """Dispatch resolved payloads and normalize what comes back.

    One SDK client is built lazily per instance and shared by every call it
    makes (a whole batch included); `close()` releases it at the end of the
    request. Failures are mapped once and never retried.
    """

    def __init__(self, settings: Settings, client: Any = None):
        """Keep settings and an optional pre-built SDK client (used by tests)."""
        self.settings = settings
        self._client = client
        self._owns_client = client is None
        self.exceptions = MapExceptions()

    def ensure_configured(self) -> str:
        """Fail fast when the OpenAI key is missing or not a secret key."""
        if not self.settings.openai_configured:
            raise ConfigurationError("OpenAI API key not configured on server")
        return self.settings.openai_api_key

    def make_openai_client(self):
        api_key = self.ensure_configured()
        if self._client is None:
            self._client = AsyncOpenAI(api_key=api_key)
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        """Close the SDK client if this instance built it."""
        if self._owns_client and self._client is not None:
            await self._client.close()
            self._client = None

    async def generate(self, payload: GenerationPayload) -> List[str]:
        """Call `images.generate` with the resolved payload."""
        client = self.make_openai_client()
        logger.info(f"Generating {payload.n} image(s) with {payload.model}")
        try:
            logger.debug(f"Upstream fields: {sorted(payload.to_kwargs())}")
            resp = await client.images.generate(**payload.to_kwargs())
        except Exception as e:
            raise self.exceptions.map_openai_exception(e, "generate image")
        return normalize_images(getattr(resp, "data", None))

    async def edit(self, payload: EditPayload) -> List[str]:
        """Call `images.edit` with labelled source images and optional mask."""
        client = self.make_openai_client()
        sources = len(payload.image) if isinstance(payload.image, list) else 1
        logger.info(
            f"Editing {sources} source image(s) with {payload.model}, "
            f"mask={'yes' if payload.mask else 'no'}"
        )
        try:
            logger.debug(f"Upstream fields: {sorted(payload.to_kwargs())}")
            resp = await client.images.edit(**payload.to_kwargs())
        except Exception as e:
            raise self.exceptions.map_openai_exception(e, "edit image")
        return normalize_images(getattr(resp, "data", None))

    async def create_variation(self, payload: DallE2Variation) -> List[str]:
        """Call `images.create_variation` for a single source image."""
        client = self.make_openai_client()
        logger.info(f"Creating {payload.n} variation(s) at {payload.size}")
        try:
            logger.debug(f"Upstream fields: {sorted(payload.to_kwargs())}")
            resp = await client.images.create_variation(**payload.to_kwargs())
        except Exception as e:
            raise self.exceptions.map_openai_exception(
                e, "create image variations"
            )
        return normalize_images(getattr(resp, "data", None))


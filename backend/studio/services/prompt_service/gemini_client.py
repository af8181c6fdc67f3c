"""Gemini text client used to rewrite template prompts before image generation."""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from google import genai
from google.genai import types

from studio.config.capabilities import GEMINI_TEXT_MODEL
from studio.handlers.error_handler import (
    ConfigurationError,
    GeminiImageError,
    MapExceptions,
)
from studio.utility.utils import Helper
from studio.utility.logger import AppLogger

logger = AppLogger.get_logger(__name__)


class GeminiClient:
    """Helper client for prompt enhancement through Gemini.

    Gemini is not used for pixels here: it only returns a richer text prompt,
    which is then rendered by the OpenAI image-native model.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = GEMINI_TEXT_MODEL,
        client: Any = None,
    ):
        """Keep the key and an optional pre-built SDK client (used by tests)."""
        self.api_key = api_key
        self.model = model
        self._client = client
        self._owns_client = client is None
        self.map_exception = MapExceptions()
        self.utility = Helper()

    def _get_api_key(self) -> str:
        if not self.api_key:
            raise ConfigurationError("Gemini API key not configured on server")
        return self.api_key

    def make_gemini_client(self):
        """Return the cached client, building it on first use; fails fast without a key."""
        api_key = self._get_api_key()
        if self._client is None:
            self._client = genai.Client(api_key=api_key)
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        """Release the async transport of a client this instance built."""
        if self._owns_client and self._client is not None:
            await self._client.aio.aclose()
            self._client = None

    def build_contents(
        self, prompt: str, reference_images: Optional[Sequence[bytes]] = None
    ) -> List[types.Content]:
        """
        Instruction text, plus inline PNG references when supplied.

        No endpoint passes reference images yet: `referenceImages` are Drive
        ids and Drive access is not handled server-side.
        """
        instruction = self.utility.load_template(template="rewrite").format(
            prompt=prompt
        )
        parts = [types.Part(text=instruction)]
        if reference_images:
            note = self.utility.load_template(template="reference_note")
            parts.insert(0, types.Part(text=note))
            for image in reference_images:
                parts.append(types.Part.from_bytes(data=image, mime_type="image/png"))
        return [types.Content(role="user", parts=parts)]

    @staticmethod
    def _extract_text(resp: Any) -> str:
        if getattr(resp, "text", None):
            return resp.text

        candidates = getattr(resp, "candidates", None) or []
        if not candidates:
            return ""
        content = getattr(candidates[0], "content", None)
        parts = getattr(content, "parts", None) or []
        return "\n".join(p.text for p in parts if getattr(p, "text", None))

    async def enhance_prompt(
        self, prompt: str, reference_images: Optional[Sequence[bytes]] = None
    ) -> str:
        """Ask Gemini for a detailed image-generation prompt based on `prompt`."""
        client = self.make_gemini_client()
        contents = self.build_contents(prompt, reference_images)

        logger.info(f"Rewriting prompt with {self.model}")
        try:
            resp = await client.aio.models.generate_content(
                model=self.model,
                contents=contents,
                config=types.GenerateContentConfig(
                    temperature=0.7,
                    top_k=32,
                    top_p=1,
                    max_output_tokens=8192,
                ),
            )
        except Exception as e:
            raise self.map_exception.map_gemini_exception(e)

        text = self._extract_text(resp).strip()
        if not text:
            raise GeminiImageError(
                message="Gemini returned an empty prompt.",
                error_type="invalid_response",
            )
        return text

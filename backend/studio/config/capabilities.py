"""Per-model capability catalog for the OpenAI Images API and the Gemini shim."""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

DALL_E_2 = "dall-e-2"
DALL_E_3 = "dall-e-3"
GPT_IMAGE_1 = "gpt-image-1"
GEMINI_FLASH_IMAGE = "gemini-2.5-flash-image-preview"
GEMINI_TEXT_MODEL = "gemini-2.5-flash"

VARIATION_MODEL = DALL_E_2
VARIATION_SIZES = ("256x256", "512x512", "1024x1024")
MAX_SOURCE_IMAGES = 16


@dataclass(frozen=True)
class ModelCapabilities:
    """What a single model accepts on the generation and edit endpoints."""

    name: str
    sizes: Tuple[str, ...]
    qualities: Tuple[str, ...] = ()
    accepts_style: bool = False
    accepts_response_format: bool = False
    accepts_output_options: bool = False
    accepts_moderation: bool = False
    fixed_count: Optional[int] = None
    max_edit_images: int = 0
    direct_generation: bool = True


class ModelCatalog:
    """Static lookup of model capabilities.

    The Gemini entry never produces pixels itself: it is routed through a
    prompt rewrite and then rendered by its `image_model`.
    """

    def __init__(self):
        """Register the supported models."""
        self.models: Dict[str, ModelCapabilities] = {
            DALL_E_2: ModelCapabilities(
                name=DALL_E_2,
                sizes=("256x256", "512x512", "1024x1024"),
                accepts_response_format=True,
                max_edit_images=1,
            ),
            DALL_E_3: ModelCapabilities(
                name=DALL_E_3,
                sizes=("1024x1024", "1792x1024", "1024x1792"),
                qualities=("standard", "hd"),
                accepts_style=True,
                accepts_response_format=True,
                fixed_count=1,
            ),
            GPT_IMAGE_1: ModelCapabilities(
                name=GPT_IMAGE_1,
                sizes=("auto", "1024x1024", "1536x1024", "1024x1536"),
                qualities=("auto", "high", "medium", "low"),
                accepts_output_options=True,
                accepts_moderation=True,
                max_edit_images=MAX_SOURCE_IMAGES,
            ),
            GEMINI_FLASH_IMAGE: ModelCapabilities(
                name=GEMINI_FLASH_IMAGE,
                sizes=(),
                direct_generation=False,
            ),
        }
        self.image_model_for = {GEMINI_FLASH_IMAGE: GPT_IMAGE_1}

    def get(self, name: str) -> ModelCapabilities:
        """Return the capabilities of `name`, raising KeyError for unknown models."""
        return self.models[name]

    def image_model(self, name: str) -> str:
        """Return the model that actually renders pixels for `name`."""
        return self.image_model_for.get(name, name)

    def supports_size(self, name: str, size: str) -> bool:
        """Check `size` against the rendering model's allow-list."""
        return size in self.get(self.image_model(name)).sizes

    def get_options(self) -> Dict[str, Dict[str, object]]:
        """Return the catalog in a JSON-friendly form for clients."""
        return {
            name: {
                "sizes": list(caps.sizes),
                "qualities": list(caps.qualities),
                "style": caps.accepts_style,
                "response_format": caps.accepts_response_format,
                "output_options": caps.accepts_output_options,
                "moderation": caps.accepts_moderation,
                "max_edit_images": caps.max_edit_images,
                "image_model": self.image_model(name),
            }
            for name, caps in self.models.items()
        }

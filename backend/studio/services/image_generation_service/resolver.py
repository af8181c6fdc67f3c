"""Resolve validated requests into model-specific OpenAI Images API payloads."""

from typing import Optional, Sequence

from studio.config.capabilities import (
    DALL_E_2,
    DALL_E_3,
    GPT_IMAGE_1,
    ModelCatalog,
)
from studio.models.edit_image import EditRequest, VariationRequest
from studio.models.generate import GenerationOptions
from studio.models.payloads import (
    DallE2Edit,
    DallE2Generation,
    DallE2Variation,
    DallE3Generation,
    EditPayload,
    GenerationPayload,
    GptImage1Edit,
    GptImage1Generation,
    Upload,
)


class ParameterResolver:
    """Build the exact upstream payload for a request and a target model.

    Pure transform: no I/O, no retries, no hidden state. Requests must
    already be validated (endpoint/model pairing, size, image count);
    options the target model does not understand are dropped here.
    """

    def __init__(self, catalog: Optional[ModelCatalog] = None):
        """Use the shared capability catalog unless one is injected."""
        self.catalog = catalog or ModelCatalog()

    @staticmethod
    def _user(value: Optional[str]) -> Optional[str]:
        return value or None

    def _quality(self, model: str, quality: Optional[str]) -> Optional[str]:
        """Keep `quality` only when it belongs to the model's vocabulary."""
        if quality and quality in self.catalog.get(model).qualities:
            return quality
        return None

    def resolve_generation(
        self, options: GenerationOptions, prompt: str, model: Optional[str] = None
    ) -> GenerationPayload:
        """
        Resolve a text-to-image call.

        `model` overrides `options.model`; the flower flows use it to render
        a rewritten prompt on the image-native model.
        """
        model = model or options.model
        user = self._user(options.user)

        if model == DALL_E_2:
            return DallE2Generation(
                prompt=prompt,
                size=options.size,
                n=options.n,
                response_format=options.response_format,
                user=user,
            )
        if model == DALL_E_3:
            return DallE3Generation(
                prompt=prompt,
                size=options.size,
                quality=self._quality(model, options.quality),
                style=options.style,
                response_format=options.response_format,
                user=user,
            )
        if model == GPT_IMAGE_1:
            return GptImage1Generation(
                prompt=prompt,
                size=options.size,
                n=options.n,
                quality=self._quality(model, options.quality),
                output_format=options.output_format,
                output_compression=options.output_compression,
                background=options.background,
                moderation=options.moderation,
                user=user,
            )
        raise ValueError(f"Model '{model}' cannot generate images directly")

    def resolve_edit(
        self,
        request: EditRequest,
        images: Sequence[Upload],
        mask: Optional[Upload] = None,
    ) -> EditPayload:
        """Resolve an edit call from labelled source images and an optional mask."""
        if not images:
            raise ValueError("At least one source image is required")
        user = self._user(request.user)

        if request.model == DALL_E_2:
            return DallE2Edit(
                prompt=request.prompt,
                size=request.size,
                n=request.n,
                image=images[0],
                mask=mask,
                response_format=request.response_format,
                user=user,
            )
        if request.model == GPT_IMAGE_1:
            return GptImage1Edit(
                prompt=request.prompt,
                size=request.size,
                n=request.n,
                image=images[0] if len(images) == 1 else list(images),
                mask=mask,
                quality=self._quality(GPT_IMAGE_1, request.quality),
                output_format=request.output_format,
                output_compression=request.output_compression,
                background=request.background,
                user=user,
            )
        raise ValueError(f"Model '{request.model}' does not support edits")

    def resolve_variation(
        self, request: VariationRequest, image: Upload
    ) -> DallE2Variation:
        """Resolve a variation call; there is a single upstream model."""
        return DallE2Variation(
            image=image,
            n=request.n,
            size=request.size,
            response_format=request.response_format,
            user=self._user(request.user),
        )

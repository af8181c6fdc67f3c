"""Tests for per-model payload resolution."""

import pytest

from studio.models.edit_image import EditRequest, VariationRequest
from studio.models.generate import GenerateRequest
from studio.models.payloads import (
    DallE2Edit,
    DallE2Generation,
    DallE3Generation,
    GptImage1Edit,
    GptImage1Generation,
)
from studio.services.image_generation_service.resolver import ParameterResolver

PNG = ("image0.png", b"\x89PNG", "image/png")


class TestResolveGeneration:
    def setup_method(self):
        self.resolver = ParameterResolver()

    def test_dall_e_3_always_sends_one_image(self):
        request = GenerateRequest(
            prompt="a fox", model="dall-e-3", size="1024x1024", n=4, quality="hd"
        )
        payload = self.resolver.resolve_generation(request, request.prompt)

        assert isinstance(payload, DallE3Generation)
        kwargs = payload.to_kwargs()
        assert kwargs["n"] == 1
        assert kwargs["quality"] == "hd"
        assert kwargs["model"] == "dall-e-3"

    def test_dall_e_3_drops_native_quality(self):
        request = GenerateRequest(
            prompt="a fox", model="dall-e-3", size="1024x1024", quality="high"
        )
        kwargs = self.resolver.resolve_generation(request, request.prompt).to_kwargs()

        assert "quality" not in kwargs

    def test_gpt_image_1_never_sends_response_format(self):
        request = GenerateRequest(
            prompt="a fox",
            model="gpt-image-1",
            size="1024x1024",
            response_format="url",
            quality="hd",
            output_format="webp",
            output_compression=80,
            moderation="low",
        )
        payload = self.resolver.resolve_generation(request, request.prompt)

        assert isinstance(payload, GptImage1Generation)
        kwargs = payload.to_kwargs()
        assert "response_format" not in kwargs
        assert "quality" not in kwargs
        assert kwargs["output_format"] == "webp"
        assert kwargs["output_compression"] == 80
        assert kwargs["moderation"] == "low"

    def test_dall_e_2_omits_empty_user(self):
        request = GenerateRequest(prompt="a fox", user="", quality="hd", style="vivid")
        payload = self.resolver.resolve_generation(request, request.prompt)

        assert isinstance(payload, DallE2Generation)
        assert payload.to_kwargs() == {
            "model": "dall-e-2",
            "prompt": "a fox",
            "size": "512x512",
            "n": 1,
        }

    def test_model_override(self):
        request = GenerateRequest(
            prompt="a fox", model="gemini-2.5-flash-image-preview", size="1024x1024"
        )
        payload = self.resolver.resolve_generation(
            request, "rewritten", model="gpt-image-1"
        )

        assert payload.to_kwargs()["model"] == "gpt-image-1"
        assert payload.to_kwargs()["prompt"] == "rewritten"

    def test_gemini_cannot_generate_directly(self):
        request = GenerateRequest(
            prompt="a fox", model="gemini-2.5-flash-image-preview", size="1024x1024"
        )
        with pytest.raises(ValueError):
            self.resolver.resolve_generation(request, request.prompt)

    def test_resolution_is_repeatable(self):
        request = GenerateRequest(prompt="a fox", model="gpt-image-1", size="auto", n=2)

        first = self.resolver.resolve_generation(request, request.prompt)
        second = self.resolver.resolve_generation(request, request.prompt)

        assert first == second


class TestResolveEdit:
    def setup_method(self):
        self.resolver = ParameterResolver()

    def test_gpt_image_1_sends_list_and_no_mask_key(self):
        request = EditRequest(prompt="make it blue", model="gpt-image-1")
        images = [PNG, ("image1.jpeg", b"\xff\xd8\xff", "image/jpeg"), PNG]

        payload = self.resolver.resolve_edit(request, images)

        assert isinstance(payload, GptImage1Edit)
        kwargs = payload.to_kwargs()
        assert len(kwargs["image"]) == 3
        assert "mask" not in kwargs
        assert "response_format" not in kwargs

    def test_gpt_image_1_single_image_is_not_wrapped(self):
        request = EditRequest(prompt="make it blue", model="gpt-image-1")
        kwargs = self.resolver.resolve_edit(request, [PNG]).to_kwargs()

        assert kwargs["image"] == PNG

    def test_dall_e_2_edit_with_mask(self):
        request = EditRequest(
            prompt="add a hat", response_format="b64_json", quality="high"
        )
        mask = ("mask.png", b"\x89PNG", "image/png")

        payload = self.resolver.resolve_edit(request, [PNG], mask)

        assert isinstance(payload, DallE2Edit)
        kwargs = payload.to_kwargs()
        assert kwargs["mask"] == mask
        assert kwargs["response_format"] == "b64_json"
        assert "quality" not in kwargs

    def test_edit_requires_images(self):
        with pytest.raises(ValueError):
            self.resolver.resolve_edit(EditRequest(prompt="x"), [])


def test_variation_defaults_to_url():
    resolver = ParameterResolver()
    request = VariationRequest(n=3, size="512x512")

    kwargs = resolver.resolve_variation(
        request, ("image.png", b"\x89PNG", "image/png")
    ).to_kwargs()

    assert kwargs["model"] == "dall-e-2"
    assert kwargs["n"] == 3
    assert kwargs["size"] == "512x512"
    assert kwargs["response_format"] == "url"
    assert "user" not in kwargs


@pytest.mark.parametrize(
    "model,size",
    [("dall-e-2", "512x512"), ("dall-e-3", "1024x1024"), ("gpt-image-1", "1024x1024")],
)
def test_generation_forwards_user(model, size):
    request = GenerateRequest(prompt="a fox", model=model, size=size, user="abc")

    kwargs = ParameterResolver().resolve_generation(request, request.prompt).to_kwargs()

    assert kwargs["user"] == "abc"


@pytest.mark.parametrize("model", ["dall-e-2", "gpt-image-1"])
def test_edit_forwards_user(model):
    request = EditRequest(prompt="add a hat", model=model, user="abc")

    kwargs = ParameterResolver().resolve_edit(request, [PNG]).to_kwargs()

    assert kwargs["user"] == "abc"


def test_variation_forwards_user():
    kwargs = ParameterResolver().resolve_variation(
        VariationRequest(user="abc"), ("image.png", b"\x89PNG", "image/png")
    ).to_kwargs()

    assert kwargs["user"] == "abc"


def test_dall_e_3_forwards_style():
    request = GenerateRequest(
        prompt="a fox", model="dall-e-3", size="1024x1024", style="vivid"
    )

    kwargs = ParameterResolver().resolve_generation(request, request.prompt).to_kwargs()

    assert kwargs["style"] == "vivid"

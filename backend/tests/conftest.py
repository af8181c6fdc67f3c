"""Shared fakes standing in for the OpenAI and Gemini SDK clients."""

from types import SimpleNamespace

import pytest

from studio.config.settings import Settings

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 32
WEBP_BYTES = b"RIFF\x00\x00\x00\x00WEBPVP8 " + b"\x00" * 32


class FakeImages:
    """Records every `images.*` call and answers with canned image data."""

    def __init__(self, data=None, error=None):
        self.calls = []
        self.data = data
        self.error = error

    async def _respond(self, method, kwargs):
        self.calls.append((method, kwargs))
        if self.error is not None:
            raise self.error
        if self.data is not None:
            return SimpleNamespace(data=self.data)
        count = kwargs.get("n") or 1
        return SimpleNamespace(
            data=[
                SimpleNamespace(url=f"https://img.test/{method}/{i}", b64_json=None)
                for i in range(count)
            ]
        )

    async def generate(self, **kwargs):
        return await self._respond("generate", kwargs)

    async def edit(self, **kwargs):
        return await self._respond("edit", kwargs)

    async def create_variation(self, **kwargs):
        return await self._respond("create_variation", kwargs)


class FakeGeminiModels:
    def __init__(self, text="enhanced prompt", error=None):
        self.calls = []
        self.text = text
        self.error = error

    async def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text, candidates=[])


def make_settings(openai_key="sk-test", gemini_key="gemini-test"):
    settings = Settings()
    settings.openai_api_key = openai_key
    settings.gemini_api_key = gemini_key
    return settings


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def fake_images():
    return FakeImages()


@pytest.fixture
def openai_sdk(fake_images):
    return SimpleNamespace(images=fake_images)


@pytest.fixture
def gemini_models():
    return FakeGeminiModels()


@pytest.fixture
def gemini_sdk(gemini_models):
    return SimpleNamespace(aio=SimpleNamespace(models=gemini_models))

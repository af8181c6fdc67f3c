"""Service factory for obtaining editing service instances."""

from typing import AsyncIterator

from studio.config.settings import get_settings
from studio.services.edit_service.editor import Editor


class ImageEditing:
    """Factory wrapper exposing dependency-injected editor instances.

    Keeps FastAPI dependency wiring minimal.
    """

    @staticmethod
    async def get_editor() -> AsyncIterator[Editor]:
        """Provide a configured editor and close its client after the request."""
        editor = Editor(settings=get_settings())
        try:
            yield editor
        finally:
            await editor.close()

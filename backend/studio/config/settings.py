"""Process-level configuration read from the environment and the backend `.env`."""

import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv

from studio.utility.path_finder import Finder

OPENAI_KEY_PREFIX = "sk-"
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


def _as_bool(value: Optional[str], default: bool) -> bool:
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Credentials and server knobs, resolved once per process.

    Keys are only held here; request handlers receive them through
    `get_settings()` and never mutate them.
    """

    def __init__(self):
        """Load `.env` from the backend root and snapshot the relevant variables."""
        env_path = Finder().get_directory("root") / ".env"
        load_dotenv(env_path)

        self.openai_api_key: Optional[str] = os.getenv("OPENAI_API_KEY")
        self.gemini_api_key: Optional[str] = os.getenv("GEMINI_API_KEY")
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")
        self.log_to_file: bool = _as_bool(os.getenv("LOG_TO_FILE"), True)
        self.max_upload_bytes: int = int(
            os.getenv("MAX_UPLOAD_BYTES", str(DEFAULT_MAX_UPLOAD_BYTES))
        )
        self.cors_origins: List[str] = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]

    @property
    def openai_configured(self) -> bool:
        """OpenAI keys are only accepted in their secret-key form."""
        return bool(self.openai_api_key) and self.openai_api_key.startswith(
            OPENAI_KEY_PREFIX
        )

    @property
    def gemini_configured(self) -> bool:
        return bool(self.gemini_api_key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()

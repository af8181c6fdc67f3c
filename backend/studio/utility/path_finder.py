"""Resolve important filesystem paths relative to the backend root."""

from pathlib import Path
from studio.utility.logger import AppLogger

logger = AppLogger.get_logger(__name__)


class PathResolver:
    """
    Folder resolver that returns paths relative to the backend root,
    independent of the current working directory.
    """

    # studio/utility -> studio -> backend
    BACKEND_ROOT = Path(__file__).resolve().parents[2]
    PACKAGE_ROOT = Path(__file__).resolve().parents[1]

    DIR_MAP = {
        "data": BACKEND_ROOT / "data",
        "logs": BACKEND_ROOT / "data" / "logs",
        "config": PACKAGE_ROOT / "config",
        "templates": PACKAGE_ROOT / "config" / "templates.yml",
        "root": BACKEND_ROOT,
    }

    @classmethod
    def get(cls, name: str) -> Path:
        """
        Returns absolute path from name key.
        Ensures directory exists if it's a folder.
        """
        if name not in cls.DIR_MAP:
            msg = f"Unknown directory key: '{name}'. Valid keys: {list(cls.DIR_MAP.keys())}"
            logger.error(msg)
            raise KeyError(msg)

        path = cls.DIR_MAP[name]

        if path.suffix == "":
            path.mkdir(parents=True, exist_ok=True)

        return path


class Finder:
    """Thin wrapper exposing resolved directories for external callers."""

    def get_directory(self, name: str) -> Path:
        """Return a resolved, ensured directory path by logical name."""
        return PathResolver.get(name)

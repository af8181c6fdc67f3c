"""Process logging for the studio backend: colored console, optional warning log file."""

import logging
from logging import Logger
from typing import Optional, Union

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
RESET_COLOR = "\033[0m"

CONSOLE_FORMAT = "%(colored_levelname)s %(name)s | %(message)s"
FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(filename)s:%(lineno)d | %(message)s"
)
DEFAULT_LOG_FILE = "studio_server.log"


class ColorFormatter(logging.Formatter):
    """Console formatter that pads and colors the level name."""

    def format(self, record: logging.LogRecord) -> str:
        padded_level = f"{record.levelname + ':':<9}"
        color = LEVEL_COLORS.get(record.levelname, "")
        record.colored_levelname = (
            f"{color}{padded_level}{RESET_COLOR}" if color else padded_level
        )
        return super().format(record)


class AppLogger:
    """
    Root logger setup for the API process.

    `main_controller` calls `init_from_settings` once at import; every other
    module only asks for `AppLogger.get_logger(__name__)`. Upstream failures
    and rejected requests are logged at WARNING or above, so the file log
    (`data/logs/studio_server.log`) keeps exactly those.
    """

    _configured: bool = False

    @staticmethod
    def resolve_level(
        name: Optional[Union[str, int]], default: int = logging.INFO
    ) -> int:
        """Turn `LOG_LEVEL` values such as "debug" or "WARNING" into a logging constant."""
        if isinstance(name, int):
            return name
        if not name:
            return default
        level = logging.getLevelName(name.strip().upper())
        return level if isinstance(level, int) else default

    @classmethod
    def init(
        cls,
        level: Union[str, int] = logging.INFO,
        log_to_file: bool = False,
        filename: str = DEFAULT_LOG_FILE,
    ) -> None:
        """Configure the root logger once; later calls are ignored."""
        if cls._configured:
            return
        cls._configured = True

        level = cls.resolve_level(level)
        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(ColorFormatter(CONSOLE_FORMAT))
        root_logger.addHandler(console_handler)

        if log_to_file:
            # path_finder logs through this module
            from studio.utility.path_finder import Finder

            file_path = Finder().get_directory("logs") / filename
            file_handler = logging.FileHandler(file_path, encoding="utf-8")
            file_handler.setLevel(logging.WARNING)
            file_handler.setFormatter(
                logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
            )
            root_logger.addHandler(file_handler)

    @classmethod
    def init_from_settings(cls, settings) -> None:
        """Apply `LOG_LEVEL` and `LOG_TO_FILE` as read by `Settings`."""
        cls.init(level=settings.log_level, log_to_file=settings.log_to_file)

    @staticmethod
    def get_logger(name: Optional[str] = None) -> Logger:
        return logging.getLogger(name if name is not None else __name__)

import logging
import sys
from typing import ClassVar, TextIO

from pydantic import ValidationError

from weatherdash.config.env import WeatherEnv

LIBRARY_NAME = "weatherdash"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logging.getLogger(LIBRARY_NAME).addHandler(logging.NullHandler())


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: str = "WARNING", stream: TextIO | None = None) -> None:
    """
    Send weatherdash records to one stream handler (stderr by default).

    Calling it again replaces the previous handler, so the CLI and tests can
    reconfigure freely. Unknown level names fall back to WARNING.
    """
    lib_logger = logging.getLogger(LIBRARY_NAME)
    lib_logger.setLevel(_level_from_name(level))
    for handler in list(lib_logger.handlers):
        lib_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    lib_logger.addHandler(handler)


def configure_logging_from_env() -> None:
    """Apply WEATHERDASH_LOG_LEVEL; without a usable environment keep WARNING."""
    try:
        level = WeatherEnv().weatherdash_log_level
    except ValidationError:
        level = "WARNING"
    configure_logging(level)


class LoggingMixin:
    """Gives every subclass a ``weatherdash.<ClassName>`` logger."""

    logger: ClassVar[logging.Logger]

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.logger = logging.getLogger(f"{LIBRARY_NAME}.{cls.__name__}")

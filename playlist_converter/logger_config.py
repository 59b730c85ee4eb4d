import logging
import os
import sys

LOG_LEVEL_ENV = "PLAYLIST_CONVERTER_LOG"


def resolve_level(value=None) -> int:
    """Maps a level name such as 'debug' or 'warning' to a logging level, defaulting to INFO."""
    if value is None:
        value = os.environ.get(LOG_LEVEL_ENV)
    if not value:
        return logging.INFO
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logger(level=None):
    """Configures the root logger for the application."""
    logger = logging.getLogger()
    logger.setLevel(resolve_level(level))

    # Console handler
    handler = logging.StreamHandler(sys.stdout)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    handler.setFormatter(formatter)

    # Only add the handler once
    if not logger.handlers:
        logger.addHandler(handler)


# Configure on import
setup_logger()

"""Logging configuration for the ``chakki`` logger tree."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from chakki.infrastructure.config import Settings

LOGGER_NAME = "chakki"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(settings: Settings, console: bool = False) -> logging.Logger:
    """Attach handlers to the ``chakki`` logger, replacing any earlier ones.

    The CLI talks to the operator through ``click.echo``; console logging
    is off unless asked for so the two do not interleave.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    level = logging.getLevelName(settings.log_level.upper())
    logger.setLevel(level if isinstance(level, int) else logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if settings.log_file is not None:
        try:
            settings.log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                settings.log_file,
                maxBytes=settings.log_max_bytes,
                backupCount=settings.log_backup_count,
                encoding="utf-8",
            )
        except OSError as exc:
            logger.error("Failed to set up file logging: %s", exc)
        else:
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger

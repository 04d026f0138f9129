"""
Logging configuration for ruled-http.

Uses loguru; a single stderr sink whose level comes from `AppSettings`.
"""

from __future__ import annotations

import sys

from loguru import logger

from core.config import AppSettings


def setup_logging(settings: AppSettings | None = None) -> None:
    """Configure logging based on settings.

    Should be called once at application startup (the CLI does it).
    """
    settings = settings or AppSettings()

    # Remove default handler
    logger.remove()

    logger.add(
        sys.stderr,
        level=settings.log_level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        colorize=True,
    )

    logger.debug("Logging initialized (level={})", settings.log_level)


def get_logger(name: str):
    """Get a logger instance for a specific module.

    Example:
        >>> from core.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Dispatching {}", url)
    """
    return logger.bind(module=name)

"""Logger configuration for batching buffers."""

import sys
from typing import Optional

from loguru import logger

from .settings import BufferSettings, load_settings


def setup_logging(settings: Optional[BufferSettings] = None) -> None:
    """Configure loguru logger for both console and file output.

    Sets up structured logging with:
    - Console output with colored output
    - File output with rotation and retention based on settings
    - Configurable log level from settings

    The package logger is disabled on import and enabled here.
    """
    settings = settings or load_settings()

    # Remove default loguru handler
    logger.remove()
    logger.enable("batching_buffer")

    if settings.log_to_console:
        logger.add(
            sink=sys.stderr,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
            level=settings.log_level,
            colorize=True,
        )

    if settings.log_file:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            sink=str(settings.log_file),
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            level=settings.log_level,
            rotation=settings.log_rotation,
            retention=settings.log_retention,
            compression="gz",  # Compress rotated logs
            enqueue=True,  # Thread-safe logging
        )

        logger.info(f"File logging enabled: {settings.log_file}")
        logger.info(f"Log level: {settings.log_level}")

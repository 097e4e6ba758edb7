"""Settings for batching buffers and their logging.

This module provides defaults that can be overridden from environment
variables, and converts them into a validated ``BufferConfig``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from ..batcher.models import BatchCallback, BufferConfig

ENV_PREFIX = "BATCHING_BUFFER_"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class BufferSettings:
    """Complete batching buffer settings."""

    # Buffer settings
    max_size: int = 100
    timeout_seconds: Optional[float] = None  # None = no timed flush

    # Logging settings
    log_level: str = "INFO"
    log_to_console: bool = True
    log_file: Optional[Path] = None
    log_rotation: str = "10 MB"
    log_retention: str = "7 days"

    def __post_init__(self):
        """Apply environment variable overrides."""
        self._apply_env_overrides()

    def _apply_env_overrides(self):
        """Apply configuration overrides from environment variables."""
        if max_size := os.getenv(f"{ENV_PREFIX}MAX_SIZE"):
            try:
                self.max_size = int(max_size)
            except ValueError:
                logger.warning(f"Invalid max size: {max_size}")

        if timeout := os.getenv(f"{ENV_PREFIX}TIMEOUT"):
            try:
                self.timeout_seconds = float(timeout)
            except ValueError:
                logger.warning(f"Invalid timeout: {timeout}")

        if log_level := os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            self.log_level = log_level.upper()

        if log_to_console := os.getenv(f"{ENV_PREFIX}LOG_TO_CONSOLE"):
            self.log_to_console = log_to_console.strip().lower() in _TRUE_VALUES

        if log_file := os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            self.log_file = Path(log_file)

        if log_rotation := os.getenv(f"{ENV_PREFIX}LOG_ROTATION"):
            self.log_rotation = log_rotation

        if log_retention := os.getenv(f"{ENV_PREFIX}LOG_RETENTION"):
            self.log_retention = log_retention

    def validate(self) -> tuple[bool, list[str]]:
        """Validate the settings.

        Returns:
            Tuple of (is_valid, error_messages)
        """
        errors = []

        if self.max_size <= 0:
            errors.append("Max size must be positive")

        if self.timeout_seconds is not None and self.timeout_seconds < 0:
            errors.append("Timeout must not be negative")

        if self.log_level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            errors.append(f"Unknown log level: {self.log_level}")

        return len(errors) == 0, errors

    def to_buffer_config(self, callback: BatchCallback) -> BufferConfig:
        """Build a buffer configuration from these settings.

        Args:
            callback: Receives each flushed batch

        Raises:
            ConfigurationError: If the buffer settings are invalid
        """
        return BufferConfig(max_size=self.max_size, timeout=self.timeout_seconds, callback=callback)


def load_settings(**overrides: Any) -> BufferSettings:
    """Load settings from defaults and the environment, then apply overrides.

    Args:
        **overrides: Field values that take precedence over the environment.
            An explicit ``None`` is applied too, e.g. ``timeout_seconds=None``
            turns the timed flush off whatever the environment says.

    Returns:
        Configured BufferSettings instance
    """
    settings = BufferSettings()
    known = {f.name for f in fields(BufferSettings)}

    for name, value in overrides.items():
        if name not in known:
            raise TypeError(f"Unknown setting: {name}")
        setattr(settings, name, value)

    return settings

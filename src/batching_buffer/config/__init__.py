"""Configuration module for batching buffers."""

from .logger_config import setup_logging
from .settings import BufferSettings, load_settings

__all__ = ["BufferSettings", "load_settings", "setup_logging"]

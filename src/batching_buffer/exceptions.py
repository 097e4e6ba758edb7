"""Exceptions raised by the batching buffer package."""

from __future__ import annotations


class BatchingBufferError(Exception):
    """Base class for all batching buffer errors."""


class ConfigurationError(BatchingBufferError, ValueError):
    """Raised when a buffer is constructed with an invalid configuration."""

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors or []

"""Batching Buffer - coalesce items and deliver them in size- or time-triggered batches."""

from loguru import logger

from .batcher import BatchCallback, BatchingBuffer, BufferConfig, FlushTrigger, create_buffer
from .config import BufferSettings, load_settings, setup_logging
from .exceptions import BatchingBufferError, ConfigurationError
from .scheduling import AsyncioScheduler, Scheduler, ThreadingScheduler, TimerHandle

__version__ = "1.0.0"

# Silent until the host application opts in via setup_logging() or logger.enable()
logger.disable(__name__)

__all__ = [
    # Buffer
    "BatchingBuffer",
    "BufferConfig",
    "BatchCallback",
    "FlushTrigger",
    "create_buffer",
    # Scheduling
    "Scheduler",
    "TimerHandle",
    "ThreadingScheduler",
    "AsyncioScheduler",
    # Configuration
    "BufferSettings",
    "load_settings",
    "setup_logging",
    # Errors
    "BatchingBufferError",
    "ConfigurationError",
]

"""Size- and time-triggered batching buffer."""

from .batching_buffer import BatchingBuffer, create_buffer
from .models import BatchCallback, BufferConfig, FlushTrigger

__all__ = ["BatchingBuffer", "BufferConfig", "FlushTrigger", "BatchCallback", "create_buffer"]

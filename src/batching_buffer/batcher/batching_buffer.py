"""Batching buffer that coalesces items and delivers them in groups.

Items are accumulated in insertion order and handed to a callback either when
the buffer reaches its maximum size or when the configured timeout elapses
after the first item of the current batch was added. A manual ``flush`` is
available for shutdown paths.
"""

from __future__ import annotations

import threading
from datetime import timedelta
from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

from loguru import logger

from ..scheduling import Scheduler, ThreadingScheduler, TimerHandle
from .models import BatchCallback, BufferConfig, FlushTrigger

T = TypeVar("T")


class BatchingBuffer(Generic[T]):
    """Accumulates items and flushes them by size, by timeout, or on demand."""

    def __init__(self, config: BufferConfig, scheduler: Optional[Scheduler] = None):
        """Initialize the buffer.

        Args:
            config: Validated buffer configuration
            scheduler: Timing facility for timed flushes. Defaults to a
                ``ThreadingScheduler``.
        """
        self.config = config
        self.scheduler = scheduler or ThreadingScheduler()

        self._items: List[T] = []
        self._timer: Optional[TimerHandle] = None
        # Bumped on every flush so a late timer can tell its batch is gone
        self._episode = 0
        self._lock = threading.RLock()

        # Statistics
        self._total_items_added = 0
        self._total_batches_flushed = 0
        self._flushes_by_trigger: Dict[FlushTrigger, int] = {trigger: 0 for trigger in FlushTrigger}

    def __enter__(self) -> BatchingBuffer[T]:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    @property
    def items(self) -> List[T]:
        """Copy of the pending items, oldest first."""
        with self._lock:
            return list(self._items)

    @property
    def timer_active(self) -> bool:
        """Whether a timed flush is pending."""
        with self._lock:
            return self._timer is not None

    def add(self, item: T) -> None:
        """Append an item, flushing immediately if the buffer is full.

        The first item of a batch arms the timed flush when a timeout is
        configured. Later items never move that deadline. If the timer cannot
        be scheduled the item is not added.
        """
        with self._lock:
            will_fill = len(self._items) + 1 >= self.config.max_size

            # Arm before appending so a scheduler error leaves the buffer untouched
            if not will_fill and self._timer is None and self.config.timed_flush_enabled:
                self._arm_timer()

            self._items.append(item)
            self._total_items_added += 1

            if will_fill:
                self._flush(FlushTrigger.SIZE)

    def flush(self) -> None:
        """Deliver all pending items now. Does nothing when the buffer is empty."""
        with self._lock:
            self._flush(FlushTrigger.MANUAL)

    def close(self) -> None:
        """Flush the final partial batch and cancel any pending timer."""
        with self._lock:
            self._flush(FlushTrigger.MANUAL)
        logger.debug(f"Closed batching buffer. Stats - Items: {self._total_items_added}, Batches: {self._total_batches_flushed}")

    def get_stats(self) -> Dict[str, Any]:
        """Get buffer statistics."""
        with self._lock:
            return {
                "pending": len(self._items),
                "timer_active": self._timer is not None,
                "total_items_added": self._total_items_added,
                "total_batches_flushed": self._total_batches_flushed,
                "flushes_by_trigger": {trigger.value: count for trigger, count in self._flushes_by_trigger.items()},
                "config": {
                    "max_size": self.config.max_size,
                    "timeout": self.config.timeout,
                },
            }

    def _flush(self, trigger: FlushTrigger) -> None:
        """Hand off the pending batch and invoke the callback. Caller holds the lock."""
        if not self._items:
            return

        batch = self._items
        self._items = []
        self._episode += 1
        self._cancel_timer()

        self._total_batches_flushed += 1
        self._flushes_by_trigger[trigger] += 1
        logger.info(f"Flushing batch of {len(batch)} items ({trigger.value})")

        self.config.callback(batch)

    def _arm_timer(self) -> None:
        episode = self._episode
        self._timer = self.scheduler.call_later(self.config.timeout, lambda: self._on_timeout(episode))
        logger.debug(f"Armed flush timer for {self.config.timeout}s")

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
            logger.debug("Cancelled flush timer")

    def _on_timeout(self, episode: int) -> None:
        """Timer expiry. Flushes only the batch that armed the timer."""
        with self._lock:
            if episode != self._episode:
                logger.debug("Ignoring stale flush timer")
                return
            self._flush(FlushTrigger.TIMEOUT)


def create_buffer(
    callback: BatchCallback,
    max_size: int,
    timeout: Optional[Union[float, timedelta]] = None,
    scheduler: Optional[Scheduler] = None,
) -> BatchingBuffer[Any]:
    """Create a batching buffer from plain parameters.

    Args:
        callback: Receives each batch as an ordered list
        max_size: Flush when this many items are pending
        timeout: Seconds (or a ``timedelta``) after the first item of a batch
            before it is flushed. ``None`` disables the timed flush.
        scheduler: Timing facility, defaults to ``ThreadingScheduler``

    Returns:
        Configured BatchingBuffer instance

    Raises:
        ConfigurationError: If any parameter is invalid
    """
    config = BufferConfig(max_size=max_size, timeout=timeout, callback=callback)
    return BatchingBuffer(config, scheduler=scheduler)

"""Delayed-callback schedulers for timed buffer flushes.

A scheduler is the only asynchronous collaborator of the buffer: it runs a
callable once after a delay and hands back a handle that can cancel the call
if it has not fired yet. Two implementations are provided, one backed by
``threading.Timer`` and one backed by an asyncio event loop.
"""

from __future__ import annotations

import asyncio
import itertools
import threading
from typing import Callable, Optional, Protocol

from loguru import logger

_timer_ids = itertools.count(1)


class TimerHandle(Protocol):
    """Handle to a scheduled call."""

    def cancel(self) -> None:
        """Cancel the call. Cancelling a fired or cancelled handle is a no-op."""
        ...


class Scheduler(Protocol):
    """Protocol for scheduling a callable after a delay."""

    def call_later(self, delay: float, fn: Callable[[], None]) -> TimerHandle:
        """Run ``fn`` once, no earlier than ``delay`` seconds from now."""
        ...


class ThreadingScheduler:
    """Scheduler that runs each call on its own ``threading.Timer`` thread."""

    def __init__(self, daemon: bool = True):
        """Initialize the scheduler.

        Args:
            daemon: Run timer threads as daemons so a pending flush never
                blocks interpreter shutdown
        """
        self.daemon = daemon

    def call_later(self, delay: float, fn: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay, fn)
        timer.daemon = self.daemon
        timer.name = f"batching-buffer-timer-{next(_timer_ids)}"
        timer.start()
        logger.debug(f"Scheduled {timer.name} in {delay}s")
        return timer


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop's ``call_later``.

    Timer callbacks run on the loop thread between other callbacks, which is
    the cooperative model where ``add``, ``flush`` and expiry never interleave.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        """Initialize the scheduler.

        Args:
            loop: Event loop to schedule on. Defaults to the loop running at
                the time each call is scheduled.
        """
        self._loop = loop

    def call_later(self, delay: float, fn: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        handle = loop.call_later(delay, fn)
        logger.debug(f"Scheduled loop callback in {delay}s")
        return handle

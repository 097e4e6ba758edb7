"""Timing facilities used by the buffer to schedule deferred flushes."""

from .schedulers import AsyncioScheduler, Scheduler, ThreadingScheduler, TimerHandle

__all__ = ["Scheduler", "TimerHandle", "ThreadingScheduler", "AsyncioScheduler"]

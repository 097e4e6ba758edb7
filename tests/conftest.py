"""Shared fixtures for batching buffer tests."""

from __future__ import annotations

from typing import Callable, List

import pytest
from loguru import logger


class FakeTimer:
    """Timer handle driven by FakeScheduler."""

    def __init__(self, due: float, fn: Callable[[], None]):
        self.due = due
        self.fn = fn
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Deterministic scheduler with a manually advanced clock."""

    def __init__(self):
        self.now = 0.0
        self.timers: List[FakeTimer] = []

    def call_later(self, delay: float, fn: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(self.now + delay, fn)
        self.timers.append(timer)
        return timer

    def pending(self) -> List[FakeTimer]:
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def advance(self, seconds: float) -> None:
        """Move the clock forward and fire every timer that came due."""
        self.now += seconds
        for timer in sorted(self.pending(), key=lambda t: t.due):
            if timer.due <= self.now and not timer.cancelled:
                timer.fired = True
                timer.fn()

    def fire(self, timer: FakeTimer) -> None:
        """Fire a timer regardless of cancellation, like a thread that already started."""
        timer.fired = True
        timer.fn()


class Recorder:
    """Callback that records every batch it receives."""

    def __init__(self):
        self.batches: List[list] = []

    def __call__(self, batch: list) -> None:
        self.batches.append(batch)

    @property
    def call_count(self) -> int:
        return len(self.batches)


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def log_messages():
    """Capture package log records as (level, message) tuples."""
    messages = []
    logger.enable("batching_buffer")
    handler_id = logger.add(lambda msg: messages.append((msg.record["level"].name, msg.record["message"])), level="DEBUG")
    yield messages
    logger.remove(handler_id)
    logger.disable("batching_buffer")

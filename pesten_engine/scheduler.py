"""Deferred, cancellable scheduling of AI turns.

The engine never calls a strategy directly from inside a move. It hands the
AI turn to a scheduler, which runs it later on the same control thread:

- ``QueueScheduler`` keeps a FIFO of pending callbacks that the owner drains
  with ``run_pending()``. Delays are recorded but never slept, which keeps
  tests, the CLI and simulations deterministic.
- ``AsyncioScheduler`` defers callbacks with ``loop.call_later`` so a UI
  driven by an event loop can show the AI "thinking".
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Callable

logger = logging.getLogger(__name__)


class ScheduledTurn(ABC):
    """Handle for a deferred callback."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call more than once."""
        ...

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        ...


class TurnScheduler(ABC):
    """Runs callbacks later, at most once each."""

    @abstractmethod
    def schedule(self, callback: Callable[[], None], delay: float = 0.0) -> ScheduledTurn:
        """Defer ``callback`` by ``delay`` seconds.

        Args:
            callback: Zero-argument callable.
            delay: Presentation delay in seconds. Implementations may ignore it.

        Returns:
            A handle that can cancel the callback before it runs.
        """
        ...


class _QueuedTurn(ScheduledTurn):
    __slots__ = ("callback", "delay", "_cancelled")

    def __init__(self, callback: Callable[[], None], delay: float):
        self.callback = callback
        self.delay = delay
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class QueueScheduler(TurnScheduler):
    """Single-consumer FIFO of deferred callbacks."""

    def __init__(self):
        self._queue: deque[_QueuedTurn] = deque()

    def schedule(self, callback: Callable[[], None], delay: float = 0.0) -> ScheduledTurn:
        turn = _QueuedTurn(callback, delay)
        self._queue.append(turn)
        return turn

    @property
    def pending(self) -> int:
        """Number of queued callbacks that have not been cancelled."""
        return sum(1 for turn in self._queue if not turn.cancelled)

    def run_next(self) -> bool:
        """Run the oldest live callback. Returns False if there was none."""
        while self._queue:
            turn = self._queue.popleft()
            if turn.cancelled:
                continue
            # Mark before running so a handle cancelled mid-callback stays inert.
            turn.cancel()
            turn.callback()
            return True
        return False

    def run_pending(self, limit: int | None = None) -> int:
        """Run callbacks until the queue is empty, including ones queued meanwhile.

        Args:
            limit: Stop after this many callbacks (None for no limit).

        Returns:
            Number of callbacks run.
        """
        ran = 0
        while limit is None or ran < limit:
            if not self.run_next():
                break
            ran += 1
        return ran

    def clear(self) -> None:
        for turn in self._queue:
            turn.cancel()
        self._queue.clear()


class _AsyncioTurn(ScheduledTurn):
    __slots__ = ("_handle",)

    def __init__(self, handle: asyncio.TimerHandle):
        self._handle = handle

    def cancel(self) -> None:
        self._handle.cancel()

    @property
    def cancelled(self) -> bool:
        return self._handle.cancelled()


class AsyncioScheduler(TurnScheduler):
    """Schedules callbacks on an asyncio event loop after the given delay."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def schedule(self, callback: Callable[[], None], delay: float = 0.0) -> ScheduledTurn:
        logger.debug(f"Scheduling callback in {delay:.2f}s")
        handle = self.loop.call_later(max(delay, 0.0), callback)
        return _AsyncioTurn(handle)

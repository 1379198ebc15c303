"""Trailing-edge debounce on the asyncio event loop."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Debouncer(Generic[T]):
    """Run ``callback(value)`` once ``delay`` seconds pass without a new trigger.

    Each trigger cancels the previously scheduled timer handle and starts a
    new one, so only the last value in a burst is ever delivered. The
    callback's coroutine runs as a task; the debouncer keeps a reference to
    it until it finishes.
    """

    def __init__(self, delay: float, callback: Callable[[T], Awaitable[None]]):
        self.delay = delay
        self.callback = callback
        self._handle: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        """True while a firing is scheduled."""
        return self._handle is not None

    def trigger(self, value: T) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, value)

    def cancel(self) -> None:
        """Drop the scheduled firing, if any. Running callbacks are left alone."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, value: T) -> None:
        self._handle = None
        task = asyncio.ensure_future(self.callback(value))
        self._tasks.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Debounced callback failed", exc_info=exc)

    async def drain(self) -> None:
        """Wait until no firing is scheduled and every started callback is done."""
        loop = asyncio.get_running_loop()
        while self._handle is not None or self._tasks:
            if self._handle is not None:
                await asyncio.sleep(max(0.0, self._handle.when() - loop.time()))
            else:
                await asyncio.gather(*self._tasks, return_exceptions=True)

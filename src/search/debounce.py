"""Cancellable delayed call for typeahead search."""
import asyncio
import inspect
import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class Debouncer:
    """
    Schedule a call after ``delay`` seconds, replacing any call still pending.

    Only the most recently scheduled call ever runs. ``call`` returns the
    scheduled task so callers can await the result; a superseded task ends
    cancelled.
    """

    def __init__(self, delay: float = 0.3):
        self.delay = delay
        self._task: Optional[asyncio.Task] = None
        self._pending = None

    @classmethod
    def from_settings(cls, settings) -> "Debouncer":
        return cls(delay=settings.search_debounce_ms / 1000)

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def call(self, fn: Callable[..., Any], *args, **kwargs) -> asyncio.Task:
        self.cancel()
        self._pending = (fn, args, kwargs)
        self._task = asyncio.get_running_loop().create_task(self._run_later())
        return self._task

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self._pending = None

    async def flush(self) -> Any:
        """Run the pending call now instead of waiting out the delay."""
        if self._pending is None:
            return None
        pending = self._pending
        self.cancel()
        return await self._invoke(pending)

    async def _run_later(self) -> Any:
        await asyncio.sleep(self.delay)
        pending, self._pending = self._pending, None
        return await self._invoke(pending)

    @staticmethod
    async def _invoke(pending) -> Any:
        fn, args, kwargs = pending
        result = fn(*args, **kwargs)
        if inspect.isawaitable(result):
            result = await result
        return result

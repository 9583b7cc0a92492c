"""
Trailing-edge debouncing for coroutine functions.

A ``Debouncer`` forwards only the most recent call once ``wait`` seconds pass
without a newer one. Triggering again cancels whatever is pending, whether it
is still waiting out the quiet period or already running. It is meant to be
driven from a single event loop; nothing here is thread safe.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class Debouncer(Generic[T]):
    def __init__(self, func: Callable[..., Awaitable[T]], wait: float) -> None:
        if wait < 0:
            raise ValueError("wait must be non-negative")
        self.func = func
        self.wait = wait
        self._pending: asyncio.Task[T] | None = None
        self._last_call: tuple[tuple[Any, ...], dict[str, Any]] | None = None

    @property
    def pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def trigger(self, *args: Any, **kwargs: Any) -> asyncio.Task[T]:
        self.cancel()
        self._last_call = (args, kwargs)
        self._pending = asyncio.get_running_loop().create_task(self._run(args, kwargs))
        return self._pending

    def cancel(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    async def flush(self) -> T | None:
        """Run the most recent pending call now instead of after the quiet period."""
        if not self.pending or self._last_call is None:
            return None
        args, kwargs = self._last_call
        self.cancel()
        return await self.func(*args, **kwargs)

    async def _run(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> T:
        await asyncio.sleep(self.wait)
        return await self.func(*args, **kwargs)

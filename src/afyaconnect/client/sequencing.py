import asyncio
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class LatestRequest(Generic[T]):
    """Run requests so that only the most recent one delivers a result.

    Starting a request cancels the one still in flight. A superseded call
    returns None instead of its (stale) result.
    """

    def __init__(self) -> None:
        self._seq = 0
        self._task: asyncio.Task | None = None

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run(self, factory: Callable[[], Awaitable[T]]) -> T | None:
        self._seq += 1
        seq = self._seq
        if self.in_flight:
            self._task.cancel()

        task = asyncio.ensure_future(factory())
        self._task = task
        try:
            result = await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
            if seq != self._seq:
                return None
            raise
        if seq != self._seq:
            return None
        return result

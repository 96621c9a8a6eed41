"""Bounded fan-out scheduling for the recursive scanner.

One ``AdmissionGate`` is created per top-level scan and shared by every
recursion level, so the number of filesystem operations in flight never
exceeds its limit regardless of tree depth. Permits are held only around
blocking filesystem calls, never across a recursive fan-out, so nested levels
cannot starve each other.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from types import TracebackType

from dirsize.config.models import DEFAULT_MAX_CONCURRENCY
from dirsize.types.aliases import FanOutWork

__all__ = ["DEFAULT_MAX_CONCURRENCY", "AdmissionGate", "BoundedFanOut"]


class AdmissionGate:
    """Counting semaphore that also tracks in-flight and peak usage."""

    def __init__(self, limit: int = DEFAULT_MAX_CONCURRENCY) -> None:
        """Initialize the gate.

        Args:
            limit: Maximum number of concurrent holders

        Raises:
            ValueError: If limit is smaller than one
        """
        if limit < 1:
            msg = "limit must be at least 1"
            raise ValueError(msg)

        self.limit: int = limit
        self._semaphore: asyncio.Semaphore = asyncio.Semaphore(limit)
        self._in_flight: int = 0
        self._peak: int = 0

    @property
    def in_flight(self) -> int:
        """Number of permits currently held."""
        return self._in_flight

    @property
    def peak(self) -> int:
        """Highest number of permits held at the same time."""
        return self._peak

    async def __aenter__(self) -> AdmissionGate:
        _ = await self._semaphore.acquire()
        self._in_flight += 1
        self._peak = max(self._peak, self._in_flight)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._in_flight -= 1
        self._semaphore.release()


class BoundedFanOut:
    """Run one task per item and collect results in input order.

    Each task writes only its own result slot, so the shared result list
    needs no lock. The call returns only after every task has finished.
    """

    def __init__(self, gate: AdmissionGate) -> None:
        self.gate: AdmissionGate = gate

    async def call_blocking[**P, R](
        self,
        func: Callable[P, R],
        /,
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> R:
        """Run a blocking filesystem call in a worker thread under a permit.

        Args:
            func: Blocking callable
            *args: Positional arguments for ``func``
            **kwargs: Keyword arguments for ``func``

        If the calling task is cancelled, the permit stays held until the
        worker thread has returned, since the thread itself cannot be
        interrupted.

        Returns:
            Whatever ``func`` returns
        """
        async with self.gate:
            worker = asyncio.ensure_future(asyncio.to_thread(func, *args, **kwargs))
            try:
                return await asyncio.shield(worker)
            except asyncio.CancelledError:
                _ = await asyncio.gather(worker, return_exceptions=True)
                raise

    async def run[T, R](self, items: Sequence[T], work: FanOutWork[T, R]) -> list[R]:
        """Dispatch ``work`` for every item and wait for all of them.

        Args:
            items: Ordered work items
            work: Coroutine function returning a result or None for "absent"

        Returns:
            Non-None results, in the order of their items

        Raises:
            Exception: The first exception escaping ``work``; the remaining
                tasks are cancelled before it propagates
        """
        if not items:
            return []

        slots: list[R | None] = [None] * len(items)

        async def _fill_slot(index: int, item: T) -> None:
            slots[index] = await work(item)

        failure: BaseException | None = None
        try:
            async with asyncio.TaskGroup() as task_group:
                for index, item in enumerate(items):
                    _ = task_group.create_task(_fill_slot(index, item))
        except BaseExceptionGroup as group:
            # Unwrapped so nested levels surface the original error, not groups of groups
            failure = group.exceptions[0]
        if failure is not None:
            raise failure

        return [result for result in slots if result is not None]

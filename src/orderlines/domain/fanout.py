"""Fan-out helpers: a bounded dispatcher and a wait-for-all join."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from .errors import AggregationError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Iterable


class Dispatcher:
    """Runs storage calls, optionally capped at ``limit`` concurrent calls.

    Only leaf calls go through the dispatcher. Per-line workflows are not gated,
    so a line waiting for its sub-objects never holds a slot its children need.
    """

    def __init__(self, limit: int | None = None) -> None:
        if limit is not None and limit <= 0:
            raise ValueError(f"Concurrency limit must be positive, got {limit}")
        self.limit = limit
        self._semaphore = asyncio.Semaphore(limit) if limit is not None else None

    async def run[T](self, call: Awaitable[T]) -> T:
        if self._semaphore is None:
            return await call
        async with self._semaphore:
            return await call


async def gather_all[T](calls: Iterable[Awaitable[T]]) -> list[T]:
    """Wait for every call and return the results in input order.

    Failing calls do not cancel their siblings. Once all calls have finished, the
    first failure observed (in completion order) is raised as ``AggregationError``
    and every other outcome is discarded.
    """

    tasks = [asyncio.ensure_future(call) for call in calls]
    if not tasks:
        return []

    first_failure: Exception | None = None
    for finished in asyncio.as_completed(tasks):
        try:
            await finished
        except Exception as exc:  # noqa: BLE001
            if first_failure is None:
                first_failure = exc

    if first_failure is not None:
        error = AggregationError(first_failure)
        raise error from error.cause
    return [task.result() for task in tasks]

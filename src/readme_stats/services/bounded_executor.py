"""Bounded-concurrency runner for remote fetch tasks."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_CONCURRENCY = 6


async def run_bounded(
    tasks: Sequence[Callable[[], Awaitable[T]]],
    limit: int = DEFAULT_CONCURRENCY,
) -> list[T]:
    """Run zero-argument async *tasks* with at most *limit* in flight.

    Every task is started and awaited to completion; nothing is cancelled.
    Results are returned in submission order.  If any task raised, the
    first failure to occur is re-raised once all tasks have settled.
    """
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")

    sem = asyncio.Semaphore(limit)
    failures: list[BaseException] = []

    async def _run_one(index: int, task: Callable[[], Awaitable[T]]) -> T | None:
        async with sem:
            try:
                return await task()
            except Exception as exc:
                if failures:
                    logger.debug("Task %d failed after an earlier failure: %r", index, exc)
                failures.append(exc)
                return None

    results = await asyncio.gather(*(_run_one(i, t) for i, t in enumerate(tasks)))

    if failures:
        logger.debug("%d of %d task(s) failed", len(failures), len(tasks))
        raise failures[0]
    return results  # type: ignore[return-value]

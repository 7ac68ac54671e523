"""Bounded async worker pool for per-image tasks."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class ConcurrencyPool:
    """Runs an async callable over items with at most ``max_workers`` in flight.

    With ``max_workers=1`` items run strictly one after another, in order.
    """

    def __init__(self, max_workers: int = 1) -> None:
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self._max_workers = max_workers

    @property
    def max_workers(self) -> int:
        return self._max_workers

    async def map_ordered(
        self,
        fn: Callable[[T], Awaitable[R]],
        items: Sequence[T],
    ) -> list[R | BaseException]:
        """Apply ``fn`` to every item.

        Returns one result per item, in input order regardless of completion
        order. A failing item yields its exception in place; it never cancels
        the others.
        """
        if self._max_workers == 1:
            results: list[R | BaseException] = []
            for item in items:
                try:
                    results.append(await fn(item))
                except Exception as e:
                    results.append(e)
            return results

        semaphore = asyncio.Semaphore(self._max_workers)

        async def worker(item: T) -> R:
            async with semaphore:
                return await fn(item)

        gathered = await asyncio.gather(*(worker(i) for i in items), return_exceptions=True)
        return list(gathered)

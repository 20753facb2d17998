"""Fixed-interval pacing for sequential provider calls."""

import asyncio
from typing import Awaitable, Callable, Iterable, List, Optional, TypeVar

T = TypeVar("T")
R = TypeVar("R")


class FixedIntervalPacer:
    """Run calls one after another with a fixed delay between them."""

    def __init__(
        self,
        interval: float,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ) -> None:
        """
        Initialize pacer.

        Args:
            interval: Seconds to wait between consecutive calls
            sleep: Async sleep function (injectable for tests)
        """
        self.interval = interval
        self._sleep = sleep or asyncio.sleep

    async def run(self, items: Iterable[T], func: Callable[[T], Awaitable[R]]) -> List[R]:
        """Call ``func`` on each item in order, pausing between calls."""
        results: List[R] = []
        for index, item in enumerate(items):
            if index > 0 and self.interval > 0:
                await self._sleep(self.interval)
            results.append(await func(item))
        return results

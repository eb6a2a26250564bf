"""
Outbound rate limiting for the Notion API.
"""

import asyncio
import time
from typing import Awaitable, Callable

from sheet2notion.constants import RATE_LIMIT_INTERVAL_SECONDS
from sheet2notion.observability.logger import get_logger
from sheet2notion.observability.metrics import record_rate_limit_wait

logger = get_logger(__name__)


class RateLimiter:
    """
    Spaces dispatches at least `interval` seconds apart.

    Callers queue on an asyncio.Lock, which wakes waiters in FIFO order.
    One instance is shared by every request made through a client.
    """

    def __init__(
        self,
        interval: float = RATE_LIMIT_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Initialize rate limiter.

        Args:
            interval: Minimum seconds between dispatches
            clock: Monotonic clock (injectable for tests)
            sleep: Async sleep (injectable for tests)
        """
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._last_dispatch: float | None = None

    @property
    def last_dispatch(self) -> float | None:
        return self._last_dispatch

    async def acquire(self) -> float:
        """
        Wait out the remainder of the interval, then record a dispatch.

        Returns:
            Seconds spent waiting
        """
        async with self._lock:
            waited = 0.0
            if self._last_dispatch is not None:
                remaining = self.interval - (self._clock() - self._last_dispatch)
                while remaining > 0:
                    await self._sleep(remaining)
                    waited += remaining
                    remaining = self.interval - (self._clock() - self._last_dispatch)

            self._last_dispatch = self._clock()

        if waited:
            logger.debug("Rate limit wait", extra={"wait_seconds": round(waited, 3)})
        record_rate_limit_wait(waited)
        return waited

    def reset(self) -> None:
        """Forget the last dispatch so the next acquire is immediate."""
        self._last_dispatch = None

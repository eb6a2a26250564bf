"""
Bounded, classified retries for remote operations.
"""

import asyncio
from typing import Awaitable, Callable, Sequence, TypeVar

import httpx

from sheet2notion.constants import MAX_RETRIES, RETRY_DELAYS_SECONDS
from sheet2notion.errors import FatalRemoteError, RetryableRemoteError, RetryExhaustedError
from sheet2notion.observability.logger import get_logger
from sheet2notion.observability.metrics import record_retry

from .rate_limiter import RateLimiter

logger = get_logger(__name__)

T = TypeVar("T")


class RetryPolicy:
    """
    Runs an async operation with up to `max_retries` retries.

    Every attempt first passes through the shared RateLimiter. Retryable
    failures back off using `delays`; fatal failures are raised at once.
    """

    def __init__(
        self,
        rate_limiter: RateLimiter,
        max_retries: int = MAX_RETRIES,
        delays: Sequence[float] = RETRY_DELAYS_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if max_retries < 0:
            raise ValueError("max_retries must be non-negative")
        if not delays:
            raise ValueError("delays must not be empty")
        self.rate_limiter = rate_limiter
        self.max_retries = max_retries
        self.delays = tuple(delays)
        self._sleep = sleep

    def delay_for(self, retry_number: int) -> float:
        """Backoff before retry `retry_number` (1-based); the last delay repeats."""
        return self.delays[min(retry_number, len(self.delays)) - 1]

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        operation_name: str = "request",
    ) -> T:
        """
        Execute an operation with retries.

        Args:
            operation: Zero-argument coroutine function performing one attempt
            operation_name: Label for logs and metrics

        Returns:
            The operation's result

        Raises:
            FatalRemoteError: On the first non-retryable remote failure
            RetryExhaustedError: When every attempt failed retryably
        """
        attempts = self.max_retries + 1
        last_error: RetryableRemoteError | None = None

        for attempt in range(1, attempts + 1):
            await self.rate_limiter.acquire()
            try:
                return await operation()
            except FatalRemoteError as e:
                logger.error(
                    f"{operation_name} failed with non-retryable error",
                    extra={
                        "operation": operation_name,
                        "attempt": attempt,
                        "status_code": e.status_code,
                    },
                )
                raise
            except RetryableRemoteError as e:
                last_error = e
            except httpx.TransportError as e:
                last_error = RetryableRemoteError(
                    f"Network or timeout error: {e}", context={"operation": operation_name}
                )

            if attempt == attempts:
                break

            delay = self.delay_for(attempt)
            logger.warning(
                f"Retrying {operation_name}",
                extra={
                    "operation": operation_name,
                    "attempt": attempt,
                    "delay_seconds": delay,
                    "status_code": last_error.status_code,
                    "error_message": last_error.message,
                },
            )
            record_retry(operation_name)
            await self._sleep(delay)

        logger.error(
            f"{operation_name} exhausted retries",
            extra={"operation": operation_name, "attempts": attempts},
        )
        raise RetryExhaustedError(attempts, last_error)

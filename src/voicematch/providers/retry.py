"""Retry policy for outbound provider calls.

Provider clients wrap each request in a RetryPolicy. Only failures
classified as transient are retried, with exponential delay between
attempts. Everything else propagates on the first attempt.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TypeVar

from ..errors import ProviderError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(slots=True)
class RetryPolicy:
    """Bounded exponential backoff for transient provider failures.

    Attributes:
        max_attempts: Total attempts including the first
        base_delay: Delay in seconds before the second attempt
        max_delay: Upper bound on any single delay
        sleeper: Awaitable sleep function, injectable for tests
        retry_attempt_count: Number of retries performed so far
    """

    max_attempts: int = 3
    base_delay: float = 0.5
    max_delay: float = 8.0
    sleeper: Callable[[float], Awaitable[None]] = asyncio.sleep
    retry_attempt_count: int = field(default=0)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0 or self.max_delay < 0:
            raise ValueError("delays must be non-negative")

    def delay_for(self, attempt: int) -> float:
        """Delay to wait after the given failed attempt (1-based)."""
        return min(self.max_delay, self.base_delay * (2 ** (attempt - 1)))

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run operation, retrying transient ProviderErrors.

        Args:
            operation: Zero-argument coroutine factory, called once per attempt

        Returns:
            The operation's result

        Raises:
            ProviderError: The last failure, once attempts are exhausted or
                the failure is not transient
        """
        attempt = 1
        while True:
            try:
                return await operation()
            except ProviderError as e:
                if e.kind != "transient" or attempt >= self.max_attempts:
                    raise
                delay = self.delay_for(attempt)
                logger.debug(
                    f"Transient provider failure (attempt {attempt}/{self.max_attempts}), "
                    f"retrying in {delay:.2f}s: {e}"
                )
                self.retry_attempt_count += 1
                await self.sleeper(delay)
                attempt += 1

"""Retry with exponential backoff."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryPolicy:
    """
    Repeat the same operation with exponentially growing delays.

    Delays are `base_delay * 2**attempt` with a zero-based attempt index,
    so three attempts wait `base_delay` then `2 * base_delay`. The final
    failure is re-raised unchanged.
    """

    def __init__(
        self,
        retryable_exceptions: tuple[type[BaseException], ...] = (Exception,),
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._retryable_exceptions = retryable_exceptions
        self._sleep = sleep

    @staticmethod
    def delay_for(attempt: int, base_delay: float) -> float:
        """Backoff before the attempt following `attempt`."""
        return base_delay * (2**attempt)

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        max_attempts: int = 3,
        base_delay: float = 1.0,
    ) -> T:
        """
        Run `operation` up to `max_attempts` times.

        Args:
            operation: Zero-argument async callable
            max_attempts: Total attempts; 1 means no retries
            base_delay: Delay in seconds before the second attempt

        Returns:
            The first successful result

        Raises:
            The exception from the last attempt
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

        for attempt in range(max_attempts):
            try:
                return await operation()
            except self._retryable_exceptions as e:
                if attempt == max_attempts - 1:
                    raise
                delay = self.delay_for(attempt, base_delay)
                logger.debug(f"Retry {attempt + 1}/{max_attempts} after {delay:.2f}s: {e}")
                await self._sleep(delay)

        raise RuntimeError("Retry exhausted without exception")

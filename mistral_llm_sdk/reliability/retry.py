from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable, Optional, Type, TypeVar

from ..providers.base import ProviderError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RetryConfig:
    max_attempts: int = 2
    backoff_factor: float = 2.0
    retryable_errors: Iterable[Type[Exception]] = ()
    initial_delay: float = 0.25
    max_delay: float = 60.0


class RetryManager:
    """
    Manages retry logic for provider operations.

    This class handles:
    - Retry decisions from ProviderError.is_retryable
    - Exponential backoff with jitter
    - Respect for Retry-After values
    - Maximum delay caps
    """

    async def execute_with_retry(
        self,
        func: Callable[[], Awaitable[T]],
        config: Optional[RetryConfig] = None
    ) -> T:
        """
        Execute a function with retry logic.

        Args:
            func: Zero-argument async function to execute
            config: Retry configuration

        Returns:
            Result from successful function execution

        Raises:
            The last exception if all retries are exhausted
        """
        config = config or RetryConfig()
        attempt = 0
        delay = config.initial_delay

        while True:
            try:
                return await func()
            except Exception as e:  # noqa: BLE001
                attempt += 1

                if not self._should_retry(e, attempt, config):
                    raise

                retry_delay = self._calculate_delay(e, delay, config)
                logger.warning(
                    "Retrying after %s (attempt %d/%d, delay %.2fs)",
                    type(e).__name__, attempt, config.max_attempts, retry_delay
                )
                await asyncio.sleep(retry_delay)

                delay = min(delay * config.backoff_factor, config.max_delay)

    def _should_retry(self, error: Exception, attempt: int, config: RetryConfig) -> bool:
        """Determine if an error should be retried."""
        if attempt >= config.max_attempts:
            return False

        if isinstance(error, ProviderError):
            return error.is_retryable

        return any(isinstance(error, error_type) for error_type in config.retryable_errors)

    def _calculate_delay(self, error: Exception, base_delay: float, config: RetryConfig) -> float:
        """Calculate retry delay, respecting Retry-After if present."""
        if isinstance(error, ProviderError) and error.retry_after:
            return min(error.retry_after, config.max_delay)

        # Jitter to prevent thundering herd
        jitter = random.uniform(0, 0.1 * base_delay)

        return min(base_delay + jitter, config.max_delay)

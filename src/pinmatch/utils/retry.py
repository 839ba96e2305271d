"""Retry utilities with exponential backoff."""

import random
import time
from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Optional, Type, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class RetryableError(Exception):
    """Custom exception to signal retryable failures."""

    pass


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behavior with exponential backoff.

    Attributes:
        max_retries: Maximum number of retry attempts after the first call
        initial_delay: Initial delay in seconds before first retry
        max_delay: Maximum delay in seconds between retries
        exponential_base: Base for exponential backoff calculation
        jitter: Whether to randomize delays between 50% and 100%
        retryable_exceptions: Tuple of exception types to retry on
    """

    max_retries: int = 2
    initial_delay: float = 0.5
    max_delay: float = 10.0
    exponential_base: float = 2.0
    jitter: bool = True
    retryable_exceptions: tuple[Type[Exception], ...] = (Exception,)

    def calculate_delay(self, attempt: int) -> float:
        """Calculate delay for given attempt number with exponential backoff.

        Args:
            attempt: Current attempt number (0-indexed)

        Returns:
            Delay in seconds to wait before retry
        """
        delay = min(
            self.initial_delay * (self.exponential_base**attempt),
            self.max_delay,
        )

        if self.jitter:
            delay = delay * (0.5 + random.random() * 0.5)

        return delay


def retry_with_backoff(
    config: Optional[RetryConfig] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator for retrying synchronous functions with exponential backoff.

    Args:
        config: Retry configuration (uses defaults if None)
        sleep: Function used to wait between attempts

    Returns:
        Decorated function with retry logic

    Example:
        @retry_with_backoff(RetryConfig(max_retries=2))
        def compute(image_bytes):
            return model.embed(image_bytes)
    """
    if config is None:
        config = RetryConfig()

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        name = getattr(func, "__name__", repr(func))

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            for attempt in range(config.max_retries + 1):
                try:
                    return func(*args, **kwargs)
                except config.retryable_exceptions as e:
                    if attempt >= config.max_retries:
                        logger.error(
                            "Max retries exhausted",
                            function=name,
                            attempt=attempt + 1,
                            max_retries=config.max_retries,
                            error=str(e),
                        )
                        raise

                    delay = config.calculate_delay(attempt)
                    logger.warning(
                        "Retrying after failure",
                        function=name,
                        attempt=attempt + 1,
                        max_retries=config.max_retries,
                        delay_seconds=round(delay, 2),
                        error=str(e),
                    )
                    sleep(delay)

            raise RuntimeError("Unexpected retry loop exit")

        return wrapper

    return decorator

"""
Exponential backoff for Stripe API calls.

Retries transient failures (timeouts, connection errors, rate limits) with
capped exponential delay and jitter. Anything else propagates immediately.
"""

import functools
import logging
import random
import time
from typing import Any, Callable, Optional, Tuple, Type, TypeVar

import stripe

logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])

DEFAULT_RETRY_EXCEPTIONS: Tuple[Type[BaseException], ...] = (
    TimeoutError,
    ConnectionError,
    stripe.APIConnectionError,
    stripe.RateLimitError,
)


def calculate_backoff_delay(
    attempt: int,
    base_delay: float = 1.0,
    max_delay: float = 60.0,
    exponential_base: float = 2.0,
    jitter: bool = True
) -> float:
    """
    Calculate backoff delay for a given attempt.

    Args:
        attempt: Current attempt number (0-indexed)
        base_delay: Initial delay in seconds
        max_delay: Maximum delay in seconds
        exponential_base: Base for exponential calculation
        jitter: Whether to add randomness to delay

    Returns:
        float: Delay in seconds
    """
    delay = min(base_delay * (exponential_base ** attempt), max_delay)

    # between 50% and 150% of delay
    if jitter:
        delay = delay * (0.5 + random.random())

    return delay


def exponential_backoff(
    max_retries: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 60.0,
    exponential_base: float = 2.0,
    jitter: bool = True,
    retry_exceptions: Optional[Tuple[Type[BaseException], ...]] = None
) -> Callable[[F], F]:
    """
    Decorator for exponential backoff with jitter.

    Args:
        max_retries: Maximum number of attempts
        base_delay: Initial delay in seconds
        max_delay: Maximum delay in seconds
        exponential_base: Base for exponential calculation
        jitter: Whether to add randomness to delay
        retry_exceptions: Exception types to retry on

    Returns:
        Decorated function with retry logic
    """
    if retry_exceptions is None:
        retry_exceptions = DEFAULT_RETRY_EXCEPTIONS

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            for attempt in range(max_retries):
                try:
                    return func(*args, **kwargs)
                except retry_exceptions as e:
                    if attempt == max_retries - 1:
                        logger.error(
                            f"All {max_retries} retry attempts failed for {func.__name__}: {e}"
                        )
                        raise

                    delay = calculate_backoff_delay(
                        attempt, base_delay, max_delay, exponential_base, jitter
                    )
                    logger.warning(
                        f"Attempt {attempt + 1}/{max_retries} failed for {func.__name__}: {e}. "
                        f"Retrying in {delay:.2f}s"
                    )
                    time.sleep(delay)

            raise RuntimeError(f"{func.__name__} called with max_retries={max_retries}")

        return wrapper  # type: ignore

    return decorator

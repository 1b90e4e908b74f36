"""Bounded retry for AI provider calls."""

import functools
import random
import time
from typing import Any, Callable, Optional, TypeVar

from namegen.core.logging import StructuredLogger, get_logger

T = TypeVar("T")

logger = get_logger("namegen.retry")


def retry_with_backoff(
    max_retries: int = 1,
    initial_delay: float = 0.5,
    max_delay: float = 5.0,
    exponential_base: float = 2.0,
    jitter: bool = True,
    retryable_exceptions: tuple[type[Exception], ...] = (Exception,),
    should_retry: Optional[Callable[[Exception], bool]] = None,
    logger_instance: Optional[StructuredLogger] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorator for retrying function calls with exponential backoff.

    Each attempt calls the wrapped function again from scratch; nothing from a
    failed attempt is reused.

    Args:
        max_retries: Maximum number of retry attempts after the first call
        initial_delay: Delay in seconds before the first retry
        max_delay: Maximum delay in seconds between retries
        exponential_base: Base for exponential backoff calculation
        jitter: If True, add up to 10% random jitter to each delay
        retryable_exceptions: Exception types that may trigger a retry
        should_retry: Optional predicate to veto a retry for a given exception
        logger_instance: Logger for retry messages
        sleep: Sleep function (injectable for tests)

    Returns:
        Decorator function
    """
    if logger_instance is None:
        logger_instance = logger

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            delay = initial_delay
            attempt = 0

            while True:
                try:
                    return func(*args, **kwargs)
                except retryable_exceptions as e:
                    if attempt >= max_retries or (should_retry and not should_retry(e)):
                        if attempt > 0:
                            logger_instance.error(
                                f"All {attempt + 1} attempts failed for {func.__name__}",
                                context={"function": func.__name__, "error": str(e)},
                            )
                        raise

                    actual_delay = delay
                    if jitter:
                        actual_delay += delay * 0.1 * random.random()

                    logger_instance.warning(
                        f"Attempt {attempt + 1}/{max_retries + 1} failed: {e}. "
                        f"Retrying in {actual_delay:.2f}s...",
                        context={
                            "function": func.__name__,
                            "attempt": attempt + 1,
                            "max_retries": max_retries,
                            "delay": actual_delay,
                        },
                    )
                    sleep(actual_delay)
                    delay = min(delay * exponential_base, max_delay)
                    attempt += 1

        return wrapper

    return decorator

"""Retry policy for transient database failures.

The domain core never retries. Only the persistence layer wraps its
calls so that dropped connections and timeouts are retried with
exponential backoff before the error propagates.
"""

import functools
import logging
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

import structlog
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = structlog.get_logger()

P = ParamSpec("P")
T = TypeVar("T")

# Exceptions that are retriable (transient failures)
RETRIABLE_EXCEPTIONS = (
    ConnectionError,
    TimeoutError,
)

MAX_ATTEMPTS = 3


def with_db_retry(
    func: Callable[P, Awaitable[T]],
) -> Callable[P, Awaitable[T]]:
    """Decorator to retry database calls with exponential backoff.

    Retries up to 3 times (0.5s min, 4s max). The last exception is
    re-raised once attempts are exhausted, non-retriable exceptions
    propagate immediately.

    Args:
        func: Async database operation

    Returns:
        Wrapped function with retry logic
    """

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        @retry(
            stop=stop_after_attempt(MAX_ATTEMPTS),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
            retry=retry_if_exception_type(RETRIABLE_EXCEPTIONS),
            before_sleep=before_sleep_log(logger, log_level=logging.INFO),
            reraise=True,
        )
        async def inner() -> T:
            return await func(*args, **kwargs)

        try:
            return await inner()
        except RETRIABLE_EXCEPTIONS as e:
            logger.error(
                "database retry exhausted",
                function=func.__name__,
                attempts=MAX_ATTEMPTS,
                last_error=str(e),
            )
            raise

    return wrapper

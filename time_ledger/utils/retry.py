"""
Retry logic with exponential backoff for calls toward the document store.
"""

import asyncio
import random
import logging
from functools import wraps
from typing import Awaitable, Callable, TypeVar, Any

from ..data_access.exceptions import RateLimitExceededError, RetryableError

logger = logging.getLogger(__name__)

T = TypeVar('T')


def compute_delay(
    attempt: int,
    base_delay: float,
    max_delay: float,
    jitter: bool,
    retry_after: float = 0
) -> float:
    """
    Delay before retry number attempt + 1.

    A server-provided retry_after wins over the computed backoff when larger.
    """
    delay = min(base_delay * (2 ** attempt), max_delay)
    if jitter:
        delay += random.uniform(0, 0.1 * delay)
    return max(delay, retry_after)


def retry_with_backoff(
    max_retries: Any = 3,
    base_delay: float = 0.5,
    max_delay: float = 30.0,
    jitter: bool = True
):
    """
    Decorator for retrying coroutines with exponential backoff.

    Only RetryableError (including RateLimitExceededError) triggers a retry;
    every other exception propagates immediately.

    Args:
        max_retries: Maximum number of retry attempts, or the name of an
            instance attribute holding it when decorating methods
        base_delay: Initial delay in seconds
        max_delay: Maximum delay in seconds
        jitter: Whether to add random jitter to the delay

    Example:
        @retry_with_backoff(max_retries='max_retries')
        async def _request(self, ...):
            ...
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            retries = max_retries
            if isinstance(retries, str):
                retries = getattr(args[0], retries)

            for attempt in range(retries + 1):
                try:
                    result = await func(*args, **kwargs)

                    if attempt > 0:
                        logger.info(
                            f"Operation succeeded after {attempt} retries",
                            extra={'function': func.__name__, 'attempt': attempt}
                        )

                    return result

                except RetryableError as e:
                    if attempt == retries:
                        logger.error(
                            f"Operation failed after {retries} retries",
                            extra={
                                'function': func.__name__,
                                'max_retries': retries,
                                'error': str(e)
                            }
                        )
                        raise

                    retry_after = e.retry_after if isinstance(e, RateLimitExceededError) else 0
                    delay = compute_delay(attempt, base_delay, max_delay, jitter, retry_after)

                    logger.warning(
                        f"Retry attempt {attempt + 1}/{retries} after {delay:.2f}s",
                        extra={
                            'function': func.__name__,
                            'attempt': attempt + 1,
                            'delay_seconds': delay,
                            'error': str(e)
                        }
                    )

                    await asyncio.sleep(delay)

        return wrapper
    return decorator

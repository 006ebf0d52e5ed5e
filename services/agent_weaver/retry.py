"""
Bounded retry policy for completion calls.

A failed attempt is retried only when the policy's predicate accepts the
error; the wait between attempts is fixed and uses asyncio sleep, so only
the calling coroutine is suspended.
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar
from tenacity import (
    AsyncRetrying,
    stop_after_attempt,
    wait_fixed,
    retry_if_exception,
    before_sleep_log,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

RATE_LIMIT_MARKERS = ("rate limit", "rate_limit", "too many requests")
RATE_LIMIT_CODES = (429, "429", "rate_limit_exceeded", "rate_limit_error")


def is_rate_limit_error(error: BaseException) -> bool:
    """Classify an error as a rate-limit failure from its code or message"""
    for attr in ("code", "status_code"):
        if getattr(error, attr, None) in RATE_LIMIT_CODES:
            return True

    message = str(error).lower()
    return any(marker in message for marker in RATE_LIMIT_MARKERS)


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to try, how long to wait and which errors to retry"""
    max_attempts: int = 3
    delay: float = 1.0
    should_retry: Callable[[BaseException], bool] = is_rate_limit_error

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.delay < 0:
            raise ValueError("delay must not be negative")

    @classmethod
    def from_settings(cls, settings: Any) -> "RetryPolicy":
        return cls(
            max_attempts=settings.retry_max_attempts,
            delay=settings.retry_delay,
        )


async def with_retry(operation: Callable[[], Awaitable[T]], policy: RetryPolicy = None) -> T:
    """
    Run an async operation under a retry policy.

    Args:
        operation: Zero-argument coroutine function to execute
        policy: Retry policy, defaults to 3 attempts 1s apart on rate limits

    Returns:
        The operation's result

    Raises:
        The first non-retryable error immediately, or the most recent error
        once all attempts are used.
    """
    if policy is None:
        policy = RetryPolicy()

    retrying = AsyncRetrying(
        stop=stop_after_attempt(policy.max_attempts),
        wait=wait_fixed(policy.delay),
        retry=retry_if_exception(policy.should_retry),
        before_sleep=before_sleep_log(logger, logging.INFO),
        reraise=True,
    )

    async for attempt in retrying:
        with attempt:
            result = await operation()
    return result

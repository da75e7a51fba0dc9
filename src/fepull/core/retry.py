#!/usr/bin/env python3
"""
Retry Wrapper with Exponential Backoff

This module provides ``retry``, which re-runs a failing async operation with
exponential backoff. It is used only around the network fetch step; local
steps (sparse-checkout config, checkout) fail deterministically and are not
retried.

Links to third-party package documentation:
- Tenacity Retrying Library: https://tenacity.readthedocs.io/en/latest/
- loguru: https://github.com/Delgan/loguru

Sample input:
    await retry(lambda: git.fetch("origin", depth=1), max_attempts=3, base_delay=1)

Expected output:
- The operation's return value
- On the final failed attempt the last exception, re-raised unmodified
- Warnings such as "Attempt 1/3 failed, retrying in 1s..."
"""

import asyncio
from typing import Any, Awaitable, Callable, TypeVar

from loguru import logger
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from fepull.core.constants import DEFAULT_FETCH_ATTEMPTS, DEFAULT_RETRY_BASE_DELAY
from fepull.core.errors import OperationCancelledError

T = TypeVar("T")


def _is_retryable(exc: BaseException) -> bool:
    # asyncio.CancelledError is a BaseException and must escape immediately
    return isinstance(exc, Exception) and not isinstance(exc, OperationCancelledError)


async def retry(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = DEFAULT_FETCH_ATTEMPTS,
    base_delay: float = DEFAULT_RETRY_BASE_DELAY,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> T:
    """
    Invoke ``operation`` until it succeeds or ``max_attempts`` is reached.

    Args:
        operation: Zero-argument coroutine function to run
        max_attempts: Total number of attempts, including the first
        base_delay: Delay before the second attempt; doubles after each failure
        sleep: Awaitable sleep function, replaceable in tests

    Returns:
        Whatever ``operation`` returns on its first successful attempt
    """

    def log_retry(retry_state: RetryCallState) -> None:
        delay = retry_state.next_action.sleep if retry_state.next_action else 0
        error = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            f"Attempt {retry_state.attempt_number}/{max_attempts} failed, "
            f"retrying in {delay:g}s... ({error})"
        )

    retrying = AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=base_delay, min=0),
        retry=retry_if_exception(_is_retryable),
        before_sleep=log_retry,
        sleep=sleep,
        reraise=True,
    )

    async def attempt() -> T:
        return await operation()

    return await retrying(attempt)

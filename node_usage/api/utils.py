"""
API utilities module.

This module provides the retry policy used by the poll loop: a bounded
number of attempts with a linearly increasing backoff between them, applied
to any fallible callable.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Type, TypeVar

import httpx

from ..utils.logging import log_retry_event

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryExhaustedError(Exception):
    """Raised when every attempt allowed by a RetryPolicy has failed."""

    def __init__(self, attempts: int, last_exception: BaseException):
        super().__init__(
            f"Giving up after {attempts} attempt(s): {describe_error(last_exception)}"
        )
        self.attempts = attempts
        self.last_exception = last_exception


def compute_backoff(attempts_tried: int, base: float) -> float:
    """
    Linear backoff: the Nth failed attempt waits N * base seconds.

    With base=60 the waits are 60, 120, 180, 240, ...
    """
    if attempts_tried < 1:
        raise ValueError("attempts_tried must be at least 1")
    return attempts_tried * base


@dataclass(frozen=True)
class RetryPolicy:
    """
    Attempt budget and backoff for a fallible operation.

    Attributes:
        max_attempts: Total attempts, including the first
        backoff_seconds: Linear backoff step
        max_total_delay: Optional cap on the summed backoff; when the next
            wait would exceed it the remaining attempts are abandoned
    """
    max_attempts: int = 5
    backoff_seconds: float = 60.0
    max_total_delay: Optional[float] = None

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.backoff_seconds < 0:
            raise ValueError("backoff_seconds must be non-negative")

    def delay_for(self, attempts_tried: int) -> float:
        return compute_backoff(attempts_tried, self.backoff_seconds)


def describe_error(exc: BaseException) -> str:
    """Short, log-friendly description; HTTP errors render as a status line."""
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        return f"{response.status_code} {response.reason_phrase}"
    return f"{type(exc).__name__}: {exc}"


def call_with_retry(
    func: Callable[[], T],
    policy: RetryPolicy,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    sleep: Optional[Callable[[float], None]] = None,
    worker_id: str = "main",
) -> T:
    """
    Call ``func`` until it succeeds or the policy's attempts run out.

    No wait follows the final attempt. Exceptions outside ``retry_on``
    propagate immediately.

    Args:
        func: Zero-argument callable to invoke
        policy: Attempt budget and backoff
        retry_on: Exception types treated as transient
        sleep: Blocking sleep function (defaults to time.sleep)
        worker_id: Label used in log lines

    Returns:
        The first successful result of ``func``

    Raises:
        RetryExhaustedError: If every attempt failed or the delay cap was hit
    """
    sleep = sleep or time.sleep
    total_delay = 0.0

    for attempt in range(1, policy.max_attempts + 1):
        try:
            return func()
        except retry_on as e:
            remaining = policy.max_attempts - attempt
            logger.warning(f"[{worker_id}] {describe_error(e)}: {remaining} attempts remain.")

            if remaining == 0:
                raise RetryExhaustedError(attempt, e) from e

            delay = policy.delay_for(attempt)
            if policy.max_total_delay is not None and total_delay + delay > policy.max_total_delay:
                logger.warning(
                    f"[{worker_id}] Backoff of {delay:.0f}s would exceed the "
                    f"{policy.max_total_delay:.0f}s retry budget, abandoning remaining attempts"
                )
                raise RetryExhaustedError(attempt, e) from e

            log_retry_event(
                attempt=attempt,
                attempts_remaining=remaining,
                delay=delay,
                error=describe_error(e),
                worker_id=worker_id,
            )
            total_delay += delay
            sleep(delay)

    # Unreachable: the loop either returns or raises
    raise AssertionError("retry loop exited without result")

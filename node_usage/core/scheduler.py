"""
Poll scheduling module.

Cycles are aligned to wall-clock multiples of the interval, so an hourly
collector polls on the hour however long the previous cycle took.
"""

import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


def compute_next_poll_delay(now: float, interval: int) -> float:
    """Seconds from ``now`` (epoch seconds) until the next interval boundary."""
    if interval <= 0:
        raise ValueError("interval must be positive")
    return interval - (now % interval)


def sleep_until_next_poll(
    interval: int,
    clock: Optional[Callable[[], float]] = None,
    sleep: Optional[Callable[[float], None]] = None,
) -> float:
    """
    Block until the next interval boundary.

    Args:
        interval: Poll interval in seconds
        clock: Epoch-seconds clock (defaults to time.time)
        sleep: Blocking sleep function (defaults to time.sleep)

    Returns:
        The number of seconds slept
    """
    clock = clock or time.time
    sleep = sleep or time.sleep

    delay = compute_next_poll_delay(clock(), interval)
    logger.info(f"Sleeping {delay:.0f}")
    sleep(delay)
    return delay

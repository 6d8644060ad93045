"""
Poll loop module.

UsageCollector alternates between polling (fetch with retry, project, emit)
and sleeping until the next interval boundary. A failed cycle emits nothing
and the loop carries on; nothing here exits the process.
"""

import logging
import time
from datetime import datetime
from enum import Enum
from typing import Callable, Optional, TextIO

import httpx

from ..api import (
    RetryExhaustedError,
    RetryPolicy,
    UsageParseError,
    call_with_retry,
    fetch_usage,
)
from ..config import Env
from ..models import UsageMetrics
from ..utils.logging import log_usage_snapshot
from .emitter import emit_metrics
from .projector import build_metrics
from .scheduler import sleep_until_next_poll

logger = logging.getLogger(__name__)

# Failures that are retried within a cycle
TRANSIENT_ERRORS = (httpx.HTTPError, UsageParseError)


class CollectorState(str, Enum):
    """Loop phase. IDLE only until the first cycle starts; then POLLING and SLEEPING alternate."""

    IDLE = "idle"
    POLLING = "polling"
    SLEEPING = "sleeping"


def retry_policy_from_env(env: Env) -> RetryPolicy:
    """Build the per-cycle retry policy; optionally capped to one interval of backoff."""
    return RetryPolicy(
        max_attempts=env.MAX_ATTEMPTS,
        backoff_seconds=env.BACKOFF_SECONDS,
        max_total_delay=float(env.COLLECTD_INTERVAL) if env.CAP_RETRIES else None,
    )


class UsageCollector:
    """
    Runs the fetch/project/emit cycle on interval boundaries.

    Args:
        env: Collector configuration
        client: Authenticated HTTP client
        usage_href: Discovered usage resource path
        stream: Destination for PUTVAL lines (defaults to stdout)
        clock: Epoch-seconds clock (defaults to time.time)
        sleep: Blocking sleep used for backoff and scheduling (defaults to time.sleep)
    """

    def __init__(
        self,
        env: Env,
        client: httpx.Client,
        usage_href: str,
        stream: Optional[TextIO] = None,
        clock: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        self.env = env
        self.client = client
        self.usage_href = usage_href
        self.stream = stream
        self.policy = retry_policy_from_env(env)
        self.state = CollectorState.IDLE
        self._clock = clock or time.time
        self._sleep = sleep or time.sleep

    def run_once(self) -> Optional[UsageMetrics]:
        """
        Run a single poll cycle.

        Returns:
            The emitted metrics, or None if every attempt failed
        """
        self.state = CollectorState.POLLING
        try:
            snapshot = call_with_retry(
                lambda: fetch_usage(self.client, self.usage_href),
                self.policy,
                retry_on=TRANSIENT_ERRORS,
                sleep=self._sleep,
                worker_id="poll",
            )
        except RetryExhaustedError as e:
            logger.error(f"Poll cycle failed, no metrics emitted: {e}")
            return None

        now = datetime.fromtimestamp(self._clock())
        metrics = build_metrics(snapshot, now)

        emit_metrics(
            metrics,
            hostname=self.env.COLLECTD_HOSTNAME,
            interval=self.env.COLLECTD_INTERVAL,
            stream=self.stream,
        )
        logger.info(f"Wrote: quota={metrics.quota} target={metrics.target} usage={metrics.used}")
        log_usage_snapshot(snapshot, metrics.target, logger=logger)
        return metrics

    def run_forever(self, max_cycles: Optional[int] = None) -> None:
        """
        Poll, then sleep to the next boundary, indefinitely.

        Args:
            max_cycles: Stop after this many cycles (None runs until the process ends)
        """
        cycles = 0
        logger.info(f"Polling {self.usage_href} every {self.env.COLLECTD_INTERVAL}s")
        while max_cycles is None or cycles < max_cycles:
            self.run_once()
            cycles += 1

            self.state = CollectorState.SLEEPING
            sleep_until_next_poll(
                self.env.COLLECTD_INTERVAL,
                clock=self._clock,
                sleep=self._sleep,
            )

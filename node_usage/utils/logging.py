"""
Logging utilities for the node usage collector.

This module provides centralized logging configuration and structured
event helpers. All log output goes to stderr; stdout is reserved for the
PUTVAL lines read by collectd.
"""

import json
import logging
import time
from typing import Optional


def setup_logging(verbose: bool = False):
    """Setup logging configuration with appropriate level and format."""
    level = logging.DEBUG if verbose else logging.INFO
    format_string = "%(asctime)s - %(levelname)s - %(message)s"

    # basicConfig writes to stderr by default
    logging.basicConfig(level=level, format=format_string, datefmt="%Y-%m-%d %H:%M:%S")

    # Set specific logger levels
    logging.getLogger("httpx").setLevel(logging.WARNING)  # Reduce HTTP client noise
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def log_usage_snapshot(
    snapshot,
    target: float,
    timestamp: Optional[float] = None,
    logger: Optional[logging.Logger] = None,
):
    """
    Log a structured record of a successful poll cycle.

    Args:
        snapshot: UsageSnapshot that was fetched
        target: Projected usage target
        timestamp: Record timestamp (defaults to current time)
        logger: Logger instance to use (defaults to current module logger)
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    if timestamp is None:
        timestamp = time.time()

    record = {
        "event_type": "usage_snapshot",
        "timestamp": timestamp,
        **snapshot.to_dict(),
        "target": round(target, 2),
        "remaining": snapshot.remaining,
    }

    logger.info(f"USAGE_SNAPSHOT: {json.dumps(record, ensure_ascii=False)}")


def log_retry_event(
    attempt: int,
    attempts_remaining: int,
    delay: float,
    error: str,
    worker_id: str = "main",
    logger: Optional[logging.Logger] = None,
):
    """
    Log a structured record of a failed attempt that will be retried.

    Args:
        attempt: 1-based number of the attempt that failed
        attempts_remaining: Attempts left in the budget
        delay: Seconds to wait before the next attempt
        error: Description of the failure
        worker_id: Identifier for the caller
        logger: Logger instance to use (defaults to current module logger)
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    record = {
        "event_type": "retry",
        "timestamp": time.time(),
        "worker_id": worker_id,
        "attempt": attempt,
        "attempts_remaining": attempts_remaining,
        "delay_seconds": delay,
        "error": error,
    }

    logger.info(f"RETRY_EVENT: {json.dumps(record, ensure_ascii=False)}")

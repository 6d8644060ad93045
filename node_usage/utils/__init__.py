"""
Utilities module for the node usage collector.

This module provides shared logging utilities.
"""

from .logging import setup_logging, log_retry_event, log_usage_snapshot

__all__ = [
    "setup_logging",
    "log_retry_event",
    "log_usage_snapshot",
]

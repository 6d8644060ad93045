"""
Metric emission module.

Writes gauges in the collectd exec plugin text protocol::

    PUTVAL "<host>/usage/gauge-quota" interval=3600 N:200000000000
"""

import sys
from typing import List, Optional, TextIO

from ..constants import METRIC_NAMES, METRIC_PLUGIN
from ..models import UsageMetrics
from ..models.usage import Number


def format_value(value: Number) -> str:
    """Render integral values without a decimal point."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_metric(hostname: str, metric: str, interval: int, value: Number) -> str:
    """Format a single PUTVAL line (without the trailing newline)."""
    return (
        f'PUTVAL "{hostname}/{METRIC_PLUGIN}/{metric}" '
        f"interval={interval} N:{format_value(value)}"
    )


def format_metrics(metrics: UsageMetrics, hostname: str, interval: int) -> List[str]:
    """Format quota, target, used and remain, in that order."""
    return [
        format_metric(hostname, name, interval, value)
        for name, value in zip(METRIC_NAMES, metrics)
    ]


def emit_metrics(
    metrics: UsageMetrics,
    hostname: str,
    interval: int,
    stream: Optional[TextIO] = None,
) -> None:
    """Write the PUTVAL lines to ``stream`` (stdout by default) and flush."""
    if stream is None:
        stream = sys.stdout
    for line in format_metrics(metrics, hostname, interval):
        stream.write(line + "\n")
    stream.flush()

#!/usr/bin/env python3
"""
Usage Models

This module contains the traffic report fetched on every poll cycle and
the derived gauge values written to collectd.
"""

from dataclasses import dataclass, asdict
from datetime import date
from typing import Any, Dict, NamedTuple, Union

Number = Union[int, float]


@dataclass(frozen=True)
class UsageSnapshot:
    """
    Traffic report for the current billing cycle.

    Attributes:
        quota: Total allowance for the billing cycle
        used: Cumulative usage so far in the cycle
        rollover: Date the next billing cycle starts
    """
    quota: Number
    used: Number
    rollover: date

    @property
    def remaining(self) -> Number:
        """Allowance left in the cycle. Negative once the quota is exceeded."""
        return self.quota - self.used

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = asdict(self)
        data["rollover"] = self.rollover.isoformat()
        return data


class UsageMetrics(NamedTuple):
    """
    The four gauges emitted per cycle, in emission order.

    Attributes:
        quota: Raw quota
        target: Projected usage, truncated to an integer
        used: Raw usage
        remain: quota - used
    """

    quota: Number
    target: int
    used: Number
    remain: Number

"""
Usage projection module.

Projects how much of the quota would have been used by now if usage were
spread evenly across the billing cycle. The cycle runs from one calendar
month before the rollover date up to the rollover date, both at local
midnight. Durations are measured in epoch seconds, so a daylight saving
change inside the cycle counts as real elapsed time.
"""

from datetime import date, datetime, timedelta
from typing import Optional, Tuple

from ..models import UsageMetrics, UsageSnapshot
from ..models.usage import Number


def cycle_bounds(rollover: date) -> Tuple[datetime, datetime]:
    """
    Return the (start, end) datetimes of the billing cycle ending at ``rollover``.

    The start keeps the rollover's day of month in the previous month. Days
    that do not exist in that month roll forward, so a 2020-03-31 rollover
    starts the cycle on 2020-03-02.
    """
    year, month = rollover.year, rollover.month - 1
    if month == 0:
        year, month = year - 1, 12

    start = datetime(year, month, 1) + timedelta(days=rollover.day - 1)
    end = datetime(rollover.year, rollover.month, rollover.day)
    return start, end


def project_target(quota: Number, rollover: date, now: datetime) -> float:
    """
    Expected cumulative usage at ``now`` under uniform consumption.

    The result is not clamped: before the cycle starts it is negative and
    after the rollover it exceeds the quota.
    """
    start, end = cycle_bounds(rollover)
    start_ts = start.timestamp()
    rate = quota / (end.timestamp() - start_ts)
    return rate * (now.timestamp() - start_ts)


def build_metrics(snapshot: UsageSnapshot, now: Optional[datetime] = None) -> UsageMetrics:
    """Derive the four emitted gauges from a snapshot."""
    if now is None:
        now = datetime.now()
    target = project_target(snapshot.quota, snapshot.rollover, now)
    return UsageMetrics(
        quota=snapshot.quota,
        target=int(target),
        used=snapshot.used,
        remain=snapshot.remaining,
    )

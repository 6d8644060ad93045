#!/usr/bin/env python3
"""
Core package for the node usage collector.

This package provides credential loading, the discovery cache, the usage
projection, PUTVAL emission, scheduling and the poll loop.
"""

from .credentials import (
    CredentialsError,
    load_credentials,
)

from .cache import (
    CacheError,
    DiscoveryCache,
)

from .projector import (
    cycle_bounds,
    project_target,
    build_metrics,
)

from .emitter import (
    format_metric,
    format_metrics,
    emit_metrics,
)

from .scheduler import (
    compute_next_poll_delay,
    sleep_until_next_poll,
)

from .collector import (
    CollectorState,
    UsageCollector,
    retry_policy_from_env,
)

__all__ = [
    # Credentials
    "CredentialsError",
    "load_credentials",
    # Discovery cache
    "CacheError",
    "DiscoveryCache",
    # Projection
    "cycle_bounds",
    "project_target",
    "build_metrics",
    # Emission
    "format_metric",
    "format_metrics",
    "emit_metrics",
    # Scheduling
    "compute_next_poll_delay",
    "sleep_until_next_poll",
    # Poll loop
    "CollectorState",
    "UsageCollector",
    "retry_policy_from_env",
]

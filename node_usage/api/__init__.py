#!/usr/bin/env python3
"""
API package for the node usage collector.

This package provides HTTP client management, payload parsing, the retry
policy and the discovery/usage operations.
"""

from .client import (
    create_http_client,
)

from .operations import (
    DiscoveryError,
    discover_usage_href,
    fetch_usage,
)

from .parsing import (
    UsageParseError,
    parse_service_href,
    parse_traffic,
)

from .utils import (
    RetryExhaustedError,
    RetryPolicy,
    call_with_retry,
    compute_backoff,
)

__all__ = [
    # Client management
    "create_http_client",
    # Operations
    "DiscoveryError",
    "discover_usage_href",
    "fetch_usage",
    # Parsing
    "UsageParseError",
    "parse_service_href",
    "parse_traffic",
    # Retry
    "RetryExhaustedError",
    "RetryPolicy",
    "call_with_retry",
    "compute_backoff",
]

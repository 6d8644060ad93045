#!/usr/bin/env python3
"""
Node Usage Collectd Package

A collectd exec plugin that polls the Internode customer usage API, projects
the expected usage for the current billing cycle and emits PUTVAL lines on
standard output.

This package provides both a command-line interface and a programmatic API
for discovering the account usage resource and running the poll loop.
"""

__version__ = "1.0.0"
__author__ = "Node Usage Collectd"
__description__ = (
    "Collectd exec plugin reporting Internode usage, quota and projected target"
)
__license__ = "MIT"
__maintainer__ = "Node Usage Collectd"
__url__ = "https://github.com/damomurf/node-usage-collectd"
__status__ = "Production"

# Import models for public API
from .models import (
    Credentials,
    UsageSnapshot,
    UsageMetrics,
)

# Import constants for public API
from .constants import (
    EXIT_SUCCESS,
    EXIT_USAGE,
    EXIT_CONFIG_ERROR,
    EXIT_DISCOVERY_ERROR,
    EXIT_CYCLE_FAILED,
    EXIT_INTERRUPTED,
    EXIT_UNEXPECTED_ERROR,
    AUTH_FILE,
    CACHE_FILE,
)

# Import core functionality for public API
from .core import (
    load_credentials,
    DiscoveryCache,
    project_target,
    build_metrics,
    format_metrics,
    emit_metrics,
    compute_next_poll_delay,
    UsageCollector,
)

# Import API functions for public API
from .api import (
    create_http_client,
    discover_usage_href,
    fetch_usage,
    RetryPolicy,
    call_with_retry,
)

# Import CLI functionality for public API
from .cli import (
    main,
    create_argument_parser,
)

# Import utilities for public API
from .utils import (
    setup_logging,
)

# Public API exports
__all__ = [
    # Package metadata
    "__version__",
    "__author__",
    "__description__",
    # Data models
    "Credentials",
    "UsageSnapshot",
    "UsageMetrics",
    # Constants
    "EXIT_SUCCESS",
    "EXIT_USAGE",
    "EXIT_CONFIG_ERROR",
    "EXIT_DISCOVERY_ERROR",
    "EXIT_CYCLE_FAILED",
    "EXIT_INTERRUPTED",
    "EXIT_UNEXPECTED_ERROR",
    "AUTH_FILE",
    "CACHE_FILE",
    # Core functionality
    "load_credentials",
    "DiscoveryCache",
    "project_target",
    "build_metrics",
    "format_metrics",
    "emit_metrics",
    "compute_next_poll_delay",
    "UsageCollector",
    # API functions
    "create_http_client",
    "discover_usage_href",
    "fetch_usage",
    "RetryPolicy",
    "call_with_retry",
    # CLI functions
    "main",
    "create_argument_parser",
    # Utilities
    "setup_logging",
]

#!/usr/bin/env python3
"""
Application Constants

This module contains file names, protocol constants and exit codes used
throughout the node usage collector.
"""

# Exit codes for different failure modes
EXIT_SUCCESS = 0
EXIT_UNEXPECTED_ERROR = 1
EXIT_CONFIG_ERROR = 3
EXIT_DISCOVERY_ERROR = 4
EXIT_CYCLE_FAILED = 5  # --once cycle produced no metrics
EXIT_USAGE = 10  # Missing data directory argument
EXIT_INTERRUPTED = 130  # Conventional exit code for Ctrl+C

# Files kept inside the data directory
AUTH_FILE = ".auth"
CACHE_FILE = ".service_cache"

# Usage resource suffix appended to the discovered service href
USAGE_SUFFIX = "/usage"

# Collectd metric family and gauge names, in emission order
METRIC_PLUGIN = "usage"
METRIC_NAMES = ("gauge-quota", "gauge-target", "gauge-used", "gauge-remain")

PROJECT_URL = "https://github.com/damomurf/node-usage-collectd"

#!/usr/bin/env python3
"""
Data Models Module

This module contains all data structures and type definitions used
throughout the node usage collector.
"""

from .credentials import Credentials
from .usage import UsageSnapshot, UsageMetrics

__all__ = [
    "Credentials",
    "UsageSnapshot",
    "UsageMetrics",
]

#!/usr/bin/env python3
"""
CLI package for the node usage collector.

This package provides command-line interface components including
argument parsing and the main application flow.
"""

from .parser import (
    create_argument_parser,
    USAGE_TEXT,
)

from .main import (
    main,
)

__all__ = [
    # Argument parsing
    "create_argument_parser",
    "USAGE_TEXT",
    # Main application flow
    "main",
]

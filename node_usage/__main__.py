#!/usr/bin/env python3
"""
Enable execution of the node_usage package as a module.

This allows running the package with: python -m node_usage
"""

from .cli.main import main

if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Node Usage Collectd - Entry Point Wrapper

Simple wrapper script so collectd's exec plugin can run the collector
straight from a checkout. All functionality lives in the node_usage package.
"""

import sys

from node_usage.cli import main as cli_main

def main():
    """Main entry point that delegates to the package CLI."""
    try:
        cli_main()
    except KeyboardInterrupt:
        sys.exit(130)  # Standard exit code for Ctrl+C
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

__all__ = ['main']

if __name__ == "__main__":
    main()

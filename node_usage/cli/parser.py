"""
CLI argument parser module.

The parser is generated from the configuration schema so every setting
can be given on the command line as well as in the environment.
"""

from ..config.loader import ConfigLoader

USAGE_TEXT = "Usage:\nnode-usage-collectd <data directory>\n\n"


def create_argument_parser():
    """Create and configure the argument parser."""
    return ConfigLoader.generate_cli_parser()

"""
CLI main application module.

This module contains the main application entry point. It is the only
place that turns errors into process exit codes.
"""

import logging
import sys
from typing import List, Optional

from ..constants import (
    EXIT_CONFIG_ERROR,
    EXIT_CYCLE_FAILED,
    EXIT_DISCOVERY_ERROR,
    EXIT_INTERRUPTED,
    EXIT_SUCCESS,
    EXIT_UNEXPECTED_ERROR,
    EXIT_USAGE,
)

from ..api import (
    DiscoveryError,
    create_http_client,
    discover_usage_href,
)

from ..core import (
    CacheError,
    CredentialsError,
    DiscoveryCache,
    UsageCollector,
    load_credentials,
)

from .parser import (
    USAGE_TEXT,
    create_argument_parser,
)

from ..utils import (
    setup_logging,
)

from ..config import ConfigError, Env

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None):
    """Main entry point for the script."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.data_dir:
        sys.stdout.write(USAGE_TEXT)
        sys.exit(EXIT_USAGE)

    setup_logging(verbose=args.verbose)

    try:
        env = Env.load(cli_args=args)
        credentials = load_credentials(args.data_dir)
    except (ConfigError, CredentialsError) as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(EXIT_CONFIG_ERROR)

    logger.debug(f"Configuration: {env.to_dict()}")

    client = create_http_client(env, credentials)
    try:
        cache = DiscoveryCache(args.data_dir)
        try:
            usage_href = cache.get_or_discover(lambda: discover_usage_href(client, env))
        except CacheError as e:
            logger.error(f"Cache error: {e}")
            sys.exit(EXIT_CONFIG_ERROR)
        except DiscoveryError as e:
            logger.error(f"Could not retrieve usage URI: {e}")
            sys.exit(EXIT_DISCOVERY_ERROR)

        collector = UsageCollector(env, client, usage_href)

        if args.once:
            metrics = collector.run_once()
            sys.exit(EXIT_SUCCESS if metrics is not None else EXIT_CYCLE_FAILED)

        collector.run_forever()

    except KeyboardInterrupt:
        logger.warning("Interrupted by user (Ctrl+C), exiting")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        sys.exit(EXIT_UNEXPECTED_ERROR)
    finally:
        client.close()

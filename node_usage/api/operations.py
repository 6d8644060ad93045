"""
API operations module.

This module performs the two requests the collector makes: the one-time
service discovery and the per-cycle traffic report.
"""

import logging

import httpx

from ..config import Env
from ..constants import USAGE_SUFFIX
from ..models import UsageSnapshot
from .parsing import UsageParseError, parse_service_href, parse_traffic

logger = logging.getLogger(__name__)


class DiscoveryError(Exception):
    """Raised when the usage resource cannot be discovered."""
    pass


def get_xml(client: httpx.Client, path: str) -> str:
    """
    GET a resource and return its decoded body.

    Raises:
        httpx.HTTPStatusError: For non-2xx responses
        httpx.HTTPError: For transport failures and timeouts
    """
    logger.debug(f"GET {path}")
    response = client.get(path)
    response.raise_for_status()
    return response.text


def discover_usage_href(client: httpx.Client, env: Env) -> str:
    """
    Resolve the account's usage resource path.

    Args:
        client: Authenticated HTTP client
        env: Collector configuration (discovery path)

    Returns:
        The service href with the usage suffix appended

    Raises:
        DiscoveryError: If the request fails or the listing has no service
    """
    try:
        xml_text = get_xml(client, env.SERVICE_PATH)
        href = parse_service_href(xml_text)
    except httpx.HTTPStatusError as e:
        response = e.response
        raise DiscoveryError(
            f"Service discovery failed: {response.status_code} {response.reason_phrase}"
        ) from e
    except (httpx.HTTPError, UsageParseError) as e:
        raise DiscoveryError(f"Service discovery failed: {e}") from e

    usage_href = href.rstrip("/") + USAGE_SUFFIX
    logger.info(f"Discovered usage href: {usage_href}")
    return usage_href


def fetch_usage(client: httpx.Client, usage_href: str) -> UsageSnapshot:
    """
    Fetch and parse the current traffic report.

    A single attempt; retries are applied by the caller.

    Raises:
        httpx.HTTPError: For transport failures and non-2xx responses
        UsageParseError: If the payload is malformed
    """
    return parse_traffic(get_xml(client, usage_href))

"""
Usage API client management module.

This module handles creation of the authenticated HTTP client shared by
service discovery and the poll loop.
"""

import logging
from typing import Optional

import httpx

from .. import __version__
from ..config import Env
from ..constants import PROJECT_URL
from ..models import Credentials

logger = logging.getLogger(__name__)

USER_AGENT = f"NodeUsageCollectdPlugin/{__version__} ({PROJECT_URL})"


def create_http_client(
    env: Env,
    credentials: Credentials,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """
    Create an HTTP client bound to the usage API.

    Args:
        env: Collector configuration (base URL and request timeout)
        credentials: HTTP Basic credentials
        transport: Optional transport override, e.g. httpx.MockTransport in tests

    Returns:
        Configured httpx.Client; the caller owns closing it
    """
    client = httpx.Client(
        base_url=env.API_BASE,
        auth=httpx.BasicAuth(*credentials.as_basic_auth()),
        timeout=env.REQUEST_TIMEOUT,
        headers={"User-Agent": USER_AGENT, "Accept": "text/xml"},
        transport=transport,
        follow_redirects=True,
        # Environment proxies would be mounted ahead of an explicit transport
        trust_env=transport is None,
    )
    logger.debug(f"HTTP client initialized for {env.API_BASE} (timeout={env.REQUEST_TIMEOUT}s)")
    return client

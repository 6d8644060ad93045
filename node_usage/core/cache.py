"""
Discovery cache module.

The usage href is discovered once and kept as a single newline-terminated
line in ``<data_dir>/.service_cache`` so restarts skip the discovery call.
A cached href never expires; only an empty or corrupt cache file is discarded.
"""

import logging
import os
from typing import Callable, Optional

from ..constants import CACHE_FILE

logger = logging.getLogger(__name__)


class CacheError(Exception):
    """Raised when the cache file cannot be written or removed."""
    pass


class DiscoveryCache:
    """File-backed cache for the discovered usage href."""

    def __init__(self, data_dir: str):
        self.data_dir = data_dir
        self.path = os.path.join(data_dir, CACHE_FILE)

    def read(self) -> Optional[str]:
        """
        Return the cached href, or None when there is no usable cache.

        An unreadable file is skipped. An empty or undecodable file is deleted.

        Raises:
            CacheError: If an empty or corrupt cache file cannot be deleted
        """
        if not os.access(self.path, os.R_OK):
            return None

        logger.info("Reading cached service url")
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                href = f.readline().rstrip("\r\n")
        except OSError as e:
            logger.warning(f"Could not read cache file {self.path}: {e}")
            return None
        except UnicodeDecodeError:
            logger.warning("Cache is corrupt")
            self.invalidate()
            return None

        if not href.strip():
            logger.warning("Cache is invalid")
            self.invalidate()
            return None

        logger.info(f"Cached href: {href}")
        return href

    def write(self, href: str) -> None:
        """
        Persist ``href`` as the sole line of the cache file.

        Raises:
            CacheError: If the file cannot be written
        """
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(href + "\n")
        except OSError as e:
            raise CacheError(f"Failed to write cache file {self.path}: {e}") from e
        logger.debug(f"Cached usage href in {self.path}")

    def invalidate(self) -> None:
        """
        Delete the cache file.

        Raises:
            CacheError: If the file exists but cannot be deleted
        """
        try:
            os.remove(self.path)
        except FileNotFoundError:
            return
        except OSError as e:
            raise CacheError(f"Could not delete cache file {self.path}: {e}") from e

    def get_or_discover(self, discover: Callable[[], str]) -> str:
        """
        Return the cached href, calling ``discover`` and caching its result on a miss.

        Errors raised by ``discover`` propagate unchanged and nothing is cached.
        """
        href = self.read()
        if href is not None:
            return href

        logger.info("Caching new service url")
        href = discover()
        self.write(href)
        return href

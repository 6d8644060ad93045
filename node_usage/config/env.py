"""
Environment configuration management module.

This module provides the immutable Env value that holds every setting the
collector needs. It is built once at startup and handed to each component;
nothing below the CLI reads the process environment directly.
"""

from __future__ import annotations

import logging
from argparse import Namespace
from dataclasses import dataclass
from typing import Mapping, Optional

from .schema import ConfigSchema
from .loader import ConfigLoader

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when configuration validation fails."""
    pass


@dataclass(frozen=True)
class Env:
    """
    Immutable configuration container for the collector.

    Field names mirror the environment variables they are read from.
    """

    COLLECTD_HOSTNAME: str = "localhost"
    COLLECTD_INTERVAL: int = 3600
    API_BASE: str = "https://customer-webtools-api.internode.on.net"
    SERVICE_PATH: str = "/api/v1.5/"
    MAX_ATTEMPTS: int = 5
    BACKOFF_SECONDS: float = 60.0
    REQUEST_TIMEOUT: float = 10.0
    CAP_RETRIES: bool = True

    @staticmethod
    def load(
        cli_overrides: Optional[Mapping[str, str]] = None,
        cli_args: Optional[Namespace] = None,
    ) -> "Env":
        """
        Load configuration from all sources with precedence handling.

        Args:
            cli_overrides: Optional mapping of values keyed by env var name
            cli_args: Optional parsed CLI arguments

        Returns:
            Configured Env instance

        Raises:
            ConfigError: If any value is invalid
        """
        try:
            config = ConfigLoader.load(
                schema=ConfigSchema,
                cli_args=cli_args,
                cli_overrides=cli_overrides,
            )
        except ValueError as e:
            raise ConfigError(str(e)) from e

        env = Env.from_config(config)
        logger.debug("Environment configuration loaded successfully")
        return env

    @classmethod
    def from_config(cls, config: ConfigSchema) -> "Env":
        """Build an Env from a validated schema instance."""
        return cls(
            COLLECTD_HOSTNAME=config.hostname,
            COLLECTD_INTERVAL=config.interval,
            API_BASE=config.api_base,
            SERVICE_PATH=config.service_path,
            MAX_ATTEMPTS=config.max_attempts,
            BACKOFF_SECONDS=config.backoff_seconds,
            REQUEST_TIMEOUT=config.request_timeout,
            CAP_RETRIES=config.cap_retries,
        )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "Env":
        """
        Create Env instance from mapping (useful for testing).

        The mapping is validated through the same schema as the real
        environment, but .env.local and os.environ are ignored.

        Args:
            mapping: Dictionary of configuration values keyed by env var name

        Returns:
            Env instance

        Raises:
            ConfigError: If any value is invalid
        """
        try:
            config = ConfigLoader.load(schema=ConfigSchema, environ=dict(mapping))
        except ValueError as e:
            raise ConfigError(str(e)) from e
        return cls.from_config(config)

    def to_dict(self) -> dict:
        """
        Convert environment to dictionary representation.

        Returns:
            Dictionary with all configuration values
        """
        return {
            "COLLECTD_HOSTNAME": self.COLLECTD_HOSTNAME,
            "COLLECTD_INTERVAL": self.COLLECTD_INTERVAL,
            "API_BASE": self.API_BASE,
            "SERVICE_PATH": self.SERVICE_PATH,
            "MAX_ATTEMPTS": self.MAX_ATTEMPTS,
            "BACKOFF_SECONDS": self.BACKOFF_SECONDS,
            "REQUEST_TIMEOUT": self.REQUEST_TIMEOUT,
            "CAP_RETRIES": self.CAP_RETRIES,
        }

"""
Configuration schema definition using Pydantic.

This module defines the declarative configuration schema that serves as
the single source of truth for all configuration in the application.
"""

from typing import Any
from pydantic import BaseModel, Field, field_validator


DEFAULT_API_BASE = "https://customer-webtools-api.internode.on.net"
DEFAULT_SERVICE_PATH = "/api/v1.5/"


class ConfigSchema(BaseModel):
    """
    Declarative configuration schema.

    This is the single source of truth for all application configuration.
    Each field can be set via environment variables or CLI arguments.
    """

    # Collectd integration
    hostname: str = Field(
        "localhost",
        min_length=1,
        description="Host name used in the PUTVAL identifier",
        json_schema_extra={
            "env_var": "COLLECTD_HOSTNAME",
            "cli_arg": "hostname",
        }
    )

    interval: int = Field(
        3600,
        gt=0,
        description="Polling interval in seconds, also sent as the PUTVAL interval",
        json_schema_extra={
            "env_var": "COLLECTD_INTERVAL",
            "cli_arg": "interval",
        }
    )

    # Usage API endpoints
    api_base: str = Field(
        DEFAULT_API_BASE,
        description="Base URL of the customer usage API",
        json_schema_extra={
            "env_var": "NODE_USAGE_API_BASE",
            "cli_arg": "api_base",
        }
    )

    service_path: str = Field(
        DEFAULT_SERVICE_PATH,
        description="Path of the service discovery endpoint",
        json_schema_extra={
            "env_var": "NODE_USAGE_SERVICE_PATH",
            "cli_arg": "service_path",
        }
    )

    # Retry and timeout configuration
    max_attempts: int = Field(
        5,
        ge=1,
        description="Attempts per poll cycle before giving up",
        json_schema_extra={
            "env_var": "NODE_USAGE_MAX_ATTEMPTS",
            "cli_arg": "max_attempts",
        }
    )

    backoff_seconds: float = Field(
        60.0,
        ge=0,
        description="Backoff step in seconds; the Nth failure waits N steps",
        json_schema_extra={
            "env_var": "NODE_USAGE_BACKOFF_SECONDS",
            "cli_arg": "backoff_seconds",
        }
    )

    request_timeout: float = Field(
        10.0,
        gt=0,
        description="Per-request network timeout in seconds",
        json_schema_extra={
            "env_var": "NODE_USAGE_REQUEST_TIMEOUT",
            "cli_arg": "request_timeout",
        }
    )

    cap_retries: bool = Field(
        True,
        description="Give up on a cycle rather than back off past one interval",
        json_schema_extra={
            "env_var": "NODE_USAGE_CAP_RETRIES",
            "cli_arg": "cap_retries",
            "cli_choices": ["true", "false"],
        }
    )

    @field_validator('api_base', mode='before')
    @classmethod
    def strip_trailing_slash(cls, v: Any) -> Any:
        """Usage hrefs are absolute paths, so the base must not end in '/'."""
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    @field_validator('interval', mode='before')
    @classmethod
    def parse_interval(cls, v: Any) -> Any:
        """Accept collectd's fractional form, e.g. COLLECTD_INTERVAL=3600.000."""
        if isinstance(v, str):
            try:
                return int(float(v.strip()))
            except ValueError:
                return v
        return v

    @field_validator('cap_retries', mode='before')
    @classmethod
    def parse_bool(cls, v: Any) -> bool:
        """Parse boolean from string values."""
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            v_lower = v.strip().lower()
            if v_lower in ('1', 'true', 'yes', 'on'):
                return True
            elif v_lower in ('0', 'false', 'no', 'off'):
                return False
            else:
                raise ValueError(f"Invalid boolean value: {v}")
        return bool(v)

    model_config = {
        "validate_assignment": True,
        "extra": "forbid"
    }

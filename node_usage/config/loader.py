"""
Schema-driven configuration loader.

This module provides a ConfigLoader that uses the configuration schema
to automatically load, validate, and merge configuration from multiple sources.
"""

import logging
import os
import typing
from typing import Dict, Any, Optional, Mapping
from argparse import ArgumentParser, Namespace

from dotenv import load_dotenv
from pydantic import ValidationError

from .schema import ConfigSchema


logger = logging.getLogger(__name__)

DOTENV_FILE = ".env.local"


class ConfigLoader:
    """Loads and validates configuration using a schema-driven approach."""

    @staticmethod
    def load(
        schema: type[ConfigSchema] = ConfigSchema,
        cli_args: Optional[Namespace] = None,
        cli_overrides: Optional[Mapping[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> ConfigSchema:
        """
        Load configuration from all sources with precedence handling.

        Loading order (lowest to highest priority):
        1. Schema defaults
        2. .env.local file (if it exists)
        3. OS environment variables (or the supplied ``environ`` mapping)
        4. CLI arguments (highest priority)

        Args:
            schema: The configuration schema class to use
            cli_args: Parsed CLI arguments (if available)
            cli_overrides: Overrides keyed by environment variable name
            environ: Mapping used instead of os.environ (skips .env.local)

        Returns:
            Validated configuration instance

        Raises:
            ValueError: If configuration validation fails
        """
        config_dict: Dict[str, Any] = {}

        # Step 1: Load from .env.local file if available
        if environ is None:
            _load_from_dotenv_file()
            environ = os.environ

        # Step 2: Load from environment variables based on schema
        for field_name, field_info in schema.model_fields.items():
            env_var = _extra(field_info, "env_var")
            if env_var:
                env_value = environ.get(env_var)
                if env_value is not None:
                    stripped = env_value.strip()
                    if stripped:
                        config_dict[field_name] = stripped

        # Step 3: Apply CLI arguments (highest priority)
        if cli_args:
            for field_name, field_info in schema.model_fields.items():
                cli_arg = _extra(field_info, "cli_arg")
                if cli_arg and hasattr(cli_args, cli_arg):
                    cli_value = getattr(cli_args, cli_arg)
                    if cli_value is not None:
                        if isinstance(cli_value, str):
                            stripped = cli_value.strip()
                            if stripped:
                                config_dict[field_name] = stripped
                        else:
                            config_dict[field_name] = cli_value

        # Step 4: Apply explicit overrides keyed by env var name
        if cli_overrides:
            for field_name, field_info in schema.model_fields.items():
                env_var = _extra(field_info, "env_var")
                if env_var in cli_overrides and cli_overrides[env_var] is not None:
                    value = cli_overrides[env_var]
                    if isinstance(value, str):
                        value = value.strip()
                        if not value:
                            continue
                    config_dict[field_name] = value

        # Step 5: Create and validate the configuration
        try:
            config = schema(**config_dict)
            logger.debug("Configuration loaded and validated successfully")
            return config
        except ValidationError as e:
            errors = []
            for error in e.errors():
                field = error["loc"][0] if error["loc"] else "config"
                msg = error["msg"]
                field_info = schema.model_fields.get(field)
                env_var = _extra(field_info, "env_var") if field_info else None
                errors.append(f"{env_var or str(field).upper()}: {msg}")

            error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {err}" for err in errors)
            raise ValueError(error_msg) from e

    @staticmethod
    def generate_cli_parser(
        schema: type[ConfigSchema] = ConfigSchema,
        description: str = "Report Internode usage to collectd as PUTVAL lines",
    ) -> ArgumentParser:
        """
        Generate an ArgumentParser from the configuration schema.

        The data directory is optional at the parser level so the caller can
        print the plugin's own usage text and exit code when it is missing.

        Args:
            schema: The configuration schema class
            description: Parser description

        Returns:
            Configured ArgumentParser
        """
        parser = ArgumentParser(
            description=description,
            epilog="""
Examples:
  node-usage-collectd /var/lib/node-usage
  node-usage-collectd /var/lib/node-usage --interval 600 --verbose
  node-usage-collectd /var/lib/node-usage --once
            """,
        )

        # Add CLI-only arguments that don't map to config
        parser.add_argument(
            "data_dir",
            nargs="?",
            help="Directory holding the .auth file and the .service_cache file",
        )
        parser.add_argument(
            "--verbose",
            action="store_true",
            help="Enable verbose logging (DEBUG level)",
        )
        parser.add_argument(
            "--once",
            action="store_true",
            help="Run a single poll cycle and exit instead of looping forever",
        )

        # Add schema-based arguments
        for field_name, field_info in schema.model_fields.items():
            cli_arg = _extra(field_info, "cli_arg")
            if not cli_arg:
                continue

            arg_name = f"--{cli_arg.replace('_', '-')}"

            kwargs = {
                "help": field_info.description or f"Override {_extra(field_info, 'env_var')} env var",
                "default": None,  # Don't set schema defaults here - let the loader handle it
            }

            field_type = field_info.annotation

            # Unwrap Optional[X]
            if typing.get_origin(field_type) is typing.Union:
                non_none_args = [arg for arg in typing.get_args(field_type) if arg is not type(None)]
                if len(non_none_args) == 1:
                    field_type = non_none_args[0]

            if field_type == int:
                kwargs["type"] = int
            elif field_type == float:
                kwargs["type"] = float
            elif field_type == bool:
                choices = _extra(field_info, "cli_choices")
                if choices:
                    kwargs["choices"] = choices
                else:
                    kwargs["action"] = "store_true"

            parser.add_argument(arg_name, **kwargs)

        return parser


def _extra(field_info, key: str) -> Optional[Any]:
    """Read a key from a field's json_schema_extra metadata."""
    extra = field_info.json_schema_extra
    if not extra:
        return None
    return extra.get(key)


def _load_from_dotenv_file() -> None:
    """Load values from .env.local file if it exists."""
    if os.path.exists(DOTENV_FILE):
        load_dotenv(DOTENV_FILE, override=False)
        logger.debug(f"Loaded configuration from {DOTENV_FILE} file")
    else:
        logger.debug(f"{DOTENV_FILE} file not found, skipping")

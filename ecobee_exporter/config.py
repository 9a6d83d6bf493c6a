"""Configuration for the Ecobee Prometheus exporter.

Settings are read from command line flags and ``ECOBEE_*`` environment
variables, flags taking precedence, and validated against a voluptuous
schema.
"""

from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Mapping, Sequence
from typing import Any

import voluptuous as vol

from .const import (
    CONF_ACCESS_TOKEN,
    CONF_LISTEN_ADDRESS,
    CONF_LISTEN_PORT,
    CONF_LOG_LEVEL,
    CONF_METRIC_PREFIX,
    CONF_REQUEST_TIMEOUT,
    DEFAULT_LISTEN_ADDRESS,
    DEFAULT_LISTEN_PORT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_METRIC_PREFIX,
    DEFAULT_REQUEST_TIMEOUT,
    ENV_PREFIX,
)

_LOGGER = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
METRIC_PREFIX_PATTERN = r"^[a-zA-Z_:][a-zA-Z0-9_:]*$"

CONFIG_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_ACCESS_TOKEN): vol.All(str, vol.Length(min=1)),
        vol.Optional(CONF_METRIC_PREFIX, default=DEFAULT_METRIC_PREFIX): vol.All(
            str, vol.Match(METRIC_PREFIX_PATTERN)
        ),
        vol.Optional(CONF_LISTEN_ADDRESS, default=DEFAULT_LISTEN_ADDRESS): str,
        vol.Optional(CONF_LISTEN_PORT, default=DEFAULT_LISTEN_PORT): vol.All(
            vol.Coerce(int), vol.Range(min=1, max=65535)
        ),
        vol.Optional(CONF_REQUEST_TIMEOUT, default=DEFAULT_REQUEST_TIMEOUT): vol.All(
            vol.Coerce(float), vol.Range(min=0, min_included=False)
        ),
        vol.Optional(CONF_LOG_LEVEL, default=DEFAULT_LOG_LEVEL): vol.All(
            str, vol.Upper, vol.In(LOG_LEVELS)
        ),
    }
)

CONFIG_KEYS = (
    CONF_ACCESS_TOKEN,
    CONF_METRIC_PREFIX,
    CONF_LISTEN_ADDRESS,
    CONF_LISTEN_PORT,
    CONF_REQUEST_TIMEOUT,
    CONF_LOG_LEVEL,
)


class ConfigError(Exception):
    """Exception raised for missing or invalid configuration."""


def create_parser() -> argparse.ArgumentParser:
    """Create the command line parser; unset flags default to None."""
    parser = argparse.ArgumentParser(
        prog="ecobee-exporter",
        description="Export Ecobee thermostat metrics for Prometheus.",
    )
    for key in CONFIG_KEYS:
        parser.add_argument(
            "--" + key.replace("_", "-"),
            dest=key,
            default=None,
            help=f"overrides ${env_var(key)}",
        )
    return parser


def env_var(key: str) -> str:
    """Return the environment variable name for a configuration key."""
    return f"{ENV_PREFIX}{key.upper()}"


def validate_config(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Validate raw settings and fill in defaults.

    Raises:
        ConfigError: If a value is missing or invalid.

    """
    try:
        return CONFIG_SCHEMA(dict(raw))
    except vol.Invalid as err:
        error_msg = f"Invalid configuration: {err}"
        raise ConfigError(error_msg) from err


def load_config(
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Load configuration from command line flags and the environment.

    Args:
        argv: Command line arguments, without the program name.
        environ: Environment mapping; defaults to ``os.environ``.

    Returns:
        Validated configuration dictionary.

    Raises:
        ConfigError: If a value is missing or invalid.

    """
    if environ is None:
        environ = os.environ

    raw: dict[str, Any] = {}
    for key in CONFIG_KEYS:
        value = environ.get(env_var(key))
        if value:
            raw[key] = value

    args = create_parser().parse_args(argv)
    raw.update({k: v for k, v in vars(args).items() if v is not None})

    config = validate_config(raw)
    _LOGGER.debug(
        "Loaded configuration: %s",
        {k: v for k, v in config.items() if k != CONF_ACCESS_TOKEN},
    )
    return config

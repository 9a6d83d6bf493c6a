"""Prometheus exporter for Ecobee thermostats."""

from __future__ import annotations

import logging
from typing import Any

from prometheus_client import REGISTRY, CollectorRegistry

from .api import EcobeeClient, create_session_client
from .collector import EcobeeCollector
from .const import CONF_ACCESS_TOKEN, CONF_METRIC_PREFIX, CONF_REQUEST_TIMEOUT

__all__ = ["EcobeeCollector", "setup_exporter"]

_LOGGER = logging.getLogger(__name__)


def setup_exporter(
    config: dict[str, Any], registry: CollectorRegistry = REGISTRY
) -> EcobeeCollector:
    """Create the Ecobee collector and register it with ``registry``.

    Raises:
        ValueError: If metrics with the same prefix are already registered.

    """
    prefix = config[CONF_METRIC_PREFIX]
    _LOGGER.info("Setting up Ecobee collector with metric prefix %s", prefix)

    session = create_session_client(config[CONF_REQUEST_TIMEOUT])
    client = EcobeeClient(session, config[CONF_ACCESS_TOKEN])
    collector = EcobeeCollector(client, prefix)

    try:
        registry.register(collector)
    except ValueError:
        _LOGGER.error("Metric prefix %s is already registered", prefix)
        client.close()
        raise

    _LOGGER.debug(
        "Registered %d metric descriptors",
        len(list(collector.descriptors.all())),
    )
    return collector

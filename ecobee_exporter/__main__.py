"""Command line entry point serving Ecobee metrics over HTTP."""

from __future__ import annotations

import logging
import sys
import threading
from collections.abc import Sequence

from prometheus_client import start_http_server

from . import setup_exporter
from .config import ConfigError, load_config
from .const import CONF_LISTEN_ADDRESS, CONF_LISTEN_PORT, CONF_LOG_LEVEL

_LOGGER = logging.getLogger("ecobee_exporter")


def setup_logging(log_level: str) -> None:
    """Configure logging for the exporter."""
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run the exporter until interrupted and return the exit status."""
    try:
        config = load_config(argv)
    except ConfigError as err:
        print(err, file=sys.stderr)  # noqa: T201
        return 2

    setup_logging(config[CONF_LOG_LEVEL])
    setup_exporter(config)

    address = config[CONF_LISTEN_ADDRESS]
    port = config[CONF_LISTEN_PORT]
    server, thread = start_http_server(port, addr=address)
    _LOGGER.info("Serving Ecobee metrics on %s:%d", address, port)

    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        _LOGGER.info("Shutting down")
    finally:
        server.shutdown()
        thread.join()
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Entry point for the Fleet Complete MCP server (stdio transport).

This module wires a ``FleetSession`` backed by the JSON-RPC API into a FastMCP
app and registers tools, resources, and prompts. The session is created by
``main`` and passed explicitly to every registration.

Registered tools:
- ``authenticate``: open a session with a user name, password, and database
- ``get_vehicles``: list vehicle summaries
- ``get_vehicle_locations``: list current vehicle positions
- ``get_devices``: list raw telematics device records
"""

import logging
import os
import signal
import sys
from types import SimpleNamespace

from fastmcp import FastMCP

from . import prompts, resources
from .client.session import FleetSession, create_rpc_session
from .config import FleetConfig
from .operations.devices import get_devices, get_vehicle_locations, get_vehicles
from .tools.authenticate import register as register_authenticate
from .tools.get_devices import register as register_get_devices
from .tools.get_vehicle_locations import register as register_get_vehicle_locations
from .tools.get_vehicles import register as register_get_vehicles

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logger = logging.getLogger("fleet_complete_mcp.server")


def configure_logging() -> None:
    """Configure root logging to stderr; stdout carries the MCP protocol."""
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(name)s [%(levelname)s] %(message)s",
        stream=sys.stderr,
    )


def create_app(session: FleetSession) -> FastMCP:
    """Create the FastMCP app and register all capabilities against ``session``."""
    app = FastMCP(
        name="fleet-complete-mcp",
        instructions=(
            "Expose tools that query a Fleet Complete (Geotab) fleet: vehicles, their current "
            "locations, and telematics devices. Call authenticate first unless credentials are configured."
        ),
    )
    deps = SimpleNamespace(
        session=session,
        get_vehicles=get_vehicles,
        get_vehicle_locations=get_vehicle_locations,
        get_devices=get_devices,
    )
    register_authenticate(app, deps=deps)
    register_get_vehicles(app, deps=deps)
    register_get_vehicle_locations(app, deps=deps)
    register_get_devices(app, deps=deps)
    resources.register(app, deps=deps)
    prompts.register(app)
    return app


def handle_interrupt(signum: int, frame: object) -> None:  # noqa: ARG001
    """Handle keyboard interrupt gracefully."""
    logger.info("Received interrupt signal, shutting down...")
    sys.exit(0)


def main() -> None:
    """Entry point for the fleet-complete-mcp console script."""
    configure_logging()
    signal.signal(signal.SIGINT, handle_interrupt)
    signal.signal(signal.SIGTERM, handle_interrupt)

    config = FleetConfig.from_env()
    config.warn_if_unconfigured(logger)
    app = create_app(create_rpc_session(config))
    logger.info("Fleet Complete MCP server starting (RPC server %s)", config.rpc_server)
    app.run()


__all__ = [
    "configure_logging",
    "create_app",
    "handle_interrupt",
    "main",
]


if __name__ == "__main__":
    main()

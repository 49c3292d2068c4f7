"""Dashboard routes.

- GET  /                     - dashboard page
- POST /auth/fleet-complete  - log in with the configured credentials
- GET  /auth/status          - current authentication snapshot
- GET  /api/vehicles         - active vehicles
- GET  /api/locations        - flattened vehicle locations
- GET  /api/drivers          - driver assignments
- GET  /api/geofences        - geofences
- GET  /api/debug            - token and configuration introspection
- GET  /health               - liveness probe
"""

from datetime import UTC, datetime
from importlib.resources import files
from string import Template
from typing import Any

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from ..operations.hub import (
    list_active_vehicles,
    list_driver_assignments,
    list_geofences,
    list_vehicle_locations,
)
from .deps import SessionDep

SERVICE_NAME = "Fleet Complete API MCP"

router = APIRouter()


def _load_dashboard_template() -> Template:
    """Load the bundled dashboard HTML from package resources."""
    html = files("fleet_complete_mcp.ui").joinpath("dashboard.html").read_text(encoding="utf-8")
    return Template(html)


@router.get("/", response_class=HTMLResponse)
async def dashboard(session: SessionDep) -> str:
    config = session.config
    return _load_dashboard_template().safe_substitute(
        graphql_url=config.graphql_url,
        token_url=config.token_url,
    )


@router.post("/auth/fleet-complete")
async def authenticate(session: SessionDep) -> dict[str, Any]:
    credential = await session.authenticate()
    return {
        "success": True,
        "message": "Authentication successful",
        "userId": credential.identity.user_id,
        "fleetId": credential.identity.fleet_id,
    }


@router.get("/auth/status")
async def auth_status(session: SessionDep) -> dict[str, Any]:
    return session.status()


@router.get("/api/vehicles")
async def vehicles(session: SessionDep) -> dict[str, Any]:
    return await list_active_vehicles(session)


@router.get("/api/locations")
async def locations(session: SessionDep) -> dict[str, Any]:
    return await list_vehicle_locations(session)


@router.get("/api/drivers")
async def drivers(session: SessionDep) -> dict[str, Any]:
    return await list_driver_assignments(session)


@router.get("/api/geofences")
async def geofences(session: SessionDep) -> dict[str, Any]:
    return await list_geofences(session)


@router.get("/api/debug")
async def debug(session: SessionDep) -> dict[str, Any]:
    return session.debug_info()


@router.get("/health")
async def health(session: SessionDep) -> dict[str, Any]:
    return {
        "status": "healthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "authenticated": session.is_authenticated,
        "service": SERVICE_NAME,
    }


__all__ = ["SERVICE_NAME", "router"]

"""Handlers for the dashboard's GraphQL-backed routes.

Each handler runs one fixed query and returns the ``{success, <entity>, count}``
envelope served by the HTTP routes.
"""

import logging
from typing import Any

from ..client.results import unwrap
from ..client.session import FleetSession
from .common import ListEnvelope, Record, as_records, build_list_envelope
from .queries import (
    ACTIVE_VEHICLES_QUERY,
    DRIVER_ASSIGNMENTS_QUERY,
    GEOFENCES_QUERY,
    VEHICLE_LOCATIONS_QUERY,
)

logger = logging.getLogger("fleet_complete_mcp.operations.hub")


async def _query_list(session: FleetSession, query: str, field: str) -> list[Record]:
    """Run ``query`` and return the list found under ``data[field]``."""
    data = unwrap(await session.call(query))
    items = as_records(data.get(field) if isinstance(data, dict) else None)
    logger.debug("%s returned %d items", field, len(items))
    return items


def _nested(record: Record, *path: str) -> Any:
    """Follow ``path`` through nested dicts, returning ``None`` when a level is missing."""
    current: Any = record
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def serialize_vehicle_location(vehicle: Record) -> Record:
    """Flatten a vehicle's latest data into a location record."""
    return {
        "vehicleId": vehicle.get("id"),
        "name": vehicle.get("name"),
        "licensePlate": vehicle.get("licensePlate"),
        "location": {
            "latitude": _nested(vehicle, "latestData", "gps", "latitude"),
            "longitude": _nested(vehicle, "latestData", "gps", "longitude"),
            "speed": _nested(vehicle, "latestData", "gps", "speed"),
            "heading": _nested(vehicle, "latestData", "gps", "heading"),
            "address": _nested(vehicle, "latestData", "address", "address"),
            "city": _nested(vehicle, "latestData", "address", "city"),
            "timestamp": _nested(vehicle, "latestData", "timestamp"),
        },
    }


async def list_active_vehicles(session: FleetSession) -> ListEnvelope:
    """Return active vehicles with their latest telemetry."""
    vehicles = await _query_list(session, ACTIVE_VEHICLES_QUERY, "getActiveVehicles")
    return build_list_envelope("vehicles", vehicles)


async def list_vehicle_locations(session: FleetSession) -> ListEnvelope:
    """Return one flattened location record per active vehicle."""
    vehicles = await _query_list(session, VEHICLE_LOCATIONS_QUERY, "getActiveVehicles")
    return build_list_envelope("locations", [serialize_vehicle_location(vehicle) for vehicle in vehicles])


async def list_driver_assignments(session: FleetSession) -> ListEnvelope:
    """Return driver-to-vehicle assignments."""
    assignments = await _query_list(session, DRIVER_ASSIGNMENTS_QUERY, "getDriverAssignments")
    return build_list_envelope("assignments", assignments)


async def list_geofences(session: FleetSession) -> ListEnvelope:
    """Return configured geofences."""
    geofences = await _query_list(session, GEOFENCES_QUERY, "getGeofences")
    return build_list_envelope("geofences", geofences)


__all__ = [
    "list_active_vehicles",
    "list_driver_assignments",
    "list_geofences",
    "list_vehicle_locations",
    "serialize_vehicle_location",
]

"""Device, vehicle, and location handlers for the JSON-RPC API.

Each handler issues a single ``Get`` call for a fixed entity type with a
``resultsLimit`` parameter and reshapes the returned records.
"""

import logging
from typing import Any

from ..client.results import unwrap
from ..client.session import FleetSession
from .common import Record, as_records, compact, resolve_results_limit

logger = logging.getLogger("fleet_complete_mcp.operations.devices")

DEVICE_TYPE = "Device"
STATUS_TYPE = "DeviceStatusInfo"


def build_get_params(type_name: str, results_limit: int | None = None) -> dict[str, Any]:
    """Return ``Get`` parameters for ``type_name`` with the resolved limit."""
    return {"typeName": type_name, "resultsLimit": resolve_results_limit(results_limit)}


def serialize_vehicle(device: Record) -> Record:
    """Reduce a ``Device`` record to the fields that identify a vehicle."""
    return compact(
        {
            "id": device.get("id"),
            "name": device.get("name"),
            "serialNumber": device.get("serialNumber"),
            "vin": device.get("vehicleIdentificationNumber"),
            "licensePlate": device.get("licensePlate"),
            "licenseState": device.get("licenseState"),
            "deviceType": device.get("deviceType"),
            "activeFrom": device.get("activeFrom"),
            "activeTo": device.get("activeTo"),
        },
    )


def serialize_location(status: Record) -> Record:
    """Flatten a ``DeviceStatusInfo`` record into a position record."""
    device = status.get("device")
    device_id = device.get("id") if isinstance(device, dict) else device
    return compact(
        {
            "deviceId": device_id,
            "latitude": status.get("latitude"),
            "longitude": status.get("longitude"),
            "speed": status.get("speed"),
            "bearing": status.get("bearing"),
            "dateTime": status.get("dateTime"),
            "isDriving": status.get("isDriving"),
            "isDeviceCommunicating": status.get("isDeviceCommunicating"),
        },
    )


async def get_devices(session: FleetSession, *, results_limit: int | None = None) -> list[Record]:
    """Return raw ``Device`` records.

    Raises:
        AuthError: If the session cannot authenticate.
        UpstreamError: On HTTP-level failures.
        ApiError: If the response carries an ``error`` object.

    """
    params = build_get_params(DEVICE_TYPE, results_limit)
    devices = as_records(unwrap(await session.call("Get", params)))
    logger.info("Retrieved %d devices", len(devices))
    return devices


async def get_vehicles(session: FleetSession, *, results_limit: int | None = None) -> list[Record]:
    """Return vehicle summaries built from ``Device`` records."""
    params = build_get_params(DEVICE_TYPE, results_limit)
    devices = as_records(unwrap(await session.call("Get", params)))
    logger.info("Retrieved %d vehicles", len(devices))
    return [serialize_vehicle(device) for device in devices]


async def get_vehicle_locations(session: FleetSession, *, results_limit: int | None = None) -> list[Record]:
    """Return current positions built from ``DeviceStatusInfo`` records."""
    params = build_get_params(STATUS_TYPE, results_limit)
    statuses = as_records(unwrap(await session.call("Get", params)))
    logger.info("Retrieved %d vehicle locations", len(statuses))
    return [serialize_location(status) for status in statuses]


__all__ = [
    "DEVICE_TYPE",
    "STATUS_TYPE",
    "build_get_params",
    "get_devices",
    "get_vehicle_locations",
    "get_vehicles",
    "serialize_location",
    "serialize_vehicle",
]

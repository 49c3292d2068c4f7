"""Unit tests for the GraphQL-backed dashboard handlers."""

import pytest
from stubs import SAMPLE_ACTIVE_VEHICLES, StubUpstream, live_credential

from fleet_complete_mcp.client.session import FleetSession, create_graphql_session
from fleet_complete_mcp.config import FleetConfig
from fleet_complete_mcp.errors import ApiError, UpstreamError
from fleet_complete_mcp.operations.hub import (
    list_active_vehicles,
    list_driver_assignments,
    list_geofences,
    list_vehicle_locations,
    serialize_vehicle_location,
)
from fleet_complete_mcp.operations.queries import DRIVER_ASSIGNMENTS_QUERY, GEOFENCES_QUERY


@pytest.fixture
def session(config: FleetConfig, upstream: StubUpstream) -> FleetSession:
    """Return a GraphQL session that already holds a live credential."""
    session = create_graphql_session(config, transport=upstream.transport)
    session.store.set(live_credential())
    return session


@pytest.mark.asyncio
async def test_active_vehicles_envelope(session: FleetSession, upstream: StubUpstream) -> None:
    upstream.add("/graphql", 200, {"data": {"getActiveVehicles": SAMPLE_ACTIVE_VEHICLES}})

    envelope = await list_active_vehicles(session)

    assert envelope == {"success": True, "vehicles": SAMPLE_ACTIVE_VEHICLES, "count": 2}


@pytest.mark.asyncio
async def test_locations_are_flattened(session: FleetSession, upstream: StubUpstream) -> None:
    upstream.add("/graphql", 200, {"data": {"getActiveVehicles": SAMPLE_ACTIVE_VEHICLES}})

    envelope = await list_vehicle_locations(session)

    assert envelope["count"] == 2
    first, second = envelope["locations"]
    assert first == {
        "vehicleId": "veh-0001",
        "name": "Truck 1",
        "licensePlate": "ABC-123",
        "location": {
            "latitude": 43.65,
            "longitude": -79.38,
            "speed": 42.0,
            "heading": 90,
            "address": "1 Main St",
            "city": "Toronto",
            "timestamp": "2025-01-15T12:00:00Z",
        },
    }
    # Vehicles without latest data keep every location key, set to None
    assert set(second["location"]) == set(first["location"])
    assert all(value is None for value in second["location"].values())


@pytest.mark.asyncio
async def test_drivers_and_geofences(session: FleetSession, upstream: StubUpstream) -> None:
    upstream.add("/graphql", 200, {"data": {"getDriverAssignments": [{"driverId": "d1", "vehicleId": "veh-0001"}]}})
    upstream.add("/graphql", 200, {"data": {"getGeofences": [{"id": "g1", "name": "Depot"}, {"id": "g2"}]}})

    drivers = await list_driver_assignments(session)
    geofences = await list_geofences(session)

    assert drivers == {"success": True, "assignments": [{"driverId": "d1", "vehicleId": "veh-0001"}], "count": 1}
    assert geofences["count"] == 2
    queries = [body["query"] for body in upstream.bodies("/graphql")]
    assert queries == [DRIVER_ASSIGNMENTS_QUERY, GEOFENCES_QUERY]


@pytest.mark.asyncio
async def test_missing_field_is_empty_list(session: FleetSession, upstream: StubUpstream) -> None:
    upstream.add("/graphql", 200, {"data": None})
    assert await list_geofences(session) == {"success": True, "geofences": [], "count": 0}


@pytest.mark.asyncio
async def test_graphql_errors_raise(session: FleetSession, upstream: StubUpstream) -> None:
    upstream.add("/graphql", 200, {"errors": [{"message": "Not authorized"}], "data": None})
    with pytest.raises(ApiError, match="Not authorized"):
        await list_active_vehicles(session)


@pytest.mark.asyncio
async def test_http_failure_raises_upstream(session: FleetSession, upstream: StubUpstream) -> None:
    upstream.add("/graphql", 502, {"message": "bad gateway"})
    with pytest.raises(UpstreamError) as exc_info:
        await list_vehicle_locations(session)
    assert exc_info.value.status == 502


def test_serialize_vehicle_location_tolerates_partial_data() -> None:
    location = serialize_vehicle_location({"id": "v", "latestData": {"gps": None}})["location"]
    assert location["latitude"] is None
    assert location["timestamp"] is None

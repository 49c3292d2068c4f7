"""GraphQL query documents for the Fleet Complete Hub API."""

ACTIVE_VEHICLES_QUERY = """
query GetActiveVehicles {
    getActiveVehicles {
        id
        name
        fleetId
        vin
        licensePlate
        make
        model
        year
        latestData {
            timestamp
            gps {
                latitude
                longitude
                speed
                heading
            }
            address {
                address
                city
                region
                country
            }
            ignition {
                value
                timestamp
            }
            odometer {
                value
                timestamp
            }
        }
    }
}
"""

VEHICLE_LOCATIONS_QUERY = """
query GetActiveVehicles {
    getActiveVehicles {
        id
        name
        licensePlate
        latestData {
            timestamp
            gps {
                latitude
                longitude
                speed
                heading
            }
            address {
                address
                city
                region
                country
            }
        }
    }
}
"""

DRIVER_ASSIGNMENTS_QUERY = """
query GetDriverAssignments {
    getDriverAssignments {
        id
        vehicleId
        driverId
        startedAt
        endedAt
        isDeleted
    }
}
"""

GEOFENCES_QUERY = """
query GetGeofences {
    getGeofences {
        id
        name
        fleetId
        type
        color
        description
        geojson
        address {
            address
            city
            region
            country
        }
    }
}
"""

__all__ = [
    "ACTIVE_VEHICLES_QUERY",
    "DRIVER_ASSIGNMENTS_QUERY",
    "GEOFENCES_QUERY",
    "VEHICLE_LOCATIONS_QUERY",
]

"""Operations package for Fleet Complete request handlers.

Each module maps external operations onto session calls and reshapes the
results for the caller:
- ``devices``: device, vehicle, and location handlers for the JSON-RPC API
- ``hub``: vehicle, location, driver-assignment, and geofence handlers for GraphQL
- ``queries``: GraphQL query documents used by ``hub``
- ``common``: shared defaulting and envelope helpers
"""

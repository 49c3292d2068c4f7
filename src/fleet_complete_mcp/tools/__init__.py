"""Tools package for MCP server.

Contains MCP tool registration modules:
- ``authenticate``: Open a session with explicit credentials
- ``get_vehicles``: List vehicle summaries
- ``get_vehicle_locations``: List current vehicle positions
- ``get_devices``: List raw telematics device records
- ``common``: Shared utilities for tool registration
"""

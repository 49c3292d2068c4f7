"""MCP prompts for fleet operations.

Exposes common fleet-management questions as prompts.
"""

# pyright: reportUnusedFunction=false

from fastmcp import FastMCP


def register(app: FastMCP) -> None:
    """Register prompts on the provided app instance."""

    @app.prompt(
        name="Summarize Fleet",
        description="Create a prompt to summarize the vehicles in the fleet.",
        tags={"summary", "vehicles"},
    )
    def summarize_fleet() -> str:
        return (
            "Please summarize the current fleet. "
            "Use the get_vehicles tool to list the vehicles and the get_vehicle_locations tool "
            "to report where they are. Highlight vehicles that are not communicating."
        )

    @app.prompt(
        name="Locate Vehicle",
        description="Find the latest known position of a specific vehicle.",
        tags={"locations", "vehicles"},
    )
    def locate_vehicle(vehicle_name: str) -> str:
        return (
            f"Where is the vehicle '{vehicle_name}' right now? "
            "Use get_vehicles to find its device id, then get_vehicle_locations to report "
            "its latitude, longitude, speed, and the time of the last update."
        )

    @app.prompt(
        name="Audit Devices",
        description="Check telematics devices for inactive or incomplete records.",
        tags={"troubleshooting", "devices"},
    )
    def audit_devices(results_limit: int = 50) -> str:
        return (
            f"Please review up to {results_limit} telematics devices using the get_devices tool. "
            "List devices whose activeTo date is in the past or that have no VIN or license plate."
        )


__all__ = ["register"]

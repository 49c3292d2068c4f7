"""MCP tool: get_vehicle_locations.

Lists the latest known position, speed, and bearing of each vehicle.
"""

# pyright: reportUnusedFunction=false

from types import SimpleNamespace

from fastmcp import Context, FastMCP

from ..operations.common import DEFAULT_RESULTS_LIMIT
from .common import ToolConfig, generic_list_tool


def register(app: FastMCP, *, deps: SimpleNamespace) -> None:
    """Register the get_vehicle_locations tool on the provided app instance.

    Args:
        app: The FastMCP application instance to add the tool to.
        deps: Dependencies namespace with the session and get_vehicle_locations.

    """
    tool_config = ToolConfig(
        handler=deps.get_vehicle_locations,
        noun="vehicle locations",
        log_message="Listing current vehicle locations from Fleet Complete.",
    )

    @app.tool(
        name="get_vehicle_locations",
        description="Return the latest known position, speed, and bearing of each vehicle. resultsLimit defaults to 50.",
        annotations={
            "title": "List vehicle locations",
            "readOnlyHint": True,
        },
    )
    async def get_vehicle_locations(ctx: Context, resultsLimit: int = DEFAULT_RESULTS_LIMIT) -> str:  # noqa: N803
        return await generic_list_tool(ctx, deps, tool_config, results_limit=resultsLimit)


__all__ = ["register"]

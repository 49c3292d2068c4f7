"""MCP tool: get_vehicles.

Lists vehicles in the fleet as summaries built from device records.
"""

# pyright: reportUnusedFunction=false

from types import SimpleNamespace

from fastmcp import Context, FastMCP

from ..operations.common import DEFAULT_RESULTS_LIMIT
from .common import ToolConfig, generic_list_tool


def register(app: FastMCP, *, deps: SimpleNamespace) -> None:
    """Register the get_vehicles tool on the provided app instance.

    Args:
        app: The FastMCP application instance to add the tool to.
        deps: Dependencies namespace with the session and get_vehicles.

    """
    tool_config = ToolConfig(
        handler=deps.get_vehicles,
        noun="vehicles",
        log_message="Listing vehicles from Fleet Complete.",
    )

    @app.tool(
        name="get_vehicles",
        description="Return vehicles in the fleet (id, name, serial number, VIN, license plate). resultsLimit defaults to 50.",
        annotations={
            "title": "List vehicles",
            "readOnlyHint": True,
        },
    )
    async def get_vehicles(ctx: Context, resultsLimit: int = DEFAULT_RESULTS_LIMIT) -> str:  # noqa: N803
        return await generic_list_tool(ctx, deps, tool_config, results_limit=resultsLimit)


__all__ = ["register"]

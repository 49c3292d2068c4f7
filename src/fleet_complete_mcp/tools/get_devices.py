"""MCP tool: get_devices.

Lists raw telematics device records as reported by the API.
"""

# pyright: reportUnusedFunction=false

from types import SimpleNamespace

from fastmcp import Context, FastMCP

from ..operations.common import DEFAULT_RESULTS_LIMIT
from .common import ToolConfig, generic_list_tool


def register(app: FastMCP, *, deps: SimpleNamespace) -> None:
    """Register the get_devices tool on the provided app instance.

    Args:
        app: The FastMCP application instance to add the tool to.
        deps: Dependencies namespace with the session and get_devices.

    """
    tool_config = ToolConfig(
        handler=deps.get_devices,
        noun="devices",
        log_message="Listing telematics devices from Fleet Complete.",
    )

    @app.tool(
        name="get_devices",
        description="Return raw telematics device records as reported by the API. resultsLimit defaults to 50.",
        annotations={
            "title": "List devices",
            "readOnlyHint": True,
        },
    )
    async def get_devices(ctx: Context, resultsLimit: int = DEFAULT_RESULTS_LIMIT) -> str:  # noqa: N803
        return await generic_list_tool(ctx, deps, tool_config, results_limit=resultsLimit)


__all__ = ["register"]

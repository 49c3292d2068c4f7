"""Common utilities for MCP tool registration.

Provides the shared list-tool implementation and the text formatting used by
every tool response.
"""

import json
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from types import SimpleNamespace
from typing import Any, TypeAlias

from fastmcp import Context
from fastmcp.exceptions import ToolError

from ..errors import FleetCompleteError
from ..operations.common import Record

ListHandler: TypeAlias = Callable[..., Awaitable[list[Record]]]


@dataclass(frozen=True, slots=True)
class ToolConfig:
    """Configuration for a generic list tool."""

    handler: ListHandler
    noun: str
    log_message: str


def format_text_response(summary: str, payload: Any) -> str:
    """Return ``summary`` followed by ``payload`` as pretty-printed JSON."""
    return f"{summary}\n\n{json.dumps(payload, indent=2, default=str)}"


def to_tool_error(exc: FleetCompleteError) -> ToolError:
    """Convert a package error into the protocol-level tool error."""
    return ToolError(f"{type(exc).__name__}: {exc.message}")


async def generic_list_tool(
    ctx: Context,
    deps: SimpleNamespace,
    tool_config: ToolConfig,
    *,
    results_limit: int | None = None,
) -> str:
    """Generic implementation for list tools.

    Args:
        ctx: FastMCP context.
        deps: Dependencies namespace with the session.
        tool_config: Configuration for the tool including handler and wording.
        results_limit: Maximum number of records to request.

    Returns:
        Text block with a count summary and the records as JSON.

    Raises:
        ToolError: If the handler fails for any package-level reason.

    """
    await ctx.info(tool_config.log_message)
    try:
        items = await tool_config.handler(deps.session, results_limit=results_limit)
    except FleetCompleteError as exc:
        raise to_tool_error(exc) from exc
    return format_text_response(f"Found {len(items)} {tool_config.noun}:", items)


__all__ = [
    "ListHandler",
    "ToolConfig",
    "format_text_response",
    "generic_list_tool",
    "to_tool_error",
]

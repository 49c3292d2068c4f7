"""MCP resources for the Fleet Complete session and fleet inventory.

Exposes the session status and the device inventory as read-only resources.
"""

# pyright: reportUnusedFunction=false

from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from types import SimpleNamespace
from typing import Any

from fastmcp import Context, FastMCP

from .errors import FleetCompleteError


def register(app: FastMCP, *, deps: SimpleNamespace) -> None:
    """Register resources on the provided app instance.

    Args:
        app: The FastMCP application instance to add resources to.
        deps: Dependencies namespace containing the session and list handlers.

    """

    async def _collect_resource_payload(
        ctx: Context,
        *,
        handler: Callable[..., Awaitable[list[dict[str, Any]]]],
    ) -> dict[str, Any]:
        """Run a list handler and downgrade package errors to a structured payload.

        Args:
            ctx: FastMCP context for logging.
            handler: Async list handler to invoke with the session.

        Returns:
            Dictionary with status, count, and items, or an error payload on failure.

        """
        try:
            items = await handler(deps.session)
        except FleetCompleteError as exc:
            await ctx.warning(f"Fleet Complete request failed: {exc.message}")
            return {
                "status": "error",
                "error": exc.message,
                "error_type": exc.__class__.__name__,
            }
        return {"status": "ok", "count": len(items), "items": items}

    def _build_response(section: str, data: dict[str, Any]) -> dict[str, Any]:
        """Build a standard resource response with metadata.

        Args:
            section: Name of the data section (e.g., "devices").
            data: Collected data to include in the response.

        Returns:
            Response dictionary with timestamp, server, and data section.

        """
        return {
            "retrieved_at": datetime.now(UTC).isoformat(),
            "server": deps.session.server,
            section: data,
        }

    @app.resource(
        uri="fleet://session",
        name="Fleet Complete Session",
        description="Return the authentication status of the current session (no secrets).",
        mime_type="application/json",
        tags={"session", "auth"},
    )
    async def get_session() -> dict[str, Any]:
        return {**deps.session.status(), **deps.session.debug_info()}

    @app.resource(
        uri="fleet://devices",
        name="Fleet Complete Devices",
        description="Return a JSON list of telematics devices (default result limit).",
        mime_type="application/json",
        tags={"devices", "inventory"},
    )
    async def get_devices(ctx: Context) -> dict[str, Any]:
        data = await _collect_resource_payload(ctx, handler=deps.get_devices)
        return _build_response("devices", data)


__all__ = ["register"]

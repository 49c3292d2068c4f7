"""MCP tool: authenticate.

Opens a session with explicit credentials. Later tool calls reuse the
session and log in again with the same credentials once it expires.
"""

# pyright: reportUnusedFunction=false

from types import SimpleNamespace

from fastmcp import Context, FastMCP

from ..config import LoginCredentials
from ..errors import FleetCompleteError
from ..operations.common import require_text
from .common import format_text_response, to_tool_error


def register(app: FastMCP, *, deps: SimpleNamespace) -> None:
    """Register the authenticate tool on the provided app instance.

    Args:
        app: The FastMCP application instance to add the tool to.
        deps: Dependencies namespace with the session.

    """

    @app.tool(
        name="authenticate",
        description=(
            "Authenticate with the Fleet Complete (Geotab) API using a user name, password, and database. "
            "The session is reused by the other tools."
        ),
        annotations={
            "title": "Authenticate",
            "readOnlyHint": False,
        },
    )
    async def authenticate(
        ctx: Context,
        userName: str,  # noqa: N803
        password: str,
        database: str,
    ) -> str:
        try:
            login = LoginCredentials(
                user_name=require_text("userName", userName),
                password=require_text("password", password),
                database=require_text("database", database),
            )
            await ctx.info(f"Authenticating {login.user_name} on database {login.database}.")
            credential = await deps.session.authenticate(login)
        except FleetCompleteError as exc:
            raise to_tool_error(exc) from exc
        return format_text_response(
            "Successfully authenticated with Fleet Complete.",
            {
                "userName": credential.identity.user_id,
                "database": credential.identity.fleet_id,
                "expiresAt": credential.expires_at,
            },
        )


__all__ = ["register"]

"""Geotab-style JSON-RPC API used by the stdio tool server.

Every request is a POST of ``{"method": ..., "params": ...}`` to
``https://<server>/apirest``. Authenticated calls embed the session
credentials (``userName``, ``sessionId``, ``database``) inside ``params``.
Failures are reported through an ``error`` object in the body, often with an
HTTP 200 status.
"""

import logging
from typing import Any

from ..config import FleetConfig, LoginCredentials
from .credentials import Credential, Identity, TokenGrant, now_ms
from .http import HttpClientFactory, send_json
from .results import ApiResult, Err, ErrorKind, Ok, api_error_message

logger = logging.getLogger("fleet_complete_mcp.client.rpc_client")

# Returned in the ``path`` field when the current server owns the database
SAME_SERVER_PATH = "ThisServer"


class GeotabRpcClient:
    """Send JSON-RPC calls to the configured server."""

    def __init__(self, config: FleetConfig, http: HttpClientFactory) -> None:
        """Initialize the client.

        Args:
            config: Resolved configuration; ``rpc_server`` is the initial host.
            http: Factory returning a configured ``httpx.AsyncClient`` context.

        """
        self._server = config.rpc_server
        self._http = http

    @property
    def server(self) -> str:
        """Host that receives the next call."""
        return self._server

    @property
    def url(self) -> str:
        """JSON-RPC endpoint URL."""
        return f"https://{self._server}/apirest"

    def use_server(self, path: str | None) -> None:
        """Follow the server redirect returned by ``Authenticate``."""
        if path and path != SAME_SERVER_PATH and path != self._server:
            logger.info("Database is hosted on %s; redirecting subsequent calls", path)
            self._server = path

    async def request(self, method: str, params: dict[str, Any]) -> ApiResult[Any]:
        """Send one JSON-RPC request and classify the response.

        Returns:
            ``Ok`` with the ``result`` member, or ``Err``. An ``error`` member
            in a 2xx body is an ``ErrorKind.API`` failure; on a non-2xx status
            its message is kept in the ``ErrorKind.UPSTREAM`` failure.

        """
        async with self._http() as client:
            result = await send_json(
                client,
                "POST",
                self.url,
                description=f"{method} call",
                error_field="error",
                json={"method": method, "params": params},
            )
        match result:
            case Err():
                return result
            case Ok(value=body):
                if not isinstance(body, dict):
                    return Err(ErrorKind.UPSTREAM, f"{method} call failed: unexpected response body")
                if body.get("error"):
                    return Err(ErrorKind.API, api_error_message(body["error"]))
                return Ok(body.get("result"))

    async def call(self, operation: str, params: dict[str, Any], credential: Credential) -> ApiResult[Any]:
        """Send an authenticated call with the session credentials embedded in ``params``."""
        authenticated = {
            **params,
            "credentials": {
                "userName": credential.identity.user_id,
                "sessionId": credential.token,
                "database": credential.identity.fleet_id,
            },
        }
        return await self.request(operation, authenticated)


class GeotabAuthenticator:
    """Open RPC sessions with ``Authenticate``. Sessions cannot be refreshed."""

    def __init__(self, config: FleetConfig, client: GeotabRpcClient) -> None:
        """Initialize with the RPC client whose server may be redirected on login."""
        self._config = config
        self._client = client

    async def authenticate(self, login: LoginCredentials) -> ApiResult[TokenGrant]:
        """Open a new session for ``login``."""
        logger.info("Authenticating with Geotab API as %s on database %s", login.user_name, login.database)
        result = await self._client.request(
            "Authenticate",
            {"userName": login.user_name, "password": login.password, "database": login.database},
        )
        match result:
            case Err():
                return result
            case Ok(value=body):
                credentials = body.get("credentials") if isinstance(body, dict) else None
                session_id = credentials.get("sessionId") if isinstance(credentials, dict) else None
                if not session_id:
                    return Err(ErrorKind.API, "Authentication failed: response did not include a session id")
                self._client.use_server(body.get("path"))
                return Ok(
                    TokenGrant(
                        token=session_id,
                        expires_at=now_ms() + self._config.session_ttl_seconds * 1000,
                        identity=Identity(
                            user_id=credentials.get("userName") or login.user_name,
                            fleet_id=credentials.get("database") or login.database,
                        ),
                    ),
                )

    async def refresh(self, refresh_token: str) -> ApiResult[TokenGrant]:  # noqa: ARG002
        """RPC sessions carry no refresh token; always fall back to a new login."""
        return Err(ErrorKind.API, "RPC sessions cannot be refreshed")

    async def fetch_identity(self, credential: Credential) -> ApiResult[Identity]:
        """Resolve the user name of the session through a ``Get`` on ``User``."""
        result = await self._client.call(
            "Get",
            {"typeName": "User", "search": {"name": credential.identity.user_id}, "resultsLimit": 1},
            credential,
        )
        match result:
            case Err():
                return result
            case Ok(value=users):
                if not isinstance(users, list) or not users or not isinstance(users[0], dict):
                    return Ok(Identity())
                return Ok(Identity(user_id=users[0].get("name")))


__all__ = ["SAME_SERVER_PATH", "GeotabAuthenticator", "GeotabRpcClient"]

"""Fleet Complete Hub API: OAuth-style login endpoints and the GraphQL endpoint.

- ``HubAuthenticator``: password grant, refresh grant, and user-info lookup
- ``HubGraphQLClient``: authenticated ``{query, variables}`` POSTs
"""

import logging
from typing import Any

import httpx

from ..config import FleetConfig, LoginCredentials
from .credentials import Credential, Identity, TokenGrant, now_ms
from .http import HttpClientFactory, send_json
from .results import ApiResult, Err, ErrorKind, Ok, api_error_message

logger = logging.getLogger("fleet_complete_mcp.client.graphql_client")


def _lifetime_seconds(expires_in: Any, *, default: int) -> int:
    """Return ``expires_in`` as whole seconds, accepting numeric strings; fall back to ``default``."""
    if isinstance(expires_in, bool):
        return default
    try:
        lifetime = int(float(expires_in))
    except (TypeError, ValueError, OverflowError):
        return default
    return lifetime if lifetime > 0 else default


class HubAuthenticator:
    """Acquire and refresh Hub access tokens and resolve the user's identity."""

    def __init__(self, config: FleetConfig, http: HttpClientFactory) -> None:
        """Initialize the authenticator.

        Args:
            config: Resolved configuration with the Hub URLs and token lifetime.
            http: Factory returning a configured ``httpx.AsyncClient`` context.

        """
        self._config = config
        self._http = http

    async def authenticate(self, login: LoginCredentials) -> ApiResult[TokenGrant]:
        """Exchange a username and password for an access/refresh token pair."""
        logger.info("Authenticating with Fleet Complete API as %s", login.user_name)
        async with self._http() as client:
            result = await send_json(
                client,
                "POST",
                self._config.token_url,
                description="Authentication",
                data={"username": login.user_name, "password": login.password},
            )
        return self._to_grant(result, description="Authentication")

    async def refresh(self, refresh_token: str) -> ApiResult[TokenGrant]:
        """Exchange a refresh token for a new access token."""
        logger.info("Refreshing Fleet Complete access token")
        async with self._http() as client:
            result = await send_json(
                client,
                "POST",
                self._config.refresh_url,
                description="Token refresh",
                data={"refreshToken": refresh_token},
            )
        return self._to_grant(result, description="Token refresh")

    async def fetch_identity(self, credential: Credential) -> ApiResult[Identity]:
        """Look up the user id and fleet id behind an access token."""
        async with self._http() as client:
            result = await send_json(
                client,
                "GET",
                self._config.userinfo_url,
                description="User info lookup",
                headers={"Authorization": f"Bearer {credential.token}"},
            )
        match result:
            case Err():
                return result
            case Ok(value=body):
                entries = body if isinstance(body, list) else [body] if isinstance(body, dict) else []
                if not entries or not isinstance(entries[0], dict):
                    return Ok(Identity())
                first = entries[0]
                user_id = first.get("userId")
                fleet_id = first.get("fleetId") or first.get("fleetName")
                logger.info("User info retrieved: userId=%s fleetName=%s", user_id, first.get("fleetName"))
                return Ok(
                    Identity(
                        user_id=str(user_id) if user_id is not None else None,
                        fleet_id=str(fleet_id) if fleet_id is not None else None,
                    ),
                )

    def _to_grant(self, result: ApiResult[Any], *, description: str) -> ApiResult[TokenGrant]:
        """Convert a decoded token response into a ``TokenGrant``."""
        match result:
            case Err():
                return result
            case Ok(value=body):
                if not isinstance(body, dict):
                    return Err(ErrorKind.UPSTREAM, f"{description} failed: unexpected response body")
                if body.get("error"):
                    message = body.get("error_description") or api_error_message(body["error"])
                    return Err(ErrorKind.API, f"{description} failed: {message}")
                token = body.get("access_token")
                if not token:
                    return Err(ErrorKind.API, f"{description} failed: response did not include an access token")
                lifetime = _lifetime_seconds(body.get("expires_in"), default=self._config.token_ttl_seconds)
                return Ok(
                    TokenGrant(
                        token=token,
                        expires_at=now_ms() + lifetime * 1000,
                        refresh_token=body.get("refresh_token"),
                    ),
                )


class HubGraphQLClient:
    """Send GraphQL queries to the Hub API with the session's bearer token."""

    def __init__(self, config: FleetConfig, http: HttpClientFactory) -> None:
        """Initialize the client with the GraphQL endpoint from ``config``."""
        self._config = config
        self._http = http

    @property
    def server(self) -> str:
        """Host that receives GraphQL calls."""
        return httpx.URL(self._config.graphql_url).host

    async def call(self, operation: str, params: dict[str, Any], credential: Credential) -> ApiResult[Any]:
        """Run a GraphQL query.

        Args:
            operation: The GraphQL query document.
            params: Query variables.
            credential: Live credential supplying the bearer token and user id.

        Returns:
            ``Ok`` with the ``data`` object, or ``Err``. A body with an
            ``errors`` array is an ``ErrorKind.API`` failure even on HTTP 200.

        """
        headers = {"Authorization": f"Bearer {credential.token}"}
        if credential.identity.user_id:
            headers["userId"] = credential.identity.user_id
        async with self._http() as client:
            result = await send_json(
                client,
                "POST",
                self._config.graphql_url,
                description="GraphQL request",
                json={"query": operation, "variables": params},
                headers=headers,
            )
        match result:
            case Err():
                return result
            case Ok(value=body):
                if not isinstance(body, dict):
                    return Err(ErrorKind.UPSTREAM, "GraphQL request failed: unexpected response body")
                if body.get("errors"):
                    return Err(ErrorKind.API, api_error_message(body["errors"]))
                return Ok(body.get("data") or {})


__all__ = ["HubAuthenticator", "HubGraphQLClient"]

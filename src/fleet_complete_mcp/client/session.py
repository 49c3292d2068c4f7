"""Session objects tying a credential store, token manager, and API backend together.

A ``FleetSession`` is created once per process by each entry point and passed
explicitly to the request handlers; there is no module-level credential state.
"""

from datetime import UTC, datetime
from typing import Any, Protocol

import httpx

from ..config import FleetConfig, LoginCredentials
from .credentials import Credential, CredentialStore
from .graphql_client import HubAuthenticator, HubGraphQLClient
from .http import client_factory
from .results import ApiResult
from .rpc_client import GeotabAuthenticator, GeotabRpcClient
from .token_manager import Authenticator, TokenManager


class Backend(Protocol):
    """An API that accepts authenticated calls."""

    @property
    def server(self) -> str:
        """Host that receives the next call."""
        ...

    async def call(self, operation: str, params: dict[str, Any], credential: Credential) -> ApiResult[Any]:
        """Send ``operation`` with ``params`` using ``credential``."""
        ...


class FleetSession:
    """Authenticated access to one Fleet Complete backend."""

    def __init__(self, config: FleetConfig, token_manager: TokenManager, backend: Backend) -> None:
        """Initialize the session.

        Args:
            config: Resolved configuration (used for status reporting).
            token_manager: Token manager owning the session credential.
            backend: API client that performs the calls.

        """
        self._config = config
        self._token_manager = token_manager
        self._backend = backend

    @property
    def config(self) -> FleetConfig:
        """Configuration the session was built from."""
        return self._config

    @property
    def token_manager(self) -> TokenManager:
        """Token manager owning the session credential."""
        return self._token_manager

    @property
    def server(self) -> str:
        """Host the backend currently sends calls to (follows login redirects)."""
        return self._backend.server

    @property
    def store(self) -> CredentialStore:
        """Credential store of the session."""
        return self._token_manager.store

    @property
    def is_authenticated(self) -> bool:
        """Whether the stored credential is currently usable."""
        return not self.store.is_expired()

    async def authenticate(self, login: LoginCredentials | None = None) -> Credential:
        """Perform an explicit login with ``login`` or the configured credentials."""
        return await self._token_manager.authenticate(login)

    async def call(self, operation: str, params: dict[str, Any] | None = None) -> ApiResult[Any]:
        """Ensure a valid credential and send one call while holding the session lock.

        Concurrent callers that find the credential expired therefore trigger
        a single refresh or login.

        Raises:
            AuthError: If the credential cannot be made valid.

        """
        async with self.store.lock():
            credential = await self._token_manager.ensure_valid_locked()
            return await self._backend.call(operation, params or {}, credential)

    def status(self) -> dict[str, Any]:
        """Return the authentication status snapshot."""
        credential = self.store.get()
        return {
            "authenticated": self.is_authenticated,
            "userId": credential.identity.user_id,
            "fleetId": credential.identity.fleet_id,
            "tokenExpiresAt": credential.expires_at,
        }

    def debug_info(self) -> dict[str, Any]:
        """Return token status and a secret-free configuration summary."""
        return {
            "timestamp": datetime.now(UTC).isoformat(),
            "tokenStatus": self.store.snapshot(),
            "config": {
                "hubApiUrl": self._config.hub_url_str,
                "graphqlUrl": self._config.graphql_url,
                "rpcServer": self._config.rpc_server,
                "hasCredentials": self._token_manager.has_login,
                "hasApiKey": bool(self._config.api_key),
            },
        }


def _build_session(config: FleetConfig, authenticator: Authenticator, backend: Backend) -> FleetSession:
    """Assemble a session with an empty store and the configured login."""
    token_manager = TokenManager(CredentialStore(), authenticator, login=config.login())
    return FleetSession(config, token_manager, backend)


def create_rpc_session(
    config: FleetConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FleetSession:
    """Create a session backed by the JSON-RPC API."""
    http = client_factory(config, transport=transport)
    client = GeotabRpcClient(config, http)
    return _build_session(config, GeotabAuthenticator(config, client), client)


def create_graphql_session(
    config: FleetConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FleetSession:
    """Create a session backed by the Hub login endpoints and GraphQL API."""
    http = client_factory(config, transport=transport)
    return _build_session(config, HubAuthenticator(config, http), HubGraphQLClient(config, http))


__all__ = ["Backend", "FleetSession", "create_graphql_session", "create_rpc_session"]

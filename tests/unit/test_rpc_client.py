"""Unit tests for the JSON-RPC backend and its authenticator.

All HTTP calls go through ``httpx.MockTransport``.
"""

import pytest
from stubs import RPC_SERVER, SAMPLE_DEVICES, StubUpstream, live_credential

from fleet_complete_mcp.client.http import client_factory
from fleet_complete_mcp.client.results import Err, ErrorKind, Ok, unwrap
from fleet_complete_mcp.client.rpc_client import GeotabAuthenticator, GeotabRpcClient
from fleet_complete_mcp.client.session import create_rpc_session
from fleet_complete_mcp.config import FleetConfig, LoginCredentials
from fleet_complete_mcp.errors import ApiError, AuthError, UpstreamError
from fleet_complete_mcp.operations.devices import get_devices

AUTH_OK = {
    "result": {
        "credentials": {"database": "fleet_db", "sessionId": "sess-123", "userName": "user@example.com"},
        "path": "ThisServer",
    },
}
AUTH_INVALID = {
    "error": {
        "name": "JSONRPCError",
        "message": "Incorrect login credentials",
        "errors": [{"name": "InvalidUserException", "message": "Incorrect login credentials"}],
    },
}


def _client(config: FleetConfig, upstream: StubUpstream) -> GeotabRpcClient:
    return GeotabRpcClient(config, client_factory(config, transport=upstream.transport))


class TestRequestClassification:
    """HTTP status and body-level errors are classified separately."""

    @pytest.mark.asyncio
    async def test_result_is_ok(self, config: FleetConfig, upstream: StubUpstream) -> None:
        upstream.add("Get", 200, {"result": SAMPLE_DEVICES})
        result = await _client(config, upstream).request("Get", {"typeName": "Device"})
        assert result == Ok(SAMPLE_DEVICES)

    @pytest.mark.asyncio
    async def test_error_in_200_body_is_api_error(self, config: FleetConfig, upstream: StubUpstream) -> None:
        upstream.add("Get", 200, {"error": {"name": "InvalidUserException", "message": "Session expired"}})
        result = await _client(config, upstream).request("Get", {"typeName": "Device"})
        assert isinstance(result, Err)
        assert result.kind is ErrorKind.API
        assert "Session expired" in result.message
        with pytest.raises(ApiError):
            unwrap(result)

    @pytest.mark.asyncio
    async def test_non_2xx_is_upstream_error(self, config: FleetConfig, upstream: StubUpstream) -> None:
        upstream.add("Get", 503, {"message": "unavailable"})
        result = await _client(config, upstream).request("Get", {"typeName": "Device"})
        assert isinstance(result, Err)
        assert result.kind is ErrorKind.UPSTREAM
        assert result.status == 503
        with pytest.raises(UpstreamError) as exc_info:
            unwrap(result)
        assert exc_info.value.status == 503

    @pytest.mark.asyncio
    async def test_error_body_on_non_2xx_keeps_message_and_status(
        self,
        config: FleetConfig,
        upstream: StubUpstream,
    ) -> None:
        """A failed status with an ``error`` member reports the upstream diagnosis."""
        upstream.add("Get", 500, {"error": {"name": "JSONRPCError", "message": "Session expired"}})
        result = await _client(config, upstream).request("Get", {"typeName": "Device"})
        assert result == Err(ErrorKind.UPSTREAM, "Get call failed: 500 JSONRPCError: Session expired", status=500)
        with pytest.raises(UpstreamError, match="Session expired") as exc_info:
            unwrap(result)
        assert exc_info.value.status == 500

    @pytest.mark.asyncio
    async def test_call_embeds_credentials(self, config: FleetConfig, upstream: StubUpstream) -> None:
        upstream.add("Get", 200, {"result": []})
        await _client(config, upstream).call("Get", {"typeName": "Device"}, live_credential())
        body = upstream.bodies("Get")[0]
        assert body["params"]["credentials"] == {
            "userName": "user-1",
            "sessionId": "tok-live",
            "database": "fleet-1",
        }
        assert body["params"]["typeName"] == "Device"
        assert upstream.requests[0].url.host == RPC_SERVER


class TestAuthenticator:
    """Tests for GeotabAuthenticator."""

    @pytest.mark.asyncio
    async def test_authenticate_builds_grant(self, config: FleetConfig, upstream: StubUpstream) -> None:
        upstream.add("Authenticate", 200, AUTH_OK)
        client = _client(config, upstream)
        login = LoginCredentials(user_name="user@example.com", password="secret", database="fleet_db")

        result = await GeotabAuthenticator(config, client).authenticate(login)

        grant = unwrap(result)
        assert grant.token == "sess-123"
        assert grant.refresh_token is None
        assert grant.identity.user_id == "user@example.com"
        assert grant.identity.fleet_id == "fleet_db"
        assert upstream.bodies("Authenticate")[0]["params"] == {
            "userName": "user@example.com",
            "password": "secret",
            "database": "fleet_db",
        }

    @pytest.mark.asyncio
    async def test_authenticate_follows_server_path(self, config: FleetConfig, upstream: StubUpstream) -> None:
        upstream.add("Authenticate", 200, {"result": {**AUTH_OK["result"], "path": "my42.example.com"}})
        client = _client(config, upstream)
        login = LoginCredentials(user_name="u", password="p", database="d")

        await GeotabAuthenticator(config, client).authenticate(login)

        assert client.server == "my42.example.com"
        assert client.url == "https://my42.example.com/apirest"

    @pytest.mark.asyncio
    async def test_refresh_is_unsupported(self, config: FleetConfig, upstream: StubUpstream) -> None:
        result = await GeotabAuthenticator(config, _client(config, upstream)).refresh("anything")
        assert isinstance(result, Err)
        assert upstream.requests == []


class TestEndToEnd:
    """Session-level behaviour with stub credentials."""

    @pytest.mark.asyncio
    async def test_valid_login_then_get_devices(self, config: FleetConfig, upstream: StubUpstream) -> None:
        upstream.add("Authenticate", 200, AUTH_OK)
        upstream.add("Get", 200, {"result": SAMPLE_DEVICES})
        session = create_rpc_session(config, transport=upstream.transport)

        await session.authenticate(LoginCredentials(user_name="user@example.com", password="secret", database="fleet_db"))
        devices = await get_devices(session)

        assert devices == SAMPLE_DEVICES
        assert upstream.count("Authenticate") == 1
        assert upstream.bodies("Get")[0]["params"]["credentials"]["sessionId"] == "sess-123"

    @pytest.mark.asyncio
    async def test_invalid_login_stores_nothing(
        self,
        config_without_login: FleetConfig,
        upstream: StubUpstream,
    ) -> None:
        upstream.add("Authenticate", 200, AUTH_INVALID)
        session = create_rpc_session(config_without_login, transport=upstream.transport)

        with pytest.raises(AuthError, match="Incorrect login credentials"):
            await session.authenticate(LoginCredentials(user_name="user", password="wrong", database="fleet_db"))

        assert session.store.get().token is None
        assert session.is_authenticated is False

    @pytest.mark.asyncio
    async def test_lazy_login_from_config(self, config: FleetConfig, upstream: StubUpstream) -> None:
        """Calls without an explicit authenticate log in with the configured credentials."""
        upstream.add("Authenticate", 200, AUTH_OK)
        upstream.add("Get", 200, {"result": SAMPLE_DEVICES})
        session = create_rpc_session(config, transport=upstream.transport)

        await get_devices(session)
        await get_devices(session)

        assert upstream.count("Authenticate") == 1
        assert upstream.count("Get") == 2

    @pytest.mark.asyncio
    async def test_expired_session_logs_in_once_without_refresh(
        self,
        config: FleetConfig,
        upstream: StubUpstream,
    ) -> None:
        """An expired RPC session goes straight to one Authenticate."""
        upstream.add("Authenticate", 200, AUTH_OK)
        upstream.add("Get", 200, {"result": SAMPLE_DEVICES})
        session = create_rpc_session(config, transport=upstream.transport)
        session.store.set(live_credential(expires_in_ms=-1000))

        await get_devices(session)

        assert [upstream.key_of(request) for request in upstream.requests] == ["Authenticate", "Get"]
        assert upstream.bodies("Get")[0]["params"]["credentials"]["sessionId"] == "sess-123"

    @pytest.mark.asyncio
    async def test_session_server_follows_redirect(self, config: FleetConfig, upstream: StubUpstream) -> None:
        upstream.add("Authenticate", 200, {"result": {**AUTH_OK["result"], "path": "my42.example.com"}})
        upstream.add("Get", 200, {"result": []})
        session = create_rpc_session(config, transport=upstream.transport)
        assert session.server == RPC_SERVER

        await get_devices(session)

        assert session.server == "my42.example.com"
        assert upstream.requests[-1].url.host == "my42.example.com"

"""Unit tests for typed call results and the shared HTTP helper."""

import httpx
import pytest

from fleet_complete_mcp.client.http import send_json
from fleet_complete_mcp.client.results import Err, ErrorKind, Ok, api_error_message, unwrap
from fleet_complete_mcp.errors import ApiError, UpstreamError


def test_unwrap_ok() -> None:
    assert unwrap(Ok([1, 2])) == [1, 2]


@pytest.mark.parametrize(
    ("err", "exc_type"),
    [
        (Err(ErrorKind.API, "bad"), ApiError),
        (Err(ErrorKind.UPSTREAM, "bad", status=500), UpstreamError),
        (Err(ErrorKind.NETWORK, "bad"), UpstreamError),
    ],
)
def test_unwrap_err_raises(err: Err, exc_type: type[Exception]) -> None:
    with pytest.raises(exc_type, match="bad"):
        unwrap(err)


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        ({"name": "InvalidUserException", "message": "Bad password"}, "InvalidUserException: Bad password"),
        ({"message": "Only message"}, "Only message"),
        ({}, "Unknown API error"),
        ([{"message": "a"}, {"message": "b"}], "a, b"),
        ([], "Unknown API error"),
        ("plain text", "plain text"),
    ],
)
def test_api_error_message(error: object, expected: str) -> None:
    assert api_error_message(error) == expected


class TestSendJson:
    """Classification performed by send_json."""

    @pytest.mark.asyncio
    async def test_network_error(self) -> None:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(_raise)) as client:
            result = await send_json(client, "GET", "https://x.example.com/", description="Lookup")

        assert isinstance(result, Err)
        assert result.kind is ErrorKind.NETWORK
        assert result.status is None
        assert result.message.startswith("Lookup failed:")

    @pytest.mark.asyncio
    async def test_invalid_json_is_upstream(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>"))
        async with httpx.AsyncClient(transport=transport) as client:
            result = await send_json(client, "GET", "https://x.example.com/", description="Lookup")

        assert result == Err(ErrorKind.UPSTREAM, "Lookup failed: response body is not valid JSON", status=200)

    @pytest.mark.asyncio
    async def test_status_reported(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(404, json={}))
        async with httpx.AsyncClient(transport=transport) as client:
            result = await send_json(client, "GET", "https://x.example.com/", description="Lookup")

        assert result == Err(ErrorKind.UPSTREAM, "Lookup failed: 404 Not Found", status=404)

    @pytest.mark.asyncio
    async def test_error_field_message_on_failed_status(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(400, json={"error": {"message": "Bad type"}}))
        async with httpx.AsyncClient(transport=transport) as client:
            with_field = await send_json(client, "GET", "https://x.example.com/", description="Lookup", error_field="error")
            without_field = await send_json(client, "GET", "https://x.example.com/", description="Lookup")

        assert with_field == Err(ErrorKind.UPSTREAM, "Lookup failed: 400 Bad type", status=400)
        assert without_field == Err(ErrorKind.UPSTREAM, "Lookup failed: 400 Bad Request", status=400)

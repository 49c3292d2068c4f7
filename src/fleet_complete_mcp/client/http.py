"""Shared HTTP plumbing for the Fleet Complete API clients.

Provides the async context manager that creates a configured ``httpx`` client
and a helper that turns a single request into a typed ``ApiResult``.
"""

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Any, TypeAlias

import httpx

from ..config import FleetConfig
from .results import ApiResult, Err, ErrorKind, Ok, api_error_message

logger = logging.getLogger("fleet_complete_mcp.client.http")

HttpClientFactory: TypeAlias = Callable[[], AbstractAsyncContextManager[httpx.AsyncClient]]


@asynccontextmanager
async def create_http_client(
    config: FleetConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[httpx.AsyncClient]:
    """Create an ``httpx.AsyncClient`` with the configured timeout and TLS settings.

    Args:
        config: The configuration containing TLS verification and timeouts.
        transport: Optional transport override (used to stub the upstream in tests).

    Yields:
        Configured AsyncClient instance.

    """
    timeout = httpx.Timeout(config.timeout_ms / 1000)
    async with httpx.AsyncClient(verify=config.verify_ssl, timeout=timeout, transport=transport) as client:
        yield client


def client_factory(
    config: FleetConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> HttpClientFactory:
    """Bind ``create_http_client`` to a configuration for repeated use."""

    def _factory() -> AbstractAsyncContextManager[httpx.AsyncClient]:
        return create_http_client(config, transport=transport)

    return _factory


def _error_detail(response: httpx.Response, error_field: str | None) -> str | None:
    """Return the application error message carried by a failed response, if any."""
    if error_field is None:
        return None
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict) or not body.get(error_field):
        return None
    return api_error_message(body[error_field])


async def send_json(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    description: str,
    error_field: str | None = None,
    **kwargs: Any,
) -> ApiResult[Any]:
    """Send a request and decode its JSON body.

    Transport failures become ``ErrorKind.NETWORK``; non-2xx statuses and
    bodies that are not JSON become ``ErrorKind.UPSTREAM``. Application-level
    errors inside a 2xx body are left for the caller to classify.

    Args:
        client: The HTTP client to send with.
        method: HTTP method.
        url: Absolute request URL.
        description: Short label used in error messages (e.g. "Authentication").
        error_field: Body member holding an application error. When a non-2xx
            response carries it, its message replaces the status reason.
        **kwargs: Passed through to ``httpx.AsyncClient.request``.

    Returns:
        ``Ok`` with the decoded body, or ``Err`` describing the failure.

    """
    try:
        response = await client.request(method, url, **kwargs)
    except httpx.HTTPError as exc:
        logger.warning("%s request to %s failed: %s", description, url, exc)
        return Err(ErrorKind.NETWORK, f"{description} failed: {exc}")

    if not response.is_success:
        detail = _error_detail(response, error_field) or response.reason_phrase or ""
        return Err(
            ErrorKind.UPSTREAM,
            f"{description} failed: {response.status_code} {detail}".rstrip(),
            status=response.status_code,
        )

    try:
        return Ok(response.json())
    except ValueError:
        return Err(
            ErrorKind.UPSTREAM,
            f"{description} failed: response body is not valid JSON",
            status=response.status_code,
        )


__all__ = ["HttpClientFactory", "client_factory", "create_http_client", "send_json"]

"""Shared pytest fixtures for fleet-complete-mcp tests."""

import pytest
from stubs import HUB_URL, RPC_SERVER, StubUpstream

from fleet_complete_mcp.config import FleetConfig


@pytest.fixture
def config() -> FleetConfig:
    """Configuration with a complete login and stub hosts."""
    return FleetConfig(
        hub_url=HUB_URL,
        rpc_server=RPC_SERVER,
        username="user@example.com",
        password="secret",
        database="fleet_db",
    )


@pytest.fixture
def config_without_login() -> FleetConfig:
    """Configuration with no username or password."""
    return FleetConfig(hub_url=HUB_URL, rpc_server=RPC_SERVER)


@pytest.fixture
def upstream() -> StubUpstream:
    """Fresh stub upstream for each test."""
    return StubUpstream()

"""Configuration management for the Fleet Complete MCP server and dashboard.

This module defines the ``FleetConfig`` model and helpers to load configuration
from environment variables. Both entry points (the stdio tool server and the
HTTP dashboard) read the same settings so there is a single source of truth.
"""

import logging
import os
from typing import Any, Self

from dotenv import load_dotenv
from pydantic import AnyUrl, BaseModel, Field, ValidationError

# Load variables from a local .env file for development convenience
load_dotenv()

DEFAULT_HUB_URL = "https://api.fleetcomplete.com"
DEFAULT_RPC_SERVER = "my.geotab.com"


class LoginCredentials(BaseModel):
    """Username/password (and database for the RPC API) used for a full login."""

    user_name: str
    password: str
    database: str | None = None


class FleetConfig(BaseModel):
    """Configuration values required to interact with the Fleet Complete APIs."""

    hub_url: str | AnyUrl = DEFAULT_HUB_URL
    rpc_server: str = DEFAULT_RPC_SERVER
    username: str | None = None
    password: str | None = None
    database: str | None = None
    api_key: str | None = None
    verify_ssl: bool = True
    timeout_ms: int = Field(default=10000, ge=1000, le=600000)
    token_ttl_seconds: int = Field(default=300, ge=1)
    session_ttl_seconds: int = Field(default=86400, ge=1)
    host: str = "127.0.0.1"
    port: int = Field(default=3000, ge=1, le=65535)

    @property
    def hub_url_str(self) -> str:
        """Return the Hub base URL without a trailing slash."""
        return str(self.hub_url).rstrip("/")

    @property
    def graphql_url(self) -> str:
        """Return the GraphQL endpoint on the Hub API."""
        return f"{self.hub_url_str}/graphql"

    @property
    def token_url(self) -> str:
        """Return the password-grant token endpoint."""
        return f"{self.hub_url_str}/login/token"

    @property
    def refresh_url(self) -> str:
        """Return the refresh-token endpoint."""
        return f"{self.hub_url_str}/login/refresh"

    @property
    def userinfo_url(self) -> str:
        """Return the user-info endpoint that resolves user and fleet ids."""
        return f"{self.hub_url_str}/login/userinfo"

    @property
    def has_credentials(self) -> bool:
        """Whether a username and password are configured."""
        return bool(self.username and self.password)

    def login(self) -> LoginCredentials | None:
        """Return the configured login, or ``None`` when it is incomplete."""
        if not (self.username and self.password):
            return None
        return LoginCredentials(user_name=self.username, password=self.password, database=self.database)

    def warn_if_unconfigured(self, logger: logging.Logger) -> None:
        """Log a startup warning when no login is configured."""
        if not self.has_credentials:
            logger.warning(
                "FLEET_COMPLETE_USERNAME and FLEET_COMPLETE_PASSWORD are not set; "
                "calls will fail until credentials are provided.",
            )

    @classmethod
    def from_env(cls) -> Self:
        """Build a configuration object from environment variables."""
        raw_config: dict[str, Any] = {
            "hub_url": os.getenv("FLEET_COMPLETE_HUB_URL") or DEFAULT_HUB_URL,
            "rpc_server": os.getenv("FLEET_COMPLETE_RPC_SERVER") or DEFAULT_RPC_SERVER,
            "username": os.getenv("FLEET_COMPLETE_USERNAME"),
            "password": os.getenv("FLEET_COMPLETE_PASSWORD"),
            "database": os.getenv("FLEET_COMPLETE_DATABASE"),
            "api_key": os.getenv("FLEET_COMPLETE_API_KEY"),
            "verify_ssl": os.getenv("FLEET_COMPLETE_VERIFY_SSL"),
            "timeout_ms": os.getenv("FLEET_COMPLETE_TIMEOUT_MS"),
            "token_ttl_seconds": os.getenv("FLEET_COMPLETE_TOKEN_TTL_SECONDS"),
            "session_ttl_seconds": os.getenv("FLEET_COMPLETE_SESSION_TTL_SECONDS"),
            "host": os.getenv("HOST"),
            "port": os.getenv("PORT"),
        }
        # Unset variables fall back to the model defaults
        raw_config = {key: value for key, value in raw_config.items() if value not in (None, "")}
        try:
            return cls(**raw_config)
        except ValidationError as exc:
            messages = "; ".join(err["msg"] for err in exc.errors())
            msg = f"Invalid Fleet Complete configuration: {messages}"
            raise RuntimeError(msg) from exc


__all__ = ["FleetConfig", "LoginCredentials"]

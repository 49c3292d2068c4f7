"""Token lifecycle management for the Fleet Complete APIs.

``ensure_valid`` walks at most three steps per invocation::

    FRESH             -> stored credential is usable, no network call
    TRY_REFRESH       -> one refresh attempt when a refresh token is stored
    TRY_AUTHENTICATE  -> one full login with the configured credentials

A failed login raises ``AuthError``; there is no further retry.
"""

import logging
from enum import StrEnum
from typing import Protocol

from ..config import LoginCredentials
from ..errors import AuthError
from .credentials import Credential, CredentialStore, Identity, TokenGrant
from .results import ApiResult, Err, Ok

logger = logging.getLogger("fleet_complete_mcp.token_manager")


class Authenticator(Protocol):
    """Backend-specific login, refresh, and identity lookup."""

    async def authenticate(self, login: LoginCredentials) -> ApiResult[TokenGrant]:
        """Perform a full login."""
        ...

    async def refresh(self, refresh_token: str) -> ApiResult[TokenGrant]:
        """Exchange a refresh token for a new token."""
        ...

    async def fetch_identity(self, credential: Credential) -> ApiResult[Identity]:
        """Resolve identity fields for a freshly issued credential."""
        ...


class RefreshStep(StrEnum):
    """States of the validity check."""

    FRESH = "fresh"
    TRY_REFRESH = "try_refresh"
    TRY_AUTHENTICATE = "try_authenticate"


class TokenManager:
    """Keep the session credential usable, refreshing or logging in when necessary."""

    def __init__(
        self,
        store: CredentialStore,
        authenticator: Authenticator,
        login: LoginCredentials | None = None,
    ) -> None:
        """Initialize the token manager.

        Args:
            store: Credential store shared by every call of the session.
            authenticator: Backend used for login, refresh, and identity lookup.
            login: Credentials used for lazy (re-)authentication, if configured.

        """
        self._store = store
        self._authenticator = authenticator
        self._login = login

    @property
    def store(self) -> CredentialStore:
        """The credential store managed by this instance."""
        return self._store

    @property
    def has_login(self) -> bool:
        """Whether credentials for a full login are available."""
        return self._login is not None

    def next_step(self) -> RefreshStep:
        """Decide what the next validity check has to do."""
        if not self._store.is_expired():
            return RefreshStep.FRESH
        if self._store.get().refresh_token:
            return RefreshStep.TRY_REFRESH
        return RefreshStep.TRY_AUTHENTICATE

    async def ensure_valid(self) -> Credential:
        """Return a usable credential, refreshing or logging in first if needed.

        Raises:
            AuthError: If no login is configured or the upstream rejects it.

        """
        async with self._store.lock():
            return await self.ensure_valid_locked()

    async def ensure_valid_locked(self) -> Credential:
        """Same as ``ensure_valid`` for callers already holding the store lock."""
        step = self.next_step()
        if step is RefreshStep.FRESH:
            return self._store.get()

        if step is RefreshStep.TRY_REFRESH:
            refreshed = await self._try_refresh()
            if refreshed is not None:
                return refreshed

        # TRY_AUTHENTICATE, either directly or after a failed refresh
        return await self._authenticate_and_store(self._login)

    async def authenticate(self, login: LoginCredentials | None = None) -> Credential:
        """Perform an explicit full login.

        On success ``login`` (when given) replaces the configured credentials for
        later lazy re-authentication. On failure the stored credential is left
        untouched.

        Raises:
            AuthError: If no login is available or the upstream rejects it.

        """
        async with self._store.lock():
            credential = await self._authenticate_and_store(login or self._login)
            if login is not None:
                self._login = login
            return credential

    async def _try_refresh(self) -> Credential | None:
        """Attempt a single refresh. Return ``None`` when it fails."""
        current = self._store.get()
        if not current.refresh_token:
            return None
        result = await self._authenticator.refresh(current.refresh_token)
        match result:
            case Err(message=message):
                logger.warning("Token refresh failed (%s); re-authenticating.", message)
                return None
            case Ok(value=grant):
                refreshed = current.refreshed(grant)
                self._store.set(refreshed)
                logger.info("Access token refreshed")
                return refreshed

    async def _authenticate_and_store(self, login: LoginCredentials | None) -> Credential:
        """Log in, resolve missing identity fields, and store the credential."""
        if login is None:
            msg = (
                "No Fleet Complete credentials configured. Call authenticate first or set "
                "FLEET_COMPLETE_USERNAME and FLEET_COMPLETE_PASSWORD."
            )
            raise AuthError(msg)

        result = await self._authenticator.authenticate(login)
        match result:
            case Err(message=message):
                logger.error("Authentication failed: %s", message)
                raise AuthError(message)
            case Ok(value=grant):
                credential = Credential.from_grant(grant)

        if not credential.identity.is_complete:
            identity_result = await self._authenticator.fetch_identity(credential)
            match identity_result:
                case Err(message=message):
                    logger.error("Identity lookup failed: %s", message)
                    raise AuthError(message)
                case Ok(value=identity):
                    credential = credential.with_identity(identity)

        self._store.set(credential)
        logger.info("Authentication successful (userId=%s)", credential.identity.user_id)
        return credential


__all__ = ["Authenticator", "RefreshStep", "TokenManager"]

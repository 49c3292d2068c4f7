"""In-memory credential store shared by all calls made through one session."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, replace
from typing import Any


def now_ms() -> int:
    """Return the current time as epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True, slots=True)
class Identity:
    """Identity fields resolved after a successful login."""

    user_id: str | None = None
    fleet_id: str | None = None

    @property
    def is_complete(self) -> bool:
        """Whether both identity fields are populated."""
        return bool(self.user_id and self.fleet_id)


@dataclass(frozen=True, slots=True)
class TokenGrant:
    """Token material returned by a login or refresh call."""

    token: str
    expires_at: int
    refresh_token: str | None = None
    identity: Identity = Identity()


@dataclass(frozen=True, slots=True)
class Credential:
    """Session token plus expiry and identity. Empty when ``token`` is ``None``."""

    token: str | None = None
    refresh_token: str | None = None
    expires_at: int | None = None
    identity: Identity = Identity()

    @classmethod
    def from_grant(cls, grant: TokenGrant) -> Credential:
        """Build a live credential from a full login grant."""
        return cls(
            token=grant.token,
            refresh_token=grant.refresh_token,
            expires_at=grant.expires_at,
            identity=grant.identity,
        )

    def refreshed(self, grant: TokenGrant) -> Credential:
        """Return a copy with the refreshed token and expiry; identity is kept."""
        return replace(
            self,
            token=grant.token,
            expires_at=grant.expires_at,
            refresh_token=grant.refresh_token or self.refresh_token,
        )

    def with_identity(self, identity: Identity) -> Credential:
        """Return a copy whose missing identity fields are filled from ``identity``."""
        merged = Identity(
            user_id=self.identity.user_id or identity.user_id,
            fleet_id=self.identity.fleet_id or identity.fleet_id,
        )
        return replace(self, identity=merged)


class CredentialStore:
    """Hold the single credential of a session and guard mutations with a lock."""

    def __init__(self, credential: Credential | None = None) -> None:
        """Initialize the store, empty unless a credential is provided."""
        self._credential = credential or Credential()
        self._lock: asyncio.Lock | None = None
        self._lock_loop: asyncio.AbstractEventLoop | None = None

    def lock(self) -> asyncio.Lock:
        """Return an asyncio lock bound to the current event loop.

        Creates a new lock if one does not exist or if the event loop has changed.
        """
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    def get(self) -> Credential:
        """Return the current credential (possibly empty)."""
        return self._credential

    def set(self, credential: Credential) -> None:
        """Replace the current credential.

        Raises:
            ValueError: If a token is stored without an expiry.

        """
        if credential.token and credential.expires_at is None:
            msg = "A stored token must carry an expiry."
            raise ValueError(msg)
        self._credential = credential

    def clear(self) -> None:
        """Drop the current credential."""
        self._credential = Credential()

    def is_expired(self, now: int | None = None) -> bool:
        """Whether the credential is unusable: no token, no expiry, or past expiry."""
        credential = self._credential
        if not credential.token or credential.expires_at is None:
            return True
        current = now_ms() if now is None else now
        return current >= credential.expires_at

    def snapshot(self) -> dict[str, Any]:
        """Return a secret-free view of the stored credential."""
        credential = self._credential
        return {
            "hasAccessToken": bool(credential.token),
            "hasRefreshToken": bool(credential.refresh_token),
            "expiresAt": credential.expires_at,
            "isExpired": self.is_expired(),
            "userId": credential.identity.user_id,
            "fleetId": credential.identity.fleet_id,
        }


__all__ = ["Credential", "CredentialStore", "Identity", "TokenGrant", "now_ms"]

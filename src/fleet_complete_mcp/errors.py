"""Exception taxonomy shared by the tool server and the dashboard.

- ``AuthError``: bad credentials, missing login, or an exhausted refresh fallback
- ``UpstreamError``: HTTP-level failure (non-2xx, unreadable body, transport error)
- ``ApiError``: application-level error carried in an otherwise successful response
- ``ValidationError``: malformed caller input
"""


class FleetCompleteError(Exception):
    """Base class for all errors raised by this package."""

    def __init__(self, message: str) -> None:
        """Store the human-readable message alongside the exception."""
        super().__init__(message)
        self.message = message


class AuthError(FleetCompleteError):
    """Authentication failed or no usable credentials are configured."""


class UpstreamError(FleetCompleteError):
    """The upstream API could not be reached or answered with a non-2xx status."""

    def __init__(self, message: str, status: int | None = None) -> None:
        """Record the HTTP status (``None`` for transport-level failures)."""
        super().__init__(message)
        self.status = status


class ApiError(FleetCompleteError):
    """The upstream API reported an error inside a successful HTTP response."""


class ValidationError(FleetCompleteError):
    """Caller input was missing or malformed."""


__all__ = [
    "ApiError",
    "AuthError",
    "FleetCompleteError",
    "UpstreamError",
    "ValidationError",
]

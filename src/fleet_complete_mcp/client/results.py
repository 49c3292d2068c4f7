"""Typed call results returned by every upstream request.

A request either produces ``Ok(value)`` or ``Err(kind, message, status)``.
Callers must branch on the variant (or ``unwrap`` it) so that an error embedded
in an HTTP 200 body can never be mistaken for data.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Generic, TypeAlias, TypeVar

from ..errors import ApiError, FleetCompleteError, UpstreamError

T = TypeVar("T")


class ErrorKind(StrEnum):
    """Classification of a failed upstream call."""

    UPSTREAM = "upstream"  # non-2xx status or unreadable body
    NETWORK = "network"  # transport error or timeout
    API = "api"  # error field in a successful HTTP response


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful call carrying the decoded payload."""

    value: T


@dataclass(frozen=True, slots=True)
class Err:
    """Failed call with its classification."""

    kind: ErrorKind
    message: str
    status: int | None = None

    def to_exception(self) -> FleetCompleteError:
        """Convert the failure into the matching exception type."""
        if self.kind is ErrorKind.API:
            return ApiError(self.message)
        return UpstreamError(self.message, status=self.status)


ApiResult: TypeAlias = Ok[T] | Err


def unwrap(result: ApiResult[T]) -> T:
    """Return the payload of ``Ok`` or raise the exception described by ``Err``."""
    match result:
        case Ok(value=value):
            return value
        case Err() as err:
            raise err.to_exception()


def api_error_message(error: Any) -> str:
    """Extract a readable message from an RPC ``error`` object or GraphQL ``errors`` list."""
    if isinstance(error, list):
        messages = [api_error_message(item) for item in error]
        return ", ".join(message for message in messages if message) or "Unknown API error"
    if isinstance(error, dict):
        message = error.get("message")
        name = error.get("name")
        if message and name:
            return f"{name}: {message}"
        return str(message or name or "Unknown API error")
    return str(error)


__all__ = ["ApiResult", "Err", "ErrorKind", "Ok", "api_error_message", "unwrap"]

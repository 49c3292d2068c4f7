"""Common utilities for Fleet Complete operations modules.

This module contains shared constants and helpers used by the request
handlers of both API backends: input defaulting, envelope building, and
record trimming.
"""

from typing import Any, TypeAlias

from ..errors import ValidationError

DEFAULT_RESULTS_LIMIT = 50

# Type aliases using Python 3.12+ syntax
Record: TypeAlias = dict[str, Any]
ListEnvelope: TypeAlias = dict[str, Any]


def resolve_results_limit(value: object = None) -> int:
    """Return the result-count limit, defaulting to ``DEFAULT_RESULTS_LIMIT``.

    Args:
        value: Caller-supplied limit; ``None`` selects the default.

    Returns:
        A positive integer limit.

    Raises:
        ValidationError: If the limit is not a positive integer.

    """
    if value is None:
        return DEFAULT_RESULTS_LIMIT
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"resultsLimit must be an integer, got {value!r}."
        raise ValidationError(msg)
    if value < 1:
        msg = f"resultsLimit must be at least 1, got {value}."
        raise ValidationError(msg)
    return value


def require_text(name: str, value: object) -> str:
    """Return ``value`` stripped, or raise if it is missing or blank.

    Raises:
        ValidationError: If ``value`` is not a non-empty string.

    """
    if not isinstance(value, str) or not value.strip():
        msg = f"{name} is required."
        raise ValidationError(msg)
    return value.strip()


def compact(record: Record) -> Record:
    """Drop keys whose value is ``None``."""
    return {key: value for key, value in record.items() if value is not None}


def as_records(value: Any) -> list[Record]:
    """Return ``value`` as a list of dict records, ignoring anything else."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def build_list_envelope(section: str, items: list[Any]) -> ListEnvelope:
    """Build the ``{success, <section>, count}`` response used by the HTTP routes."""
    return {
        "success": True,
        section: items,
        "count": len(items),
    }


__all__ = [
    "DEFAULT_RESULTS_LIMIT",
    "ListEnvelope",
    "Record",
    "as_records",
    "build_list_envelope",
    "compact",
    "require_text",
    "resolve_results_limit",
]

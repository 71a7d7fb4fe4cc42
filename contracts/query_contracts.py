"""
query_contracts.py

Error kinds and resolution policies shared by the query pipeline.

Every error is raised synchronously to the immediate caller. Pipelines are
pure and local, so nothing here is retried or recovered.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


# -----------------------------
# Exceptions
# -----------------------------


class QueryError(Exception):
    """Base query pipeline error."""


class InvalidArgumentError(QueryError, ValueError):
    """Raised when a required predicate/comparator/extractor argument is absent or malformed."""


class IllegalStateError(QueryError, RuntimeError):
    """Raised when a consumed pipeline is reused, or an absent value is forced."""


# -----------------------------
# Policies
# -----------------------------


class AbsentPolicy(str, Enum):
    """How an aggregate resolves an empty input."""

    EMPTY = "empty"
    DEFAULT = "default"
    THROW = "throw"

    @classmethod
    def parse(cls, value: Any) -> AbsentPolicy:
        if isinstance(value, AbsentPolicy):
            return value
        text = str(value or "").strip().lower()
        for member in cls:
            if member.value == text:
                return member
        raise InvalidArgumentError(f"unknown absent policy: {value!r}")


def require(value: Any, name: str) -> Any:
    """Return ``value`` or raise InvalidArgumentError when it is None."""
    if value is None:
        raise InvalidArgumentError(f"{name} must not be None")
    return value


def require_callable(value: Any, name: str) -> Any:
    require(value, name)
    if not callable(value):
        raise InvalidArgumentError(f"{name} must be callable, got {type(value).__name__}")
    return value


def require_non_negative(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{name} must be an int, got {value!r}")
    if value < 0:
        raise InvalidArgumentError(f"{name} must be >= 0, got {value}")
    return value


def as_number(value: Any) -> float | int:
    """Validate one extracted numeric value.

    bool is rejected even though it subclasses int: an extractor returning a
    flag is almost always a bug.
    """
    if isinstance(value, bool):
        raise InvalidArgumentError("numeric value cannot be bool")
    if isinstance(value, (int, float)):
        return value
    raise InvalidArgumentError(f"numeric value expected, got {type(value).__name__}: {value!r}")


__all__ = [
    "AbsentPolicy",
    "IllegalStateError",
    "InvalidArgumentError",
    "QueryError",
    "as_number",
    "require",
    "require_callable",
    "require_non_negative",
]

"""
Query-layer exception hierarchy.

All exceptions inherit from ``QueryError`` and provide ``to_dict()`` for
API-friendly error responses.

Two failure classes are kept apart on purpose: ``InvalidCriteria`` is raised
at translation time for caller contract violations, while
``QueryExecutionError`` is raised by executors when a backend call fails.
Neither is used for "no matching data", which is an empty success.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class QueryError(Exception):
    """Base exception for all query-layer errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class InvalidCriteria(QueryError):
    """
    Criteria value of the wrong shape.

    ``path`` names the offending criteria field (e.g. ``"mz_range.min"``).
    """

    def __init__(
        self,
        message: str,
        path: str | None = None,
        *,
        suggestions: list[str] | None = None,
    ) -> None:
        self.message = message
        self.path = path
        self.suggestions = suggestions or []
        super().__init__(message)

    @classmethod
    def unknown_choice(
        cls,
        value: str,
        valid_choices: list[str],
        path: str | None = None,
    ) -> InvalidCriteria:
        """Build an error for an unknown enum-like value with fuzzy suggestions."""
        suggestions = get_close_matches(value, valid_choices, n=3, cutoff=0.6)
        message = f"Unknown value '{value}'."
        if suggestions:
            message += f" Did you mean: {', '.join(suggestions)}?"
        message += f" Valid values: {', '.join(sorted(valid_choices))}"
        return cls(message, path=path, suggestions=suggestions)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_CRITERIA",
            "message": self.message,
            "path": self.path,
            "suggestions": self.suggestions,
        }


class FilterRegistrationError(QueryError):
    """Raised on duplicate filter names or registration after startup."""


class PaginationError(QueryError):
    """Raised when pagination would be applied to an unsorted or paginated query."""


class QueryExecutionError(QueryError):
    """
    A backend call failed.

    Wraps the underlying cause (available as ``__cause__``) together with
    the backend name so callers can log or collapse it at the boundary.
    """

    def __init__(self, backend: str, message: str) -> None:
        self.backend = backend
        super().__init__(f"{backend} query failed: {message}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "QUERY_EXECUTION_ERROR",
            "backend": self.backend,
            "message": str(self),
        }

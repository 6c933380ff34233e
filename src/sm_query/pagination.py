"""Offset/limit application shared by both translators."""

from __future__ import annotations

from typing import Protocol, TypeVar

from .exceptions import PaginationError

Q = TypeVar("Q", bound="Paginable")


class Paginable(Protocol):
    @property
    def is_sorted(self) -> bool: ...

    @property
    def is_paginated(self) -> bool: ...

    def with_pagination(self: Q, offset: int, limit: int) -> Q: ...


class Paginator:
    """
    Apply offset/limit to a sorted query exactly once.

    Bounds are taken as given; criteria validate them on construction.
    """

    def apply(self, query: Q, offset: int, limit: int) -> Q:
        if not query.is_sorted:
            raise PaginationError("Refusing to paginate an unsorted query")
        if query.is_paginated:
            raise PaginationError("Query is already paginated")
        return query.with_pagination(offset, limit)

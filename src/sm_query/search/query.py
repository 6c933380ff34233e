from __future__ import annotations

import json
from dataclasses import dataclass, replace
from typing import Any

from .clauses import Clause
from .serializer import SearchDialect, serialize_filter, serialize_sort


@dataclass(frozen=True)
class SearchQuery:
    """
    Immutable annotation search request.

    ``must`` holds conjunctive, non-scoring filter clauses; the database
    scope clause is always first. ``sort`` holds ``(field, direction)`` keys.
    ``offset``/``limit`` map to request-level ``from``/``size``.
    """

    must: tuple[Clause, ...] = ()
    sort: tuple[tuple[str, str], ...] = ()
    offset: int | None = None
    limit: int | None = None

    @property
    def is_sorted(self) -> bool:
        return bool(self.sort)

    @property
    def is_paginated(self) -> bool:
        return self.offset is not None or self.limit is not None

    def with_clause(self, clause: Clause) -> SearchQuery:
        return replace(self, must=(*self.must, clause))

    def with_sort(self, sort: tuple[tuple[str, str], ...]) -> SearchQuery:
        return replace(self, sort=tuple(sort))

    def with_pagination(self, offset: int, limit: int) -> SearchQuery:
        return replace(self, offset=offset, limit=limit)

    # -- wire format ---------------------------------------------------------

    def body(self, dialect: SearchDialect = SearchDialect.LEGACY) -> dict[str, Any]:
        body: dict[str, Any] = {"query": serialize_filter(self.must, dialect)}
        if self.sort:
            body["sort"] = serialize_sort(self.sort)
        return body

    def count_body(
        self, dialect: SearchDialect = SearchDialect.LEGACY
    ) -> dict[str, Any]:
        return {"query": serialize_filter(self.must, dialect)}

    def to_request(
        self, index: str, dialect: SearchDialect = SearchDialect.LEGACY
    ) -> dict[str, Any]:
        request: dict[str, Any] = {"index": index, "body": self.body(dialect)}
        if self.offset is not None:
            request["from"] = self.offset
        if self.limit is not None:
            request["size"] = self.limit
        return request

    def to_json(self, dialect: SearchDialect = SearchDialect.LEGACY) -> str:
        """Deterministic JSON of the request body, for logging and cache keys."""
        return json.dumps(self.body(dialect), separators=(",", ":"))

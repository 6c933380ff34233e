"""
Render typed clauses into the search backend's wire format.

Two dialects are supported:

* ``LEGACY``: the 2.x filter DSL the annotation index was built for
  (``or`` / ``missing`` filters, ``match`` with ``type: phrase``).
* ``MODERN``: equivalent ``bool`` / ``exists`` / ``match_phrase`` forms
  accepted by current releases.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from .clauses import Clause, Missing, Or, Phrase, Range, Term, Wildcard


class SearchDialect(str, Enum):
    LEGACY = "legacy"
    MODERN = "modern"


def _serialize_range(clause: Range) -> dict[str, Any]:
    bounds: dict[str, Any] = {}
    if clause.gte is not None:
        bounds["gte"] = clause.gte
    if clause.lt is not None:
        bounds["lt"] = clause.lt
    return {"range": {clause.field: bounds}}


def _serialize_phrase(clause: Phrase, dialect: SearchDialect) -> dict[str, Any]:
    if dialect is SearchDialect.MODERN:
        return {"match_phrase": {clause.field: clause.query}}
    return {"match": {clause.field: {"query": clause.query, "type": "phrase"}}}


def _serialize_missing(clause: Missing, dialect: SearchDialect) -> dict[str, Any]:
    if dialect is SearchDialect.MODERN:
        return {"bool": {"must_not": [{"exists": {"field": clause.field}}]}}
    return {"missing": {"field": clause.field}}


def _serialize_or(clause: Or, dialect: SearchDialect) -> dict[str, Any]:
    children = [serialize_clause(c, dialect) for c in clause.clauses]
    if dialect is SearchDialect.MODERN:
        return {"bool": {"should": children, "minimum_should_match": 1}}
    return {"or": children}


def serialize_clause(
    clause: Clause, dialect: SearchDialect = SearchDialect.LEGACY
) -> dict[str, Any]:
    """Render a single clause as a JSON-compatible dict."""
    if isinstance(clause, Term):
        return {"term": {clause.field: clause.value}}
    if isinstance(clause, Wildcard):
        return {"wildcard": {clause.field: clause.pattern}}
    if isinstance(clause, Phrase):
        return _serialize_phrase(clause, dialect)
    if isinstance(clause, Range):
        return _serialize_range(clause)
    if isinstance(clause, Missing):
        return _serialize_missing(clause, dialect)
    if isinstance(clause, Or):
        return _serialize_or(clause, dialect)
    raise TypeError(f"Unsupported clause type: {type(clause).__name__}")


def serialize_filter(
    must: tuple[Clause, ...], dialect: SearchDialect = SearchDialect.LEGACY
) -> dict[str, Any]:
    """Wrap conjunctive clauses in a non-scoring ``constant_score`` query."""
    return {
        "constant_score": {
            "filter": {
                "bool": {"must": [serialize_clause(c, dialect) for c in must]},
            }
        }
    }


def serialize_sort(sort: tuple[tuple[str, str], ...]) -> list[dict[str, str]]:
    return [{field: direction} for field, direction in sort]

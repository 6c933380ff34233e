"""
Annotation search backend.

Public API:
    - ``Term`` / ``Wildcard`` / ``Phrase`` / ``Range`` / ``Missing`` / ``Or``:
      typed filter clauses
    - ``SearchQuery``: immutable request (clauses, sort, window)
    - ``SearchDialect`` / ``serialize_filter``: wire rendering
    - ``evaluate`` / ``evaluate_all``: in-memory clause evaluation

The translator, executor and connection manager live in their own modules.
"""

from .clauses import Clause, Missing, Or, Phrase, Range, Term, Wildcard, contains
from .evaluator import evaluate, evaluate_all
from .query import SearchQuery
from .serializer import (
    SearchDialect,
    serialize_clause,
    serialize_filter,
    serialize_sort,
)

__all__ = [
    "Clause",
    "Term",
    "Wildcard",
    "Phrase",
    "Range",
    "Missing",
    "Or",
    "contains",
    "SearchQuery",
    "SearchDialect",
    "serialize_clause",
    "serialize_filter",
    "serialize_sort",
    "evaluate",
    "evaluate_all",
]

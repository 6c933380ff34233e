"""
In-memory evaluation of search clauses against denormalized documents.

Mirrors the index semantics closely enough to check that a filter rejects
the same records on the search side as on the relational side: ``term``
is exact equality on non-analyzed values, ``wildcard`` is an anchored
pattern, ``match`` phrase compares lower-cased word tokens in order.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from ..documents import resolve_path
from .clauses import Clause, Missing, Or, Phrase, Range, Term, Wildcard

_TOKEN_RE = re.compile(r"\w+")


def _field_values(document: Mapping[str, Any], field: str) -> list[Any]:
    value = resolve_path(document, field.split("."))
    if value is None:
        return []
    if isinstance(value, list):
        return [v for v in value if v is not None]
    return [value]


def wildcard_to_regex(pattern: str) -> re.Pattern[str]:
    """Compile a wildcard pattern (``*``, ``?``, backslash escapes) to a regex."""
    parts: list[str] = []
    chars = iter(pattern)
    for char in chars:
        if char == "\\":
            parts.append(re.escape(next(chars, "\\")))
        elif char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.DOTALL)


def _tokens(text: Any) -> list[str]:
    return _TOKEN_RE.findall(str(text).lower())


def _phrase_matches(text: Any, query: str) -> bool:
    haystack = _tokens(text)
    needle = _tokens(query)
    if not needle:
        return False
    width = len(needle)
    return any(
        haystack[i : i + width] == needle for i in range(len(haystack) - width + 1)
    )


def _in_range(value: Any, clause: Range) -> bool:
    try:
        if clause.gte is not None and not value >= clause.gte:
            return False
        if clause.lt is not None and not value < clause.lt:
            return False
    except TypeError:
        return False
    return True


def evaluate(clause: Clause, document: Mapping[str, Any]) -> bool:
    """True if *document* satisfies *clause*."""
    if isinstance(clause, Or):
        return any(evaluate(c, document) for c in clause.clauses)
    values = _field_values(document, clause.field)
    if isinstance(clause, Missing):
        return not values
    if isinstance(clause, Term):
        return any(v == clause.value for v in values)
    if isinstance(clause, Wildcard):
        regex = wildcard_to_regex(clause.pattern)
        return any(isinstance(v, str) and regex.fullmatch(v) for v in values)
    if isinstance(clause, Phrase):
        return any(_phrase_matches(v, clause.query) for v in values)
    if isinstance(clause, Range):
        return any(_in_range(v, clause) for v in values)
    raise TypeError(f"Unsupported clause type: {type(clause).__name__}")


def evaluate_all(clauses: tuple[Clause, ...], document: Mapping[str, Any]) -> bool:
    """Conjunction of *clauses*, as in a ``bool.must`` filter."""
    return all(evaluate(c, document) for c in clauses)

"""
Typed search-filter clauses.

Translators build these value objects; :mod:`.serializer` is the only
place that knows how they look on the wire.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Term:
    """Exact equality on a non-analyzed field."""

    field: str
    value: Any


@dataclass(frozen=True)
class Wildcard:
    """Wildcard pattern match (``*`` any run, ``?`` single character)."""

    field: str
    pattern: str


@dataclass(frozen=True)
class Phrase:
    """Tokenized, ordered phrase match."""

    field: str
    query: str


@dataclass(frozen=True)
class Range:
    """Half-open interval ``[gte, lt)``; a ``None`` bound is left open."""

    field: str
    gte: Any = None
    lt: Any = None


@dataclass(frozen=True)
class Missing:
    """Document has no value for ``field``."""

    field: str


@dataclass(frozen=True, init=False)
class Or:
    """Disjunction of clauses."""

    clauses: tuple[Clause, ...]

    def __init__(self, *clauses: Clause) -> None:
        object.__setattr__(self, "clauses", tuple(clauses))


Clause = Union[Term, Wildcard, Phrase, Range, Missing, Or]

_WILDCARD_SPECIALS = ("\\", "*", "?")


def escape_wildcard(value: str) -> str:
    """Escape wildcard metacharacters so *value* matches literally."""
    for char in _WILDCARD_SPECIALS:
        value = value.replace(char, "\\" + char)
    return value


def contains(field: str, value: str) -> Wildcard:
    """Wildcard clause matching *value* anywhere in *field*."""
    return Wildcard(field, f"*{escape_wildcard(value)}*")

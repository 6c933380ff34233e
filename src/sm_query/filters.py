"""
Dataset filter definitions.

A :class:`FilterDefinition` is pure data: a name, a path into the dataset
metadata document, a :class:`MatchKind` and an optional preprocessing hook.
Rendering is dispatched through per-backend tables keyed by match kind, so
``PHRASE`` reuses the ``SUBSTRING`` relational renderer explicitly instead of
inheriting it.

A record whose metadata lacks the filter path is never excluded by that
filter: every backend rendering ORs the comparison with an "absent" check.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import or_

from .documents import resolve_path
from .exceptions import InvalidCriteria
from .operators import MatchKind
from .search.clauses import Clause, Missing, Or, Phrase, Term, contains

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

    from .relational.query import RenderedSQL

SEARCH_METADATA_PREFIX = "ds_meta"

Preprocessor = Callable[[str], str]


# ---------------------------------------------------------------------------
# Per-backend renderers
# ---------------------------------------------------------------------------


def _relational_exact(extracted: Any, value: str) -> ColumnElement[bool]:
    return cast("ColumnElement[bool]", extracted == value)


def _relational_substring(extracted: Any, value: str) -> ColumnElement[bool]:
    return cast("ColumnElement[bool]", extracted.contains(value, autoescape=True))


def _search_exact(field: str, value: str) -> Clause:
    return Term(field, value)


def _search_substring(field: str, value: str) -> Clause:
    return contains(field, value)


def _search_phrase(field: str, value: str) -> Clause:
    return Phrase(field, value)


def _as_text(value: Any) -> str:
    """Text form of a JSON value, as ``#>>`` would return it."""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def _memory_exact(actual: Any, value: str) -> bool:
    return _as_text(actual) == value


def _memory_substring(actual: Any, value: str) -> bool:
    return value in _as_text(actual)


_RELATIONAL_RENDERERS: dict[MatchKind, Callable[[Any, str], ColumnElement[bool]]] = {
    MatchKind.EXACT: _relational_exact,
    MatchKind.SUBSTRING: _relational_substring,
    MatchKind.PHRASE: _relational_substring,
}

_SEARCH_RENDERERS: dict[MatchKind, Callable[[str, str], Clause]] = {
    MatchKind.EXACT: _search_exact,
    MatchKind.SUBSTRING: _search_substring,
    MatchKind.PHRASE: _search_phrase,
}

_MEMORY_EVALUATORS: dict[MatchKind, Callable[[Any, str], bool]] = {
    MatchKind.EXACT: _memory_exact,
    MatchKind.SUBSTRING: _memory_substring,
    MatchKind.PHRASE: _memory_substring,
}


# ---------------------------------------------------------------------------
# FilterDefinition
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FilterDefinition:
    """
    Named, path-addressed matcher over dataset metadata.

    Attributes:
        name: Unique identifier used as the key in ``dataset_filters``.
        path: Field names locating the value inside the metadata document,
            e.g. ``("Submitted_By", "Institution")``.
        match_kind: Comparison semantics.
        preprocess: Optional pure, idempotent ``str -> str`` hook applied to
            the caller's value before rendering on any backend.
    """

    name: str
    path: tuple[str, ...]
    match_kind: MatchKind = MatchKind.EXACT
    preprocess: Preprocessor | None = None

    def __post_init__(self) -> None:
        if not self.path:
            raise ValueError(f"Filter '{self.name}' needs a non-empty path")
        object.__setattr__(self, "path", tuple(self.path))
        object.__setattr__(self, "match_kind", MatchKind(self.match_kind))

    @classmethod
    def from_dotted(
        cls,
        name: str,
        dotted_path: str,
        match_kind: MatchKind = MatchKind.EXACT,
        preprocess: Preprocessor | None = None,
    ) -> FilterDefinition:
        """Build a definition from a ``"A.B"`` style path."""
        return cls(name, tuple(dotted_path.split(".")), match_kind, preprocess)

    @property
    def dotted_path(self) -> str:
        return ".".join(self.path)

    @property
    def search_field(self) -> str:
        """Denormalized field holding this metadata value in the search index."""
        return f"{SEARCH_METADATA_PREFIX}.{self.dotted_path}"

    def prepare(self, value: Any) -> str:
        """Validate the caller's value and apply ``preprocess``."""
        if not isinstance(value, str):
            raise InvalidCriteria(
                f"Filter '{self.name}' expects a string, got {type(value).__name__}",
                path=f"dataset_filters.{self.name}",
            )
        if self.preprocess is not None:
            return self.preprocess(value)
        return value

    # -- relational --------------------------------------------------------

    def extract(self, column: Any) -> Any:
        """Text extraction (``column #>> path``) of the metadata value."""
        return column[self.path].as_string()

    def relational_predicate(self, value: Any, column: Any) -> ColumnElement[bool]:
        """
        SQL predicate over the JSON ``column``.

        Rows lacking the path (extraction yields ``NULL``) are kept.
        """
        prepared = self.prepare(value)
        extracted = self.extract(column)
        comparison = _RELATIONAL_RENDERERS[self.match_kind](extracted, prepared)
        return or_(extracted.is_(None), comparison)

    def relational_fragment(self, value: Any, column: Any) -> RenderedSQL:
        """``(fragment, bound_params)`` for the PostgreSQL dialect."""
        from .relational.query import render_sql

        return render_sql(self.relational_predicate(value, column))

    # -- search ------------------------------------------------------------

    def search_predicate(self, value: Any) -> Clause:
        """Search clause; documents lacking the field are kept."""
        prepared = self.prepare(value)
        comparison = _SEARCH_RENDERERS[self.match_kind](self.search_field, prepared)
        return Or(Missing(self.search_field), comparison)

    # -- in-memory ---------------------------------------------------------

    def matches(self, metadata: Any, value: Any) -> bool:
        """Evaluate the relational semantics against a metadata document."""
        prepared = self.prepare(value)
        actual = resolve_path(metadata, self.path)
        if actual is None:
            return True
        return _MEMORY_EVALUATORS[self.match_kind](actual, prepared)

"""
Translate :class:`DatasetQueryCriteria` into a :class:`RelationalQuery`.

Predicates are added in a fixed order (exact name, then dataset filters in
registry order) so the generated SQL is stable for logging and tests.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from sqlalchemy import select

from ..filters import FilterDefinition
from ..operators import MatchKind
from ..pagination import Paginator
from ..sorting import SortResolver
from .models import DatasetRecord
from .query import RelationalQuery

if TYPE_CHECKING:
    from sqlalchemy import Select

    from ..criteria import DatasetQueryCriteria
    from ..registry import FilterRegistry


class DatasetQueryTranslator:
    """Builds dataset listing queries from criteria."""

    def __init__(
        self,
        registry: FilterRegistry,
        *,
        sort_resolver: SortResolver | None = None,
        paginator: Paginator | None = None,
    ) -> None:
        self._registry = registry
        self._sort_resolver = sort_resolver or SortResolver()
        self._paginator = paginator or Paginator()

    def translate(self, criteria: DatasetQueryCriteria) -> RelationalQuery:
        query = self.translate_count(criteria)
        column, direction = self._sort_resolver.resolve_relational(criteria.order)
        query = query.with_ordering(column, direction)
        return self._paginator.apply(query, criteria.offset, criteria.limit)

    def translate_count(self, criteria: DatasetQueryCriteria) -> RelationalQuery:
        query = RelationalQuery()
        if criteria.name_exact is not None:
            query = query.where(DatasetRecord.name == criteria.name_exact)

        for definition in self._registry:
            value = criteria.dataset_filters.get(definition.name)
            if value is not None:
                query = query.where(
                    definition.relational_predicate(value, DatasetRecord.metadata_)
                )
        return query

    def translate_suggestions(
        self, path: str | Sequence[str], text: str
    ) -> Select[Any]:
        """
        Distinct metadata values at *path* containing *text*, ascending.

        Backs type-ahead suggestions for metadata fields that have no
        registered filter.
        """
        parts = tuple(path.split(".")) if isinstance(path, str) else tuple(path)
        definition = FilterDefinition("suggestion", parts, MatchKind.SUBSTRING)
        extracted = definition.extract(DatasetRecord.metadata_)
        field = extracted.label("field")
        return (
            select(field)
            .distinct()
            .where(extracted.isnot(None))
            .where(definition.relational_predicate(text, DatasetRecord.metadata_))
            .order_by(field.asc())
        )

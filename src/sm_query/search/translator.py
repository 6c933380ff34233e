"""
Translate :class:`AnnotationQueryCriteria` into a :class:`SearchQuery`.

Clause order is fixed (database scope first, dataset filters last in
registry order) so identical criteria always produce identical requests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..mz import format_mz
from ..pagination import Paginator
from ..sorting import SortResolver
from .clauses import Or, Range, Term, contains
from .query import SearchQuery

if TYPE_CHECKING:
    from ..criteria import AnnotationQueryCriteria
    from ..registry import FilterRegistry

# FDR levels are stored as floats (0.05, 0.1, 0.2, 0.5); the threshold is
# widened by this amount instead of relying on exact equality.
FDR_EPSILON = 1e-3


class AnnotationQueryTranslator:
    """Builds annotation search requests from criteria."""

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

    def translate(self, criteria: AnnotationQueryCriteria) -> SearchQuery:
        """Full request: filters, sort, then ``from``/``size``."""
        query = self.translate_count(criteria)
        query = query.with_sort(self._sort_resolver.resolve_search(criteria.order))
        return self._paginator.apply(query, criteria.offset, criteria.limit)

    def translate_count(self, criteria: AnnotationQueryCriteria) -> SearchQuery:
        """Filters only; used for count requests."""
        query = SearchQuery().with_clause(Term("db_name", criteria.database))

        if criteria.dataset_id is not None:
            query = query.with_clause(Term("ds_id", criteria.dataset_id))

        if criteria.mz_range is not None:
            query = query.with_clause(
                Range(
                    "mz",
                    gte=format_mz(criteria.mz_range.min, path="mz_range.min"),
                    lt=format_mz(criteria.mz_range.max, path="mz_range.max"),
                )
            )

        if criteria.score_range is not None:
            query = query.with_clause(
                Range("msm", gte=criteria.score_range.min, lt=criteria.score_range.max)
            )

        if criteria.fdr_threshold is not None:
            query = query.with_clause(
                Range("fdr", gte=0, lt=criteria.fdr_threshold + FDR_EPSILON)
            )

        if criteria.sum_formula is not None:
            query = query.with_clause(Term("sf", criteria.sum_formula))

        if criteria.adduct is not None:
            query = query.with_clause(Term("adduct", criteria.adduct))

        if criteria.dataset_name is not None:
            query = query.with_clause(Term("ds_name", criteria.dataset_name))

        if criteria.compound_substring is not None:
            text = criteria.compound_substring
            query = query.with_clause(
                Or(contains("comp_names", text), Term("sf", text))
            )

        for definition in self._registry:
            value = criteria.dataset_filters.get(definition.name)
            if value is not None:
                query = query.with_clause(definition.search_predicate(value))

        return query

"""Map abstract sort requests to backend-native ordering."""

from __future__ import annotations

from .criteria import SortSpec
from .operators import SortDirection, SortField

SEARCH_SORT_FIELDS: dict[SortField, str] = {
    SortField.ID: "ds_id",
    SortField.NAME: "ds_name",
    SortField.MZ: "mz",
    SortField.SCORE: "msm",
}

RELATIONAL_SORT_COLUMNS: dict[SortField, str] = {
    SortField.ID: "id",
    SortField.NAME: "name",
}


class SortResolver:
    """
    Resolve a :class:`SortSpec` for either backend.

    Default directions when the caller leaves ``direction`` unset:

    * search: descending for ``SCORE`` (higher score first), ascending for
      everything else, including the FDR primary key of ``FDR_THEN_SCORE``;
    * relational: descending.
    """

    def __init__(
        self,
        *,
        relational_default: SortDirection = SortDirection.DESCENDING,
    ) -> None:
        self._relational_default = relational_default

    def resolve_search(self, spec: SortSpec) -> tuple[tuple[str, str], ...]:
        """Ordered ``(field, direction)`` keys for the search backend."""
        if spec.field is SortField.FDR_THEN_SCORE:
            primary = spec.direction or SortDirection.ASCENDING
            return (
                ("fdr", primary.value),
                ("msm", primary.reversed().value),
            )
        default = (
            SortDirection.DESCENDING
            if spec.field is SortField.SCORE
            else SortDirection.ASCENDING
        )
        direction = spec.direction or default
        return ((SEARCH_SORT_FIELDS[spec.field], direction.value),)

    def resolve_relational(self, spec: SortSpec) -> tuple[str, SortDirection]:
        """
        ``(column, direction)`` for the dataset table.

        Fields that are not dataset columns fall back to ``id``.
        """
        column = RELATIONAL_SORT_COLUMNS.get(spec.field, "id")
        return column, spec.direction or self._relational_default

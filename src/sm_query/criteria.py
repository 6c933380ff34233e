"""
Criteria value objects.

Criteria are immutable and validated on construction: a value of the wrong
shape raises :class:`~sm_query.exceptions.InvalidCriteria` immediately,
while an absent (``None``) field simply contributes no constraint.

``from_args`` parses the argument shape of the public GraphQL API
(``orderBy``/``sortingOrder``/``filter``/``datasetFilter``).
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .exceptions import InvalidCriteria
from .operators import SortDirection, SortField

DEFAULT_LIMIT = 10

_GRAPHQL_ORDER_BY: dict[str, SortField] = {
    "ORDER_BY_ID": SortField.ID,
    "ORDER_BY_NAME": SortField.NAME,
    "ORDER_BY_MZ": SortField.MZ,
    "ORDER_BY_MSM": SortField.SCORE,
    "ORDER_BY_FDR_MSM": SortField.FDR_THEN_SCORE,
}

_GRAPHQL_SORTING_ORDER: dict[str, SortDirection] = {
    "ASCENDING": SortDirection.ASCENDING,
    "DESCENDING": SortDirection.DESCENDING,
}


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def _check_number(value: Any, path: str) -> float | int:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise InvalidCriteria(
            f"Expected a number, got {type(value).__name__}", path=path
        )
    if not math.isfinite(value):
        raise InvalidCriteria(f"Expected a finite number, got {value}", path=path)
    return value


def _check_optional_str(value: Any, path: str) -> None:
    if value is not None and not isinstance(value, str):
        raise InvalidCriteria(
            f"Expected a string, got {type(value).__name__}", path=path
        )


def _check_pagination(offset: Any, limit: Any) -> None:
    if isinstance(offset, bool) or not isinstance(offset, int) or offset < 0:
        raise InvalidCriteria(
            f"offset must be a non-negative integer, got {offset!r}", path="offset"
        )
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise InvalidCriteria(
            f"limit must be a positive integer, got {limit!r}", path="limit"
        )


def _freeze_filters(filters: Any) -> Mapping[str, Any]:
    if not isinstance(filters, Mapping):
        raise InvalidCriteria(
            f"dataset_filters must be a mapping, got {type(filters).__name__}",
            path="dataset_filters",
        )
    for key in filters:
        if not isinstance(key, str):
            raise InvalidCriteria(
                f"Filter names must be strings, got {key!r}", path="dataset_filters"
            )
    return MappingProxyType(dict(filters))


def _coerce_range(value: Any, path: str) -> ValueRange | None:
    if value is None or isinstance(value, ValueRange):
        return value
    if isinstance(value, Mapping):
        if "min" not in value or "max" not in value:
            raise InvalidCriteria("Range needs both 'min' and 'max'", path=path)
        return ValueRange(value["min"], value["max"], path=path)
    raise InvalidCriteria(
        f"Expected a range, got {type(value).__name__}", path=path
    )


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ValueRange:
    """Numeric interval ``[min, max)``."""

    min: float
    max: float
    path: str = field(default="range", compare=False, repr=False)

    def __post_init__(self) -> None:
        _check_number(self.min, f"{self.path}.min")
        _check_number(self.max, f"{self.path}.max")


@dataclass(frozen=True)
class SortSpec:
    """
    Abstract ordering request.

    ``direction=None`` lets the resolver pick the field's default direction.
    """

    field: SortField
    direction: SortDirection | None = None

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "field", SortField(self.field))
        except ValueError:
            raise InvalidCriteria.unknown_choice(
                str(self.field), [f.value for f in SortField], path="order.field"
            ) from None
        if self.direction is not None:
            try:
                object.__setattr__(self, "direction", SortDirection(self.direction))
            except ValueError:
                raise InvalidCriteria.unknown_choice(
                    str(self.direction),
                    [d.value for d in SortDirection],
                    path="order.direction",
                ) from None

    @classmethod
    def from_args(
        cls,
        order_by: str | None,
        sorting_order: str | None,
        *,
        default: SortField,
    ) -> SortSpec:
        """Parse ``orderBy`` / ``sortingOrder`` enum names."""
        sort_field = default
        if order_by is not None:
            if order_by not in _GRAPHQL_ORDER_BY:
                raise InvalidCriteria.unknown_choice(
                    str(order_by), list(_GRAPHQL_ORDER_BY), path="orderBy"
                )
            sort_field = _GRAPHQL_ORDER_BY[order_by]
        direction = None
        if sorting_order is not None:
            if sorting_order not in _GRAPHQL_SORTING_ORDER:
                raise InvalidCriteria.unknown_choice(
                    str(sorting_order),
                    list(_GRAPHQL_SORTING_ORDER),
                    path="sortingOrder",
                )
            direction = _GRAPHQL_SORTING_ORDER[sorting_order]
        return cls(sort_field, direction)


def _set_or_none(value: Any) -> Any:
    """Empty API values (``""``, ``0``) mean the field was left unset."""
    return value if value else None


def _present_filters(values: Mapping[str, Any] | None) -> dict[str, Any]:
    """Drop unset entries (``None`` or ``""``) from an API filter object."""
    if not values:
        return {}
    return {k: v for k, v in values.items() if v is not None and v != ""}


@dataclass(frozen=True)
class AnnotationQueryCriteria:
    """Annotation search criteria, always scoped to one compound database."""

    database: str
    dataset_id: str | None = None
    dataset_name: str | None = None
    mz_range: ValueRange | None = None
    score_range: ValueRange | None = None
    fdr_threshold: float | None = None
    sum_formula: str | None = None
    # "" is a real value (adduct-free annotations); None means no filter
    adduct: str | None = None
    compound_substring: str | None = None
    dataset_filters: Mapping[str, Any] = field(default_factory=dict)
    order: SortSpec = field(default_factory=lambda: SortSpec(SortField.SCORE))
    offset: int = 0
    limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        if not isinstance(self.database, str) or not self.database:
            raise InvalidCriteria("database is required", path="database")
        for name in (
            "dataset_id",
            "dataset_name",
            "sum_formula",
            "adduct",
            "compound_substring",
        ):
            _check_optional_str(getattr(self, name), name)
        object.__setattr__(
            self, "mz_range", _coerce_range(self.mz_range, "mz_range")
        )
        object.__setattr__(
            self, "score_range", _coerce_range(self.score_range, "score_range")
        )
        if self.fdr_threshold is not None:
            _check_number(self.fdr_threshold, "fdr_threshold")
            if self.fdr_threshold < 0:
                raise InvalidCriteria(
                    "fdr_threshold must be non-negative", path="fdr_threshold"
                )
        if not isinstance(self.order, SortSpec):
            raise InvalidCriteria("order must be a SortSpec", path="order")
        object.__setattr__(
            self, "dataset_filters", _freeze_filters(self.dataset_filters)
        )
        _check_pagination(self.offset, self.limit)

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> AnnotationQueryCriteria:
        """Build criteria from ``allAnnotations`` / ``countAnnotations`` arguments."""
        flt = args.get("filter") or {}
        if "database" not in flt:
            raise InvalidCriteria("filter.database is required", path="filter.database")
        return cls(
            database=flt["database"],
            dataset_id=_set_or_none(flt.get("datasetId")),
            dataset_name=_set_or_none(flt.get("datasetName")),
            mz_range=_coerce_range(flt.get("mzFilter"), "filter.mzFilter"),
            score_range=_coerce_range(
                flt.get("msmScoreFilter"), "filter.msmScoreFilter"
            ),
            fdr_threshold=_set_or_none(flt.get("fdrLevel")),
            sum_formula=_set_or_none(flt.get("sumFormula")),
            # "" is kept: it selects adduct-free annotations
            adduct=flt.get("adduct"),
            compound_substring=_set_or_none(flt.get("compoundQuery")),
            dataset_filters=_present_filters(args.get("datasetFilter")),
            order=SortSpec.from_args(
                args.get("orderBy"), args.get("sortingOrder"), default=SortField.SCORE
            ),
            offset=args.get("offset", 0),
            limit=args.get("limit", DEFAULT_LIMIT),
        )


@dataclass(frozen=True)
class DatasetQueryCriteria:
    """Dataset listing criteria."""

    name_exact: str | None = None
    dataset_filters: Mapping[str, Any] = field(default_factory=dict)
    order: SortSpec = field(default_factory=lambda: SortSpec(SortField.ID))
    offset: int = 0
    limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        _check_optional_str(self.name_exact, "name_exact")
        if not isinstance(self.order, SortSpec):
            raise InvalidCriteria("order must be a SortSpec", path="order")
        object.__setattr__(
            self, "dataset_filters", _freeze_filters(self.dataset_filters)
        )
        _check_pagination(self.offset, self.limit)

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> DatasetQueryCriteria:
        """Build criteria from ``allDatasets`` arguments."""
        flt = dict(args.get("filter") or {})
        name = flt.pop("name", None)
        return cls(
            name_exact=name or None,
            dataset_filters=_present_filters(flt),
            order=SortSpec.from_args(
                args.get("orderBy"), args.get("sortingOrder"), default=SortField.ID
            ),
            offset=args.get("offset", 0),
            limit=args.get("limit", DEFAULT_LIMIT),
        )

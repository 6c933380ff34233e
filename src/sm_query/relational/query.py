"""
Relational query value object.

``RelationalQuery`` collects the conjunctive predicates, ordering and
pagination of a dataset listing and builds the SQLAlchemy statement on
demand. Ordering is applied before offset/limit when the statement is
built, regardless of the order in which the parts were set.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, NamedTuple

from sqlalchemy import Select, and_, asc, desc, func, select
from sqlalchemy.dialects import postgresql

from ..operators import SortDirection
from .models import DatasetRecord

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement
    from sqlalchemy.engine import Dialect
    from sqlalchemy.sql import ClauseElement

_ORDER_COLUMNS: dict[str, Any] = {
    "id": DatasetRecord.id,
    "name": DatasetRecord.name,
}


class RenderedSQL(NamedTuple):
    sql: str
    params: dict[str, Any]


def render_sql(element: ClauseElement, dialect: Dialect | None = None) -> RenderedSQL:
    """Compile *element* into SQL text and its bound parameters (PostgreSQL default)."""
    compiled = element.compile(dialect=dialect or postgresql.dialect())
    return RenderedSQL(str(compiled), dict(compiled.params))


@dataclass(frozen=True, eq=False)
class RelationalQuery:
    """
    Immutable dataset query.

    Attributes:
        predicates: Conjunctive WHERE predicates, in construction order.
        order: ``(column, direction)`` or ``None`` when unsorted.
        offset: Rows to skip; ``None`` when not paginated.
        limit: Maximum number of rows; ``None`` when not paginated.
    """

    predicates: tuple[ColumnElement[bool], ...] = ()
    order: tuple[str, SortDirection] | None = None
    offset: int | None = None
    limit: int | None = None

    @property
    def is_sorted(self) -> bool:
        return self.order is not None

    @property
    def is_paginated(self) -> bool:
        return self.offset is not None or self.limit is not None

    def where(self, predicate: ColumnElement[bool]) -> RelationalQuery:
        """Return a copy with *predicate* ANDed in."""
        return replace(self, predicates=(*self.predicates, predicate))

    def with_ordering(self, column: str, direction: SortDirection) -> RelationalQuery:
        if column not in _ORDER_COLUMNS:
            raise ValueError(f"Unsupported order column: {column}")
        return replace(self, order=(column, direction))

    def with_pagination(self, offset: int, limit: int) -> RelationalQuery:
        return replace(self, offset=offset, limit=limit)

    # -- statement building --------------------------------------------------

    def _where_clause(self) -> ColumnElement[bool] | None:
        if not self.predicates:
            return None
        return and_(*self.predicates)

    def statement(self) -> Select[Any]:
        """``SELECT`` of dataset records with ordering applied before pagination."""
        stmt = select(DatasetRecord)
        where = self._where_clause()
        if where is not None:
            stmt = stmt.where(where)
        if self.order is not None:
            column, direction = self.order
            order_fn = desc if direction is SortDirection.DESCENDING else asc
            stmt = stmt.order_by(order_fn(_ORDER_COLUMNS[column]))
        if self.offset is not None:
            stmt = stmt.offset(self.offset)
        if self.limit is not None:
            stmt = stmt.limit(self.limit)
        return stmt

    def count_statement(self) -> Select[Any]:
        """``SELECT count(*)`` over the same predicates, without order or window."""
        stmt = select(func.count()).select_from(DatasetRecord)
        where = self._where_clause()
        if where is not None:
            stmt = stmt.where(where)
        return stmt

    def render(self, dialect: Dialect | None = None) -> RenderedSQL:
        return render_sql(self.statement(), dialect)

"""
Run dataset queries against the relational store.

Methods raise :class:`QueryExecutionError` when the database call fails.
The ``search_or_empty``, ``count_or_zero`` and ``get_or_none`` variants are
for the outermost API boundary, where a failed listing is reported as an empty
result after the cause has been logged.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import QueryExecutionError
from .models import DatasetRecord
from .query import render_sql

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from .query import RelationalQuery

logger = logging.getLogger("sm_query.relational.executor")

SessionFactory = Callable[[], "AsyncSession"]

BACKEND = "relational"

T = TypeVar("T")


def _all_scalars(result: Any) -> list[Any]:
    return list(result.scalars().all())


def _first_scalar(result: Any) -> Any:
    return result.scalars().first()


def _count(result: Any) -> int:
    return int(result.scalar_one())


class DatasetQueryExecutor:
    """Executes :class:`RelationalQuery` objects with an async session factory."""

    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    async def _execute(self, stmt: Select[Any], consume: Callable[[Any], T]) -> T:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("SQL: %s", render_sql(stmt).sql)
        start = time.monotonic()
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return consume(result)
        except SQLAlchemyError as exc:
            logger.exception("Dataset query failed")
            raise QueryExecutionError(BACKEND, str(exc)) from exc
        finally:
            logger.debug(
                "Dataset query took %.2f ms", (time.monotonic() - start) * 1000
            )

    async def search(self, query: RelationalQuery) -> list[DatasetRecord]:
        return await self._execute(query.statement(), _all_scalars)

    async def count(self, query: RelationalQuery) -> int:
        return await self._execute(query.count_statement(), _count)

    async def get_by_id(self, dataset_id: str) -> DatasetRecord | None:
        stmt = select(DatasetRecord).where(DatasetRecord.id == dataset_id)
        return await self._execute(stmt, _first_scalar)

    async def get_by_name(self, name: str) -> DatasetRecord | None:
        stmt = select(DatasetRecord).where(DatasetRecord.name == name)
        return await self._execute(stmt, _first_scalar)

    async def suggest(self, stmt: Select[Any]) -> list[str]:
        return await self._execute(stmt, _all_scalars)

    # -- boundary helpers ----------------------------------------------------

    async def search_or_empty(self, query: RelationalQuery) -> list[DatasetRecord]:
        try:
            return await self.search(query)
        except QueryExecutionError as exc:
            logger.warning("Returning empty dataset list: %s", exc)
            return []

    async def count_or_zero(self, query: RelationalQuery) -> int:
        try:
            return await self.count(query)
        except QueryExecutionError as exc:
            logger.warning("Returning zero dataset count: %s", exc)
            return 0

    async def get_or_none(self, dataset_id: str) -> DatasetRecord | None:
        try:
            return await self.get_by_id(dataset_id)
        except QueryExecutionError as exc:
            logger.warning("Returning no dataset for id %s: %s", dataset_id, exc)
            return None

    async def get_by_name_or_none(self, name: str) -> DatasetRecord | None:
        try:
            return await self.get_by_name(name)
        except QueryExecutionError as exc:
            logger.warning("Returning no dataset for name %s: %s", name, exc)
            return None

"""
QueryService — single entry point for callers.

Holds the process-wide filter registry and both translators. Filters may be
registered until the service is frozen; the first translation freezes it.
Translation methods are pure and may be called concurrently. The async
methods need the matching executor to be configured.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from .criteria import AnnotationQueryCriteria, DatasetQueryCriteria
from .exceptions import QueryError
from .registry import FilterRegistry, build_default_registry
from .relational.translator import DatasetQueryTranslator
from .search.serializer import SearchDialect
from .search.translator import AnnotationQueryTranslator

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

    from .config import QuerySettings
    from .filters import FilterDefinition
    from .relational.executor import DatasetQueryExecutor
    from .relational.models import DatasetRecord
    from .relational.query import RelationalQuery
    from .search.connection import SearchConnectionManager
    from .search.executor import AnnotationSearchExecutor
    from .search.query import SearchQuery

logger = logging.getLogger("sm_query.service")


class QueryService:
    """Translate criteria and, optionally, execute them."""

    def __init__(
        self,
        registry: FilterRegistry | None = None,
        *,
        datasets: DatasetQueryExecutor | None = None,
        annotations: AnnotationSearchExecutor | None = None,
        engine: AsyncEngine | None = None,
        search_manager: SearchConnectionManager | None = None,
    ) -> None:
        if registry is None:
            registry = build_default_registry(freeze=False)
        self._registry = registry
        self._dataset_translator = DatasetQueryTranslator(self._registry)
        self._annotation_translator = AnnotationQueryTranslator(self._registry)
        self._datasets = datasets
        self._annotations = annotations
        self._engine = engine
        self._search_manager = search_manager

    @classmethod
    def from_settings(
        cls, settings: QuerySettings, registry: FilterRegistry | None = None
    ) -> QueryService:
        """
        Wire both executors from settings (engine pool and search client).

        The service owns the engine and the client; release them with
        :meth:`close`.
        """
        from .relational.connection import create_dataset_engine, create_session_factory
        from .relational.executor import DatasetQueryExecutor
        from .search.connection import SearchConnectionManager
        from .search.executor import AnnotationSearchExecutor

        if settings.search_dialect is SearchDialect.LEGACY:
            raise QueryError(
                "The legacy search dialect needs a 2.x cluster, which the bundled "
                "8.x client cannot reach; use the modern dialect"
            )
        engine = create_dataset_engine(settings)
        manager = SearchConnectionManager(settings.search_hosts)
        return cls(
            registry,
            datasets=DatasetQueryExecutor(create_session_factory(engine)),
            annotations=AnnotationSearchExecutor(
                manager.connect(),
                settings.search_index,
                dialect=settings.search_dialect,
            ),
            engine=engine,
            search_manager=manager,
        )

    async def close(self) -> None:
        """Close the search client and dispose of the connection pool."""
        if self._search_manager is not None:
            await self._search_manager.close()
        if self._engine is not None:
            await self._engine.dispose()

    @property
    def registry(self) -> FilterRegistry:
        return self._registry

    # -- translation ---------------------------------------------------------

    def register_filter(self, definition: FilterDefinition) -> None:
        """Add a dataset filter; only valid before the service is frozen."""
        self._registry.register(definition)
        logger.info(
            "Registered dataset filter %s (%s)", definition.name, definition.dotted_path
        )

    def freeze(self) -> None:
        """End the startup phase: the filter registry becomes read-only."""
        if not self._registry.frozen:
            self._registry.freeze()
            logger.info("Filter registry frozen with %d filters", len(self._registry))

    def translate_annotation_query(
        self, criteria: AnnotationQueryCriteria
    ) -> SearchQuery:
        self.freeze()
        return self._annotation_translator.translate(criteria)

    def translate_annotation_count(
        self, criteria: AnnotationQueryCriteria
    ) -> SearchQuery:
        self.freeze()
        return self._annotation_translator.translate_count(criteria)

    def translate_dataset_query(
        self, criteria: DatasetQueryCriteria
    ) -> RelationalQuery:
        self.freeze()
        return self._dataset_translator.translate(criteria)

    def translate_dataset_count(
        self, criteria: DatasetQueryCriteria
    ) -> RelationalQuery:
        self.freeze()
        return self._dataset_translator.translate_count(criteria)

    # -- execution -----------------------------------------------------------

    def _require_datasets(self) -> DatasetQueryExecutor:
        if self._datasets is None:
            raise QueryError("No dataset executor configured")
        return self._datasets

    def _require_annotations(self) -> AnnotationSearchExecutor:
        if self._annotations is None:
            raise QueryError("No annotation executor configured")
        return self._annotations

    async def all_datasets(self, criteria: DatasetQueryCriteria) -> list[DatasetRecord]:
        query = self.translate_dataset_query(criteria)
        return await self._require_datasets().search_or_empty(query)

    async def count_datasets(self, criteria: DatasetQueryCriteria) -> int:
        query = self.translate_dataset_count(criteria)
        return await self._require_datasets().count_or_zero(query)

    async def dataset(self, dataset_id: str) -> DatasetRecord | None:
        return await self._require_datasets().get_or_none(dataset_id)

    async def dataset_by_name(self, name: str) -> DatasetRecord | None:
        return await self._require_datasets().get_by_name_or_none(name)

    async def metadata_suggestions(
        self, path: str | Sequence[str], text: str
    ) -> list[str]:
        stmt = self._dataset_translator.translate_suggestions(path, text)
        return await self._require_datasets().suggest(stmt)

    async def all_annotations(
        self, criteria: AnnotationQueryCriteria
    ) -> list[dict[str, Any]]:
        query = self.translate_annotation_query(criteria)
        return await self._require_annotations().search_or_empty(query)

    async def count_annotations(self, criteria: AnnotationQueryCriteria) -> int:
        query = self.translate_annotation_count(criteria)
        return await self._require_annotations().count_or_zero(query)

    async def annotation(self, annotation_id: str) -> dict[str, Any] | None:
        return await self._require_annotations().get_or_none(annotation_id)

    async def dataset_annotations(
        self, dataset_id: str, criteria: AnnotationQueryCriteria
    ) -> tuple[DatasetRecord | None, list[dict[str, Any]]]:
        """
        Dataset record and its annotations, fetched concurrently.

        ``criteria.dataset_id`` is overridden with *dataset_id*.
        """
        scoped = replace(criteria, dataset_id=dataset_id)
        record, hits = await asyncio.gather(
            self.dataset(dataset_id), self.all_annotations(scoped)
        )
        return record, hits

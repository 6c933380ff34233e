"""
Run annotation queries against the search index.

``search``/``count``/``get`` raise :class:`QueryExecutionError` when the
request fails; ``search_or_empty``/``count_or_zero``/``get_or_none``
collapse failures into an empty result for the API boundary.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from ..exceptions import QueryExecutionError
from .serializer import SearchDialect

if TYPE_CHECKING:
    from .query import SearchQuery

logger = logging.getLogger("sm_query.search.executor")

BACKEND = "search"


def _status_of(exc: Exception) -> int | None:
    status = getattr(exc, "status_code", None)
    if status is None:
        status = getattr(getattr(exc, "meta", None), "status", None)
    return status if isinstance(status, int) else None


class AnnotationSearchExecutor:
    """
    Executes :class:`SearchQuery` objects with an async search client.

    The client only needs ``search``, ``count`` and ``get`` coroutines with
    the keyword signature of ``elasticsearch.AsyncElasticsearch``. Pass
    ``SearchDialect.LEGACY`` only with a client that talks to a 2.x cluster.
    """

    def __init__(
        self,
        client: Any,
        index: str,
        *,
        dialect: SearchDialect = SearchDialect.MODERN,
    ) -> None:
        self._client = client
        self._index = index
        self._dialect = dialect

    async def search(self, query: SearchQuery) -> list[dict[str, Any]]:
        """Matching hits (raw ``_source`` documents with ``_id``)."""
        logger.debug("Search body: %s", query.to_json(self._dialect))
        kwargs: dict[str, Any] = {
            "index": self._index,
            "body": query.body(self._dialect),
        }
        if query.offset is not None:
            kwargs["from_"] = query.offset
        if query.limit is not None:
            kwargs["size"] = query.limit
        start = time.monotonic()
        try:
            resp = await self._client.search(**kwargs)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Annotation search failed")
            raise QueryExecutionError(BACKEND, str(exc)) from exc
        logger.debug("Search took %.2f ms", (time.monotonic() - start) * 1000)
        return list(resp["hits"]["hits"])

    async def count(self, query: SearchQuery) -> int:
        try:
            resp = await self._client.count(
                index=self._index, body=query.count_body(self._dialect)
            )
        except Exception as exc:  # noqa: BLE001
            logger.exception("Annotation count failed")
            raise QueryExecutionError(BACKEND, str(exc)) from exc
        return int(resp["count"])

    async def get(self, annotation_id: str) -> dict[str, Any] | None:
        """Single annotation by id; ``None`` when the index has no such document."""
        try:
            resp = await self._client.get(index=self._index, id=annotation_id)
        except Exception as exc:  # noqa: BLE001
            if _status_of(exc) == 404:
                return None
            logger.exception("Annotation lookup failed for %s", annotation_id)
            raise QueryExecutionError(BACKEND, str(exc)) from exc
        return dict(resp)

    # -- boundary helpers ----------------------------------------------------

    async def search_or_empty(self, query: SearchQuery) -> list[dict[str, Any]]:
        try:
            return await self.search(query)
        except QueryExecutionError as exc:
            logger.warning("Returning empty annotation list: %s", exc)
            return []

    async def count_or_zero(self, query: SearchQuery) -> int:
        try:
            return await self.count(query)
        except QueryExecutionError as exc:
            logger.warning("Returning zero annotation count: %s", exc)
            return 0

    async def get_or_none(self, annotation_id: str) -> dict[str, Any] | None:
        try:
            return await self.get(annotation_id)
        except QueryExecutionError as exc:
            logger.warning("Returning no annotation for id %s: %s", annotation_id, exc)
            return None

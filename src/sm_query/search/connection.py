"""SearchConnectionManager — async search client lifecycle."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..exceptions import QueryExecutionError

if TYPE_CHECKING:
    from elasticsearch import AsyncElasticsearch

BACKEND = "search"


def _with_scheme(host: str) -> str:
    if "://" in host:
        return host
    return f"http://{host}"


class SearchConnectionManager:
    """Wrap the async Elasticsearch client with lazy creation and shutdown."""

    def __init__(
        self,
        hosts: tuple[str, ...] | list[str] = ("localhost:9200",),
        *,
        request_timeout: float = 10.0,
        **kwargs: Any,
    ) -> None:
        self._hosts = [_with_scheme(h) for h in hosts]
        self._request_timeout = request_timeout
        self._kwargs = kwargs
        self._client: AsyncElasticsearch | None = None

    def connect(self) -> AsyncElasticsearch:
        """Create and cache the client. Idempotent."""
        if self._client is not None:
            return self._client
        try:
            from elasticsearch import AsyncElasticsearch
        except ImportError as e:
            raise QueryExecutionError(
                BACKEND, "elasticsearch is required; install sm-query[search]"
            ) from e
        self._client = AsyncElasticsearch(
            self._hosts, request_timeout=self._request_timeout, **self._kwargs
        )
        return self._client

    @property
    def client(self) -> AsyncElasticsearch:
        """Return the client; raises if not connected."""
        if self._client is None:
            raise QueryExecutionError(BACKEND, "Not connected; call connect() first")
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None

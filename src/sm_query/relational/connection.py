from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

if TYPE_CHECKING:
    from ..config import QuerySettings


def create_dataset_engine(settings: QuerySettings) -> AsyncEngine:
    """Async engine for the dataset store with the configured pool."""
    return create_async_engine(
        settings.database_url,
        pool_size=settings.pool_size,
        pool_recycle=settings.pool_idle_timeout_s,
        pool_pre_ping=True,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import JSON, TypeDecorator


class JSONType(TypeDecorator[dict[str, Any]]):
    """
    JSON document column: JSONB on PostgreSQL, plain JSON elsewhere.

    Path indexing (``column[("a", "b")].as_string()``) comes from the ``JSON``
    comparator and compiles to ``#>>`` on PostgreSQL and ``JSON_EXTRACT`` on
    SQLite.
    """

    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect: Any) -> Any:
        if dialect.name == "postgresql":
            return dialect.type_descriptor(JSONB())
        return dialect.type_descriptor(JSON())


class Base(DeclarativeBase):
    pass


class DatasetRecord(Base):
    """
    Row of the ``dataset`` table.

    ``metadata`` clashes with ``DeclarativeBase.metadata``, so the column is
    mapped as ``metadata_``.
    """

    __tablename__ = "dataset"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str | None] = mapped_column(String, index=True)
    input_path: Mapped[str | None] = mapped_column(String)
    metadata_: Mapped[dict[str, Any] | None] = mapped_column("metadata", JSONType)
    config: Mapped[dict[str, Any] | None] = mapped_column(JSONType)
    upload_dt: Mapped[datetime | None] = mapped_column(DateTime)
    status: Mapped[str | None] = mapped_column(String)

    def __repr__(self) -> str:
        return f"DatasetRecord(id={self.id!r}, name={self.name!r})"

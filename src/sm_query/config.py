"""QuerySettings — connection and index settings for both backends."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.engine import URL

from .search.serializer import SearchDialect


class QuerySettings(BaseModel):
    """Immutable settings.

    ``from_engine_config`` reads the engine's ``config.json`` layout::

        {"db": {"host": ..., "database": ..., "user": ..., "password": ...},
         "elasticsearch": {"host": ..., "index": ...}}
    """

    model_config = ConfigDict(frozen=True)

    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "sm"
    db_user: str = "sm"
    db_password: str = Field(default="", repr=False)
    db_driver: str = "postgresql+asyncpg"
    pool_size: int = Field(default=10, ge=1)
    pool_idle_timeout_s: int = Field(default=30, ge=1)

    search_hosts: tuple[str, ...] = ("localhost:9200",)
    search_index: str = "sm"
    search_dialect: SearchDialect = SearchDialect.MODERN

    @property
    def database_url(self) -> URL:
        return URL.create(
            self.db_driver,
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )

    @classmethod
    def from_engine_config(cls, config: dict[str, Any]) -> QuerySettings:
        db = config.get("db", {})
        es = config.get("elasticsearch", {})
        values: dict[str, Any] = {
            "db_host": db.get("host"),
            "db_port": db.get("port"),
            "db_name": db.get("database"),
            "db_user": db.get("user"),
            "db_password": db.get("password"),
            "search_index": es.get("index"),
            "search_dialect": es.get("dialect"),
        }
        if es.get("host"):
            values["search_hosts"] = (es["host"],)
        return cls(**{k: v for k, v in values.items() if v is not None})

    @classmethod
    def from_json_file(cls, path: str | Path) -> QuerySettings:
        return cls.from_engine_config(json.loads(Path(path).read_text()))

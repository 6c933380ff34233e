"""Dataset store backend: table mapping and relational query objects."""

from .models import Base, DatasetRecord, JSONType
from .query import RelationalQuery, RenderedSQL, render_sql

__all__ = [
    "Base",
    "DatasetRecord",
    "JSONType",
    "RelationalQuery",
    "RenderedSQL",
    "render_sql",
]

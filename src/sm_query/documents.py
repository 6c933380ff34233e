"""
Metadata-document accessor.

Dataset metadata is a free-form JSON document; any level of a filter path
may be missing on a given record. Resolution never raises: an unresolvable
path yields ``None``, which the filters treat as "no constraint".
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .registry import FilterRegistry


def resolve_path(document: Any, path: Sequence[str]) -> Any | None:
    """
    Walk *path* through nested mappings of *document*.

    Returns ``None`` when any step is missing or is not a mapping. A JSON
    ``null`` stored at the path is indistinguishable from absence, matching
    what ``#>>`` extraction yields in PostgreSQL.
    """
    current = document
    for part in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


def record_metadata(record: Any) -> Any | None:
    """Return the metadata document of a dataset row, ORM record or dict."""
    if isinstance(record, Mapping):
        return record.get("metadata")
    return getattr(record, "metadata_", None)


def dataset_field(
    record: Any, filter_name: str, registry: FilterRegistry
) -> Any | None:
    """Value of a registered filter's field on a dataset record, or ``None``."""
    definition = registry.get(filter_name)
    if definition is None:
        return None
    return resolve_path(record_metadata(record), definition.path)

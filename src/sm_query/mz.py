"""
Canonical string encoding of m/z values.

The search index stores m/z as a zero-padded, fixed-width decimal string so
that lexicographic ordering matches numeric ordering. Indexing code and
query construction must both go through :func:`format_mz`; a mismatch in
width or precision silently corrupts range filtering and sorting.
"""

from __future__ import annotations

import math
from typing import Any

from .exceptions import InvalidCriteria

MZ_FIELD_WIDTH = 10
MZ_PRECISION = 4

_MZ_FORMAT = f"{{:0{MZ_FIELD_WIDTH}.{MZ_PRECISION}f}}"


def format_mz(mz: Any, *, path: str = "mz") -> str:
    """
    Render *mz* as its canonical index string, e.g. ``123.4`` -> ``"00123.4000"``.

    Raises:
        InvalidCriteria: If *mz* is not a finite non-negative number or does
            not fit into ``MZ_FIELD_WIDTH`` characters.
    """
    if isinstance(mz, bool) or not isinstance(mz, int | float):
        raise InvalidCriteria(
            f"m/z must be a number, got {type(mz).__name__}", path=path
        )
    if not math.isfinite(mz) or mz < 0:
        raise InvalidCriteria(f"m/z must be finite and non-negative: {mz}", path=path)

    text = _MZ_FORMAT.format(mz)
    if len(text) > MZ_FIELD_WIDTH:
        raise InvalidCriteria(
            f"m/z {mz} does not fit the {MZ_FIELD_WIDTH}-character index encoding",
            path=path,
        )
    return text


def parse_mz(text: str) -> float:
    """Inverse of :func:`format_mz` for values read back from the index."""
    return float(text)

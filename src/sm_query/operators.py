from enum import Enum


class MatchKind(str, Enum):
    """How a dataset filter compares its value."""

    EXACT = "exact"
    SUBSTRING = "substring"
    # Same relational rendering as SUBSTRING; tokenized match on the search side
    PHRASE = "phrase"


class SortField(str, Enum):
    """Abstract sort keys understood by the sort resolver."""

    ID = "id"
    NAME = "name"
    MZ = "mz"
    SCORE = "score"
    FDR_THEN_SCORE = "fdr_then_score"


class SortDirection(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"

    def reversed(self) -> "SortDirection":
        if self is SortDirection.ASCENDING:
            return SortDirection.DESCENDING
        return SortDirection.ASCENDING

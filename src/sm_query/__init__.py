"""
Filter and query translation for the metabolite annotation platform.

Typed criteria (:class:`AnnotationQueryCriteria`, :class:`DatasetQueryCriteria`)
are translated into relational statements over the dataset table and into
search-index request bodies over annotation documents. Dataset metadata
filters are declared once in a :class:`FilterRegistry` and rendered for both
backends.
"""

from .config import QuerySettings
from .criteria import (
    DEFAULT_LIMIT,
    AnnotationQueryCriteria,
    DatasetQueryCriteria,
    SortSpec,
    ValueRange,
)
from .exceptions import (
    FilterRegistrationError,
    InvalidCriteria,
    PaginationError,
    QueryError,
    QueryExecutionError,
)
from .filters import FilterDefinition
from .mz import MZ_FIELD_WIDTH, MZ_PRECISION, format_mz, parse_mz
from .operators import MatchKind, SortDirection, SortField
from .pagination import Paginator
from .registry import DEFAULT_FILTERS, FilterRegistry, build_default_registry
from .relational.query import RelationalQuery, RenderedSQL, render_sql
from .relational.translator import DatasetQueryTranslator
from .search.query import SearchQuery
from .search.serializer import SearchDialect
from .search.translator import FDR_EPSILON, AnnotationQueryTranslator
from .service import QueryService
from .sorting import SortResolver

__all__ = [
    # Vocabulary
    "MatchKind",
    "SortField",
    "SortDirection",
    # Criteria
    "AnnotationQueryCriteria",
    "DatasetQueryCriteria",
    "SortSpec",
    "ValueRange",
    "DEFAULT_LIMIT",
    # Filter registry
    "FilterDefinition",
    "FilterRegistry",
    "DEFAULT_FILTERS",
    "build_default_registry",
    # Translation
    "AnnotationQueryTranslator",
    "DatasetQueryTranslator",
    "SortResolver",
    "Paginator",
    "SearchQuery",
    "SearchDialect",
    "RelationalQuery",
    "RenderedSQL",
    "render_sql",
    "FDR_EPSILON",
    # m/z encoding
    "format_mz",
    "parse_mz",
    "MZ_FIELD_WIDTH",
    "MZ_PRECISION",
    # Facade
    "QueryService",
    "QuerySettings",
    # Exceptions
    "QueryError",
    "InvalidCriteria",
    "FilterRegistrationError",
    "PaginationError",
    "QueryExecutionError",
]

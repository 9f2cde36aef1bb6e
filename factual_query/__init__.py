"""
Client-side query construction for a remote tabular-data search API.

Build a Query from filters, a geo bound, full-text search and paging, then
render it with Query.to_url_query().
"""

from .exceptions import (
    FactualQueryError,
    QueryEncodingError,
    EmptyRowFiltersError,
    FilterValidationError,
    TransportError,
    ConfigError,
)
from .filters import (
    Operator,
    LogicalOperator,
    FieldFilter,
    FilterGroup,
    Filter,
    FilterBuilder,
    filter_from_dict,
    parse_filters_json,
)
from .geo import Circle, parse_geo_json
from .query import Query, QueryBuilder, parse_url_query
from .validation import lint_filter
from .config import Settings, load_settings
from .transport import HttpTransport

__version__ = "1.0.0"

__all__ = [
    "FactualQueryError",
    "QueryEncodingError",
    "EmptyRowFiltersError",
    "FilterValidationError",
    "TransportError",
    "ConfigError",
    "Operator",
    "LogicalOperator",
    "FieldFilter",
    "FilterGroup",
    "Filter",
    "FilterBuilder",
    "filter_from_dict",
    "parse_filters_json",
    "Circle",
    "parse_geo_json",
    "Query",
    "QueryBuilder",
    "parse_url_query",
    "lint_filter",
    "Settings",
    "load_settings",
    "HttpTransport",
]

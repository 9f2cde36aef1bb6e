"""
Filter system for factual_query.

Row filters are either a single field predicate or an $and/$or group of
filters; both render to the server's JSON filter grammar.
"""

from .models import (
    Operator,
    LogicalOperator,
    MULTI_VALUE_OPERATORS,
    FieldFilter,
    FilterGroup,
    Filter,
    filter_from_dict,
)
from .builder import FilterBuilder
from .parsing import parse_filters_json

__all__ = [
    "Operator",
    "LogicalOperator",
    "MULTI_VALUE_OPERATORS",
    "FieldFilter",
    "FilterGroup",
    "Filter",
    "FilterBuilder",
    "filter_from_dict",
    "parse_filters_json",
]

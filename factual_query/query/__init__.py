"""
Query building module for factual_query.

This module renders a Query (search term, paging, row count, geo bound and
row filters) into the URL query string the server expects.
"""

from .builder import Query, QueryBuilder
from .parsing import parse_url_query

__all__ = [
    "Query",
    "QueryBuilder",
    "parse_url_query",
]

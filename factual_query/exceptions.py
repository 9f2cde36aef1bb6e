"""
Exceptions raised by the factual_query package.
"""

from __future__ import annotations
from typing import List, Optional


class FactualQueryError(Exception):
    """Base class for every error raised by this package."""


class QueryEncodingError(FactualQueryError):
    """A query value could not be encoded for the URL."""


class EmptyRowFiltersError(FactualQueryError, IndexError):
    """
    Raised when a query is asked to give up its newest row filter but has none.
    """

    def __init__(self, message: str, query_index: Optional[int] = None):
        super().__init__(message)
        self.query_index = query_index


class FilterValidationError(FactualQueryError, ValueError):
    """
    Raised when a filters/geo payload does not match the wire grammar.
    """

    def __init__(self, message: str, problems: Optional[List[str]] = None):
        super().__init__(message)
        self.problems = list(problems or [message])


class TransportError(FactualQueryError):
    """
    The HTTP request failed, either on the network or with an error status.
    """

    def __init__(self, message: str, *, url: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ConfigError(FactualQueryError, RuntimeError):
    """Settings could not be loaded or are invalid."""


__all__ = [
    "FactualQueryError",
    "QueryEncodingError",
    "EmptyRowFiltersError",
    "FilterValidationError",
    "TransportError",
    "ConfigError",
]

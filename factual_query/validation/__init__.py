"""
Validation for the factual_query package.

JSON Schema checks for decoded `filters`/`geo` payloads, plus an opt-in lint
over filter trees built in code.
"""

from .schemas import (
    FILTERS_SCHEMA,
    GEO_SCHEMA,
    validate_filters_payload,
    validate_geo_payload,
)
from .rules import lint_filter

__all__ = [
    "FILTERS_SCHEMA",
    "GEO_SCHEMA",
    "validate_filters_payload",
    "validate_geo_payload",
    "lint_filter",
]

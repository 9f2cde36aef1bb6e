from __future__ import annotations
from typing import Any, Dict, List

from jsonschema import Draft202012Validator

from ..exceptions import FilterValidationError

# ---------------------------------------------------------------------------
# JSON Schemas for the two JSON-valued query parameters
# ---------------------------------------------------------------------------

FILTERS_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$id": "https://example.com/filters.schema.json",
    "title": "Row Filters",
    "$defs": {
        "Filter": {
            "oneOf": [
                {"$ref": "#/$defs/Group"},
                {"$ref": "#/$defs/FieldFilter"},
            ],
        },
        "Group": {
            "type": "object",
            "minProperties": 1,
            "maxProperties": 1,
            "patternProperties": {
                "^\\$(and|or)$": {
                    "type": "array",
                    "items": {"$ref": "#/$defs/Filter"},
                },
            },
            "additionalProperties": False,
        },
        "FieldFilter": {
            "type": "object",
            "minProperties": 1,
            "maxProperties": 1,
            "propertyNames": {"minLength": 1, "not": {"enum": ["$and", "$or"]}},
            "additionalProperties": {
                "type": "object",
                "minProperties": 1,
                "maxProperties": 1,
                "propertyNames": {"pattern": "^\\$[a-z]+$"},
            },
        },
    },
    "$ref": "#/$defs/Filter",
}

GEO_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$id": "https://example.com/geo.schema.json",
    "title": "Geo Bounds",
    "type": "object",
    "additionalProperties": False,
    "required": ["$circle"],
    "properties": {
        "$circle": {
            "type": "object",
            "additionalProperties": False,
            "required": ["center", "meters"],
            "properties": {
                "center": {
                    "type": "array",
                    "minItems": 2,
                    "maxItems": 2,
                    "prefixItems": [
                        {"type": "number", "minimum": -90, "maximum": 90},
                        {"type": "number", "minimum": -180, "maximum": 180},
                    ],
                },
                "meters": {"type": "number", "exclusiveMinimum": 0},
            },
        },
    },
}

_FILTERS_VALIDATOR = Draft202012Validator(FILTERS_SCHEMA)
_GEO_VALIDATOR = Draft202012Validator(GEO_SCHEMA)


def _where(err) -> str:
    return "/".join(str(p) for p in err.absolute_path) or "<root>"


def _validate(instance: Any, validator: Draft202012Validator, what: str) -> None:
    problems: List[str] = [
        f"{_where(err)}: {err.message}"
        for err in sorted(validator.iter_errors(instance), key=_where)
    ]
    if problems:
        raise FilterValidationError(f"Invalid {what} payload: {problems[0]}", problems)


def validate_filters_payload(instance: Any) -> None:
    """
    Check decoded `filters` JSON against the filter grammar.
    """
    _validate(instance, _FILTERS_VALIDATOR, "filters")


def validate_geo_payload(instance: Any) -> None:
    """
    Check decoded `geo` JSON against the $circle grammar.
    """
    _validate(instance, _GEO_VALIDATOR, "geo")


__all__ = [
    "FILTERS_SCHEMA",
    "GEO_SCHEMA",
    "validate_filters_payload",
    "validate_geo_payload",
]

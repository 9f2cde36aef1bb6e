from __future__ import annotations
from typing import Any, Dict, Union
import json

from ..exceptions import FilterValidationError
from ..validation.schemas import validate_filters_payload
from .models import Filter, filter_from_dict


def parse_filters_json(
    payload: Union[str, Dict[str, Any]],
    *,
    validate: bool = True,
) -> Filter:
    """
    Accept the decoded `filters` value (JSON string or dict) and return the Filter it describes.
    """
    if isinstance(payload, str):
        try:
            data = json.loads(payload)
        except ValueError as e:
            raise FilterValidationError(f"filters is not valid JSON: {e}") from e
    else:
        data = payload
    if validate:
        validate_filters_payload(data)
    return filter_from_dict(data)


__all__ = ["parse_filters_json"]

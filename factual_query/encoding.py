from __future__ import annotations
from typing import Any, Iterable, Optional
from urllib.parse import quote_plus
import json

from .exceptions import QueryEncodingError


def json_str(data: Any) -> str:
    """
    Compact JSON text, as the server expects it ({"a":{"$eq":1}}).
    Non-ASCII characters are left raw; URL encoding takes care of them.
    NaN and infinities have no JSON spelling and raise QueryEncodingError.
    """
    try:
        return json.dumps(data, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except ValueError as e:
        raise QueryEncodingError(f"Cannot render value as JSON: {e}") from e


def _wire_text(val: Any) -> str:
    if isinstance(val, bool):
        return "true" if val else "false"
    return str(val)


def url_pair(name: str, val: Any) -> Optional[str]:
    """
    Render name=value, or None when there is no value.
    Only strings are percent-encoded; other values go out as their wire text.
    """
    if val is None:
        return None
    if not isinstance(val, str):
        return f"{name}={_wire_text(val)}"
    try:
        return f"{name}={quote_plus(val, safe='', encoding='utf-8', errors='strict')}"
    except UnicodeEncodeError as e:
        raise QueryEncodingError(f"Cannot encode value for '{name}' as UTF-8") from e


def join_pairs(pairs: Iterable[Optional[str]]) -> str:
    """Join the present pairs with '&', skipping Nones."""
    return "&".join(p for p in pairs if p is not None)


__all__ = ["json_str", "url_pair", "join_pairs"]

from __future__ import annotations
from urllib.parse import parse_qsl
import logging

from ..exceptions import FilterValidationError
from ..filters.models import FilterGroup, LogicalOperator
from ..filters.parsing import parse_filters_json
from ..geo.circle import parse_geo_json
from .builder import Query

log = logging.getLogger("factual_query.query")


def _int_param(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError as e:
        raise FilterValidationError(f"{name} must be an integer, got: {raw!r}") from e


def parse_url_query(query_string: str, *, validate: bool = True) -> Query:
    """
    Read a query string produced by Query.to_url_query() back into a Query.

    A top-level $and group with two or more children is split back into
    separate row filters, since that is how several row filters render.
    Unknown parameters are ignored.
    """
    q = Query()
    try:
        pairs = parse_qsl(query_string.lstrip("?"), keep_blank_values=True, encoding="utf-8", errors="strict")
    except UnicodeDecodeError as e:
        raise FilterValidationError(f"Query string is not valid UTF-8 once decoded: {e}") from e
    for name, raw in pairs:
        if name == "q":
            q.full_text_search(raw)
        elif name == "limit":
            q.limit(_int_param(name, raw))
        elif name == "offset":
            q.offset(_int_param(name, raw))
        elif name == "include_count":
            q.include_row_count(raw.lower() == "true")
        elif name == "filters":
            f = parse_filters_json(raw, validate=validate)
            if isinstance(f, FilterGroup) and f.operator == LogicalOperator.AND and len(f.children) > 1:
                for child in f.children:
                    q.add(child)
            else:
                q.add(f)
        elif name == "geo":
            q.within(parse_geo_json(raw, validate=validate))
        else:
            log.debug("Ignoring unknown query parameter %r", name)
    return q


__all__ = ["parse_url_query"]

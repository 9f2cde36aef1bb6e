from __future__ import annotations
from collections import Counter
from typing import List, Optional, Sequence, Tuple, Union
import logging

from ..encoding import join_pairs, url_pair
from ..exceptions import EmptyRowFiltersError, FilterValidationError
from ..filters.builder import FilterBuilder
from ..filters.models import FieldFilter, Filter, FilterGroup, LogicalOperator, token
from ..geo.circle import Circle
from ..validation.rules import lint_filter
from ..validation.schemas import validate_geo_payload

log = logging.getLogger("factual_query.query")


def _pop_last(filters: List[Filter]) -> Filter:
    if not filters:
        raise EmptyRowFiltersError("Cannot pop a filter from a query with no row filters")
    return filters.pop()


def _positive(n: Optional[int]) -> bool:
    return n is not None and n > 0


class Query:
    """
    Represents a top level query. Knows how to render itself as URL encoded
    key/value pairs, ready for the query string of a GET request
    (see to_url_query()).

    Every setter returns the Query, so configuration can be chained:

        Query().full_text_search("coffee").limit(10).field("region").in_("MA", "VT")

    Row filters are kept in insertion order and are implicitly AND'ed together.
    """

    def __init__(self):
        self._full_text_search: Optional[str] = None
        self._limit: Optional[int] = None
        self._offset: Optional[int] = None
        self._include_row_count = False
        self._circle: Optional[Circle] = None
        self._row_filters: List[Filter] = []

    # -- read-only views ---------------------------------------------------

    @property
    def row_filters(self) -> Tuple[Filter, ...]:
        return tuple(self._row_filters)

    @property
    def geo(self) -> Optional[Circle]:
        return self._circle

    # -- paging & search -----------------------------------------------------

    def full_text_search(self, text: str) -> "Query":
        """
        Sets a full text search term. The server matches it against various
        attributes of the underlying table (name, address, etc).
        """
        self._full_text_search = text
        return self

    def limit(self, limit: int) -> "Query":
        """Maximum number of records to return. Values <= 0 mean no limit is sent."""
        self._limit = limit
        return self

    def offset(self, offset: int) -> "Query":
        """Number of records to skip (the page offset). Values <= 0 mean no offset is sent."""
        self._offset = offset
        return self

    def include_row_count(self, include: bool = True) -> "Query":
        """
        When true, the response includes the total number of rows matching the
        filters. This makes the request slower; the server default is not to count.
        """
        self._include_row_count = bool(include)
        return self

    def within(self, circle: Circle) -> "Query":
        """Bound results to the circle. Replaces any earlier bound."""
        self._circle = circle
        return self

    # -- filters -------------------------------------------------------------

    def criteria(self, field_name: str) -> FilterBuilder:
        """
        Begins a filter on field_name without attaching it; pass the result to
        and_()/or_()/add().
        """
        return FilterBuilder(field_name)

    def field(self, field_name: str) -> "QueryBuilder":
        """Begins a filter on field_name that is added to this Query when completed."""
        return QueryBuilder(self, field_name)

    def add(self, f: Filter) -> "Query":
        self._row_filters.append(f)
        return self

    def and_(self, *items: Union[Filter, "Query"]) -> "Query":
        """
        and_(filter, ...) adds the filters as one $and group.
        and_(query, ...) pops the newest row filter off each query and adds
        the popped filters as one $and group.
        """
        return self._combine(LogicalOperator.AND, items)

    def or_(self, *items: Union[Filter, "Query"]) -> "Query":
        """Same as and_(), grouping under $or."""
        return self._combine(LogicalOperator.OR, items)

    def _combine(self, op: LogicalOperator, items: Sequence[Union[Filter, "Query"]]) -> "Query":
        if items and all(isinstance(i, Query) for i in items):
            return self._pop_filters(op, items)
        if all(isinstance(i, (FieldFilter, FilterGroup)) for i in items):
            return self.add(FilterGroup(list(items), op))
        kinds = ", ".join(type(i).__name__ for i in items)
        raise TypeError(f"{token(op)} takes either filters or queries, not: {kinds}")

    def _pop_filters(self, op: LogicalOperator, queries: Sequence["Query"]) -> "Query":
        """
        Pops the newest filter from each query, groups the popped filters
        under op, and adds the group as the newest filter of this Query.
        Nothing is popped unless every query has a filter to give.
        """
        wanted = Counter(id(q) for q in queries)
        for i, q in enumerate(queries):
            if len(q._row_filters) < wanted[id(q)]:
                log.warning("Query #%d has no row filter left to combine under %s", i, token(op))
                raise EmptyRowFiltersError(
                    f"Query #{i} has no row filter to combine under {token(op)}",
                    query_index=i,
                )

        group = FilterGroup(operator=op)
        for q in queries:
            group.add(_pop_last(q._row_filters))
        return self.add(group)

    # -- rendering -----------------------------------------------------------

    def _row_filters_json_or_none(self) -> Optional[str]:
        if not self._row_filters:
            return None
        if len(self._row_filters) == 1:
            return self._row_filters[0].to_json_str()
        return FilterGroup(self._row_filters).to_json_str()

    def _geo_json_or_none(self) -> Optional[str]:
        return self._circle.to_json_str() if self._circle is not None else None

    def to_url_query(self) -> str:
        """
        Builds the query string for this Query, with proper URL encoding.

        Example output:

            filters=%7B%22%24and%22%3A%5B%7B%22region%22%3A%7B%22%24in%22%3A%22MA%2CVT%2CNH%22%7D%7D%2C%7B%22%24or%22%3A%5B%7B%22first_name%22%3A%7B%22%24eq%22%3A%22Chun%22%7D%7D%2C%7B%22last_name%22%3A%7B%22%24eq%22%3A%22Kok%22%7D%7D%5D%7D%5D%7D

        which the server reads as:

            filters={"$and":[{"region":{"$in":"MA,VT,NH"}},{"$or":[{"first_name":{"$eq":"Chun"}},{"last_name":{"$eq":"Kok"}}]}]}
        """
        qs = join_pairs([
            url_pair("q", self._full_text_search),
            url_pair("limit", self._limit) if _positive(self._limit) else None,
            url_pair("offset", self._offset) if _positive(self._offset) else None,
            url_pair("include_count", True) if self._include_row_count else None,
            url_pair("filters", self._row_filters_json_or_none()),
            url_pair("geo", self._geo_json_or_none()),
        ])
        log.debug("Rendered query string: %s", qs)
        return qs

    def validate(self) -> "Query":
        """
        Opt-in check of the row filters and geo bound against what the server
        accepts. Raises FilterValidationError listing every problem found.
        """
        problems: List[str] = []
        for i, f in enumerate(self._row_filters):
            problems.extend(lint_filter(f, f"row_filters[{i}]"))
        if self._circle is not None:
            try:
                validate_geo_payload(self._circle.to_dict())
            except FilterValidationError as e:
                problems.extend(f"geo: {p}" for p in e.problems)
        if problems:
            raise FilterValidationError(
                f"{len(problems)} problem(s) in query: " + "; ".join(problems), problems
            )
        return self


class QueryBuilder(FilterBuilder):
    """
    FilterBuilder bound to a Query: completing the filter adds it to the
    Query and returns the Query, so the chain can continue.
    """

    def __init__(self, query: Query, field_name: str):
        super().__init__(field_name)
        self.query = query

    def _finish(self, f: Filter) -> Query:
        return self.query.add(f)


__all__ = ["Query", "QueryBuilder"]

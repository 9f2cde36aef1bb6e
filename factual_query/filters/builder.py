from __future__ import annotations
from typing import Any, List

from .models import FieldFilter, Filter, FilterGroup, Operator


def _values(values: tuple) -> List[Any]:
    # in_("MA", "VT") and in_(["MA", "VT"]) mean the same thing
    if len(values) == 1 and isinstance(values[0], (set, frozenset)):
        raise TypeError("Multi-value filters need an ordered list or tuple, not a set")
    if len(values) == 1 and isinstance(values[0], (list, tuple)):
        return list(values[0])
    return list(values)


class FilterBuilder:
    """
    Partial row filter. Holds the field name until one of the operator
    methods supplies the comparison, then hands back the finished Filter.
    """

    def __init__(self, field_name: str):
        self.field_name = field_name

    def _finish(self, f: Filter) -> Any:
        return f

    def _make(self, op: Operator, value: Any) -> Any:
        return self._finish(FieldFilter(self.field_name, op, value))

    def equal(self, value: Any):
        return self._make(Operator.EQ, value)

    def not_equal(self, value: Any):
        return self._make(Operator.NEQ, value)

    def in_(self, *values: Any):
        return self._make(Operator.IN, _values(values))

    def not_in(self, *values: Any):
        return self._make(Operator.NIN, _values(values))

    def begins_with(self, prefix: str):
        return self._make(Operator.BW, prefix)

    def not_begins_with(self, prefix: str):
        return self._make(Operator.NBW, prefix)

    def begins_with_any(self, *prefixes: str):
        return self._make(Operator.BWIN, _values(prefixes))

    def not_begins_with_any(self, *prefixes: str):
        return self._make(Operator.NBWIN, _values(prefixes))

    def greater_than(self, value: Any):
        return self._make(Operator.GT, value)

    def greater_than_or_equal(self, value: Any):
        return self._make(Operator.GTE, value)

    def less_than(self, value: Any):
        return self._make(Operator.LT, value)

    def less_than_or_equal(self, value: Any):
        return self._make(Operator.LTE, value)

    def between(self, low: Any, high: Any):
        """
        Inclusive range on the field, as {"$and":[{f:{"$gte":low}},{f:{"$lte":high}}]}.
        """
        return self._finish(
            FilterGroup.of(
                FieldFilter(self.field_name, Operator.GTE, low),
                FieldFilter(self.field_name, Operator.LTE, high),
            )
        )

    def blank(self):
        return self._make(Operator.BLANK, True)

    def not_blank(self):
        return self._make(Operator.BLANK, False)

    def search(self, text: str):
        return self._make(Operator.SEARCH, text)

    # short spellings
    eq = equal
    neq = not_equal
    gt = greater_than
    gte = greater_than_or_equal
    lt = less_than
    lte = less_than_or_equal


__all__ = ["FilterBuilder"]

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Union

from ..encoding import json_str
from ..exceptions import FilterValidationError

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Operator(str, Enum):
    EQ = "$eq"
    NEQ = "$neq"
    IN = "$in"
    NIN = "$nin"
    GT = "$gt"
    GTE = "$gte"
    LT = "$lt"
    LTE = "$lte"
    BW = "$bw"
    NBW = "$nbw"
    BWIN = "$bwin"
    NBWIN = "$nbwin"
    BLANK = "$blank"
    SEARCH = "$search"

    @classmethod
    def coerce(cls, value: Union["Operator", str]) -> Union["Operator", str]:
        """
        Map a wire token onto the enum. Tokens the enum does not know are kept
        as plain strings; the server is the judge of those.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return value


class LogicalOperator(str, Enum):
    AND = "$and"
    OR = "$or"

    @classmethod
    def coerce(cls, value: Union["LogicalOperator", str]) -> Union["LogicalOperator", str]:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return value


# Operators whose value goes out as one comma-joined string ("MA,VT,NH")
MULTI_VALUE_OPERATORS = frozenset({Operator.IN, Operator.NIN, Operator.BWIN, Operator.NBWIN})

_LOGICAL_TOKENS = frozenset(op.value for op in LogicalOperator)


def token(op: Union[Operator, LogicalOperator, str]) -> str:
    """Wire token for an operator, whether enum member or raw string."""
    return op.value if isinstance(op, Enum) else str(op)


# ---------------------------------------------------------------------------
# Core filter models
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldFilter:
    """
    A single predicate on one field: {"<field>": {"<$op>": <value>}}.
    """
    field_name: str
    operator: Union[Operator, str] = Operator.EQ
    value: Any = None

    def __post_init__(self):
        object.__setattr__(self, "operator", Operator.coerce(self.operator))

    def wire_value(self) -> Any:
        if self.operator in MULTI_VALUE_OPERATORS and isinstance(self.value, (list, tuple)):
            return ",".join(v if isinstance(v, str) else json_str(v) for v in self.value)
        if isinstance(self.value, tuple):
            return list(self.value)
        return self.value

    def to_dict(self) -> Dict[str, Any]:
        return {self.field_name: {token(self.operator): self.wire_value()}}

    def to_json_str(self) -> str:
        return json_str(self.to_dict())


@dataclass
class FilterGroup:
    """
    Ordered children combined under $and / $or. A group is itself a filter,
    so groups nest to any depth. Children render in insertion order.
    """
    children: List["Filter"] = field(default_factory=list)
    operator: Union[LogicalOperator, str] = LogicalOperator.AND

    def __post_init__(self):
        self.children = list(self.children)
        self.operator = LogicalOperator.coerce(self.operator)

    @classmethod
    def of(cls, *filters: "Filter") -> "FilterGroup":
        return cls(list(filters))

    def as_or(self) -> "FilterGroup":
        return self.op(LogicalOperator.OR)

    def op(self, operator: Union[LogicalOperator, str]) -> "FilterGroup":
        self.operator = LogicalOperator.coerce(operator)
        return self

    def add(self, f: "Filter") -> "FilterGroup":
        self.children.append(f)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {token(self.operator): [c.to_dict() for c in self.children]}

    def to_json_str(self) -> str:
        return json_str(self.to_dict())


Filter = Union[FieldFilter, FilterGroup]


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def filter_from_dict(data: Dict[str, Any]) -> Filter:
    """
    Inverse of to_dict(): {"$and"|"$or": [...]} becomes a FilterGroup,
    any other single-key object becomes a FieldFilter.
    """
    if not isinstance(data, dict) or len(data) != 1:
        raise FilterValidationError(f"A filter must be an object with exactly one key, got: {data!r}")
    ((key, body),) = data.items()

    if key in _LOGICAL_TOKENS:
        if not isinstance(body, list):
            raise FilterValidationError(f"{key} expects an array of filters, got: {body!r}")
        return FilterGroup([filter_from_dict(c) for c in body], key)

    if not isinstance(body, dict) or len(body) != 1:
        raise FilterValidationError(
            f"Predicate for field '{key}' must be an object with exactly one operator, got: {body!r}"
        )
    ((op, value),) = body.items()
    return FieldFilter(key, op, value)


__all__ = [
    "Operator",
    "LogicalOperator",
    "MULTI_VALUE_OPERATORS",
    "FieldFilter",
    "FilterGroup",
    "Filter",
    "filter_from_dict",
    "token",
]

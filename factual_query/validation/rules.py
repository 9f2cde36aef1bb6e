from __future__ import annotations
from typing import List

from ..filters.models import (
    FieldFilter,
    Filter,
    FilterGroup,
    LogicalOperator,
    MULTI_VALUE_OPERATORS,
    Operator,
    token,
)


def lint_filter(root: Filter, path: str = "filters") -> List[str]:
    """
    Walk a filter tree and describe everything the server is likely to reject.
    Nothing is raised; an empty list means the tree looks well formed.
    """
    problems: List[str] = []

    def walk(node: Filter, where: str) -> None:
        if isinstance(node, FilterGroup):
            op = token(node.operator)
            if not isinstance(node.operator, LogicalOperator):
                problems.append(f"{where}: unknown logical operator {op!r}")
            if not node.children:
                problems.append(f"{where}: empty {op} group")
            for i, child in enumerate(node.children):
                walk(child, f"{where}.{op}[{i}]")
        elif isinstance(node, FieldFilter):
            op = token(node.operator)
            if not node.field_name:
                problems.append(f"{where}: empty field name")
            if not isinstance(node.operator, Operator):
                problems.append(f"{where}: unknown operator {op!r} on field '{node.field_name}'")
            elif node.operator in MULTI_VALUE_OPERATORS and not isinstance(node.wire_value(), str):
                problems.append(
                    f"{where}: {op} on field '{node.field_name}' expects a list or comma-joined string"
                )
            elif node.operator == Operator.BLANK and not isinstance(node.value, bool):
                problems.append(f"{where}: $blank on field '{node.field_name}' expects true or false")
        else:
            problems.append(f"{where}: not a filter: {type(node).__name__}")

    walk(root, path)
    return problems


__all__ = ["lint_filter"]

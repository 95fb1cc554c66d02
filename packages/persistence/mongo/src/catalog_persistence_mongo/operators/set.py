"""Set operators -> $in, $nin, range."""

from __future__ import annotations

from typing import Any

from catalog_specifications.operators import SpecificationOperator

from ..exceptions import MongoQueryError


def _as_list(val: Any) -> list[Any]:
    if isinstance(val, (list, tuple, set, frozenset)):
        return list(val)
    return [val]


def compile_set(
    field: str, op: SpecificationOperator, val: Any
) -> dict[str, Any] | None:
    if op == SpecificationOperator.IN:
        return {field: {"$in": _as_list(val)}}
    if op == SpecificationOperator.NOT_IN:
        return {field: {"$nin": _as_list(val)}}
    if op == SpecificationOperator.BETWEEN:
        if not isinstance(val, (list, tuple)) or len(val) != 2:
            raise MongoQueryError("between requires a list of two values")
        return {field: {"$gte": val[0], "$lte": val[1]}}
    return None

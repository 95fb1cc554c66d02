"""Comparison operators for MongoDB query compilation."""

from __future__ import annotations

from typing import Any

from catalog_specifications.operators import SpecificationOperator

_MONGO_OP_MAP: dict[SpecificationOperator, str] = {
    SpecificationOperator.EQ: "$eq",
    SpecificationOperator.NE: "$ne",
    SpecificationOperator.GT: "$gt",
    SpecificationOperator.GE: "$gte",
    SpecificationOperator.LT: "$lt",
    SpecificationOperator.LE: "$lte",
}


def compile_standard(
    field: str, op: SpecificationOperator, val: Any
) -> dict[str, Any] | None:
    mongo_op = _MONGO_OP_MAP.get(op)
    if mongo_op is None:
        return None
    return {field: {mongo_op: val}}

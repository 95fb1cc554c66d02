"""Null checks -> $exists / $eq null."""

from __future__ import annotations

from typing import Any

from catalog_specifications.operators import SpecificationOperator


def compile_null(
    field: str, op: SpecificationOperator, _val: Any
) -> dict[str, Any] | None:
    if op == SpecificationOperator.IS_NULL:
        return {"$or": [{field: {"$exists": False}}, {field: {"$eq": None}}]}
    if op == SpecificationOperator.IS_NOT_NULL:
        return {field: {"$exists": True, "$ne": None}}
    return None

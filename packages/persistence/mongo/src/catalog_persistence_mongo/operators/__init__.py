"""
Leaf operator compilers.

Each compiler takes ``(field, op, val)`` and returns a filter document, or
``None`` when *op* is not one of its operators. ``compile_leaf`` tries them
in order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..exceptions import MongoQueryError
from .null import compile_null
from .set import compile_set
from .standard import compile_standard
from .string import compile_string

if TYPE_CHECKING:
    from collections.abc import Callable

    from catalog_specifications.operators import SpecificationOperator

    LeafCompiler = Callable[[str, SpecificationOperator, Any], "dict[str, Any] | None"]

LEAF_COMPILERS: tuple[LeafCompiler, ...] = (
    compile_standard,
    compile_set,
    compile_string,
    compile_null,
)


def compile_leaf(field: str, op: SpecificationOperator, val: Any) -> dict[str, Any]:
    for compiler in LEAF_COMPILERS:
        document = compiler(field, op, val)
        if document is not None:
            return document
    raise MongoQueryError(f"Unsupported operator for MongoDB: {op.value}")


__all__ = ["LEAF_COMPILERS", "compile_leaf"]

"""is_null / is_not_null; the condition value is ignored."""

from __future__ import annotations

from typing import Any

from ..evaluator import MemoryOperator
from ..operators import SpecificationOperator


class IsNullOperator(MemoryOperator):
    name = SpecificationOperator.IS_NULL

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:  # noqa: ARG002
        return field_value is None


class IsNotNullOperator(MemoryOperator):
    name = SpecificationOperator.IS_NOT_NULL

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:  # noqa: ARG002
        return field_value is not None

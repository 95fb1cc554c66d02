"""Membership and range: in, not_in, between."""

from __future__ import annotations

from typing import Any

from ..evaluator import MemoryOperator
from ..operators import SpecificationOperator


def _members(condition_value: Any) -> tuple[Any, ...]:
    # A scalar is a one-element set, as the store compilers treat it
    if isinstance(condition_value, list | tuple | set | frozenset):
        return tuple(condition_value)
    return (condition_value,)


class InOperator(MemoryOperator):
    name = SpecificationOperator.IN

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return field_value in _members(condition_value)


class NotInOperator(MemoryOperator):
    name = SpecificationOperator.NOT_IN

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return field_value not in _members(condition_value)


class BetweenOperator(MemoryOperator):
    """Inclusive on both ends; the condition is ``[low, high]``."""

    name = SpecificationOperator.BETWEEN

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        low, high = condition_value
        return bool(low <= field_value <= high)

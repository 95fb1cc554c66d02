"""Comparison operators: =, !=, >, <, >=, <=."""

from __future__ import annotations

import operator
from collections.abc import Callable
from typing import Any, ClassVar

from ..evaluator import MemoryOperator
from ..operators import SpecificationOperator


class ComparisonOperator(MemoryOperator):
    """Binary comparison driven by a function from :mod:`operator`."""

    compare: ClassVar[Callable[[Any, Any], Any]]
    # Equality treats None as a value; ordering comparisons do not
    none_matches: ClassVar[bool] = True

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None and not self.none_matches:
            return False
        return bool(type(self).compare(field_value, condition_value))


class EqualOperator(ComparisonOperator):
    name = SpecificationOperator.EQ
    compare = operator.eq


class NotEqualOperator(ComparisonOperator):
    name = SpecificationOperator.NE
    compare = operator.ne


class GreaterThanOperator(ComparisonOperator):
    name = SpecificationOperator.GT
    compare = operator.gt
    none_matches = False


class LessThanOperator(ComparisonOperator):
    name = SpecificationOperator.LT
    compare = operator.lt
    none_matches = False


class GreaterEqualOperator(ComparisonOperator):
    name = SpecificationOperator.GE
    compare = operator.ge
    none_matches = False


class LessEqualOperator(ComparisonOperator):
    name = SpecificationOperator.LE
    compare = operator.le
    none_matches = False

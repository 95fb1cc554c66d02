"""Substring operators: contains, startswith, endswith.

Matching is case-sensitive in memory just as it is in both stores; the
catalog search adds a TitleCase variant of the term instead.
"""

from __future__ import annotations

from typing import Any

from ..evaluator import MemoryOperator
from ..operators import SpecificationOperator


class StringOperator(MemoryOperator):
    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return self.matches(str(field_value), str(condition_value))

    def matches(self, text: str, fragment: str) -> bool:
        raise NotImplementedError


class ContainsOperator(StringOperator):
    name = SpecificationOperator.CONTAINS

    def matches(self, text: str, fragment: str) -> bool:
        return fragment in text


class StartsWithOperator(StringOperator):
    name = SpecificationOperator.STARTSWITH

    def matches(self, text: str, fragment: str) -> bool:
        return text.startswith(fragment)


class EndsWithOperator(StringOperator):
    name = SpecificationOperator.ENDSWITH

    def matches(self, text: str, fragment: str) -> bool:
        return text.endswith(fragment)

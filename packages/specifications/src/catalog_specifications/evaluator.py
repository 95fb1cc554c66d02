"""
In-memory operator evaluation strategy.

Each :class:`SpecificationOperator` leaf is evaluated by a
``MemoryOperator`` looked up in a :class:`MemoryOperatorRegistry`.
Criteria nodes call the registry from ``is_satisfied_by``, which is how
the in-memory repository filters products.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .operators import SpecificationOperator


class MemoryOperator(ABC):
    """One leaf operator evaluated against plain Python values.

    Subclasses set ``name`` and implement ``evaluate``. A ``None`` field
    value never satisfies an ordering or string comparison, as with NULL
    in SQL and a missing field in MongoDB.
    """

    name: ClassVar[SpecificationOperator]

    @abstractmethod
    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        """Return whether the entity's value satisfies the condition."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name.value!r}>"


class MemoryOperatorRegistry:
    """Operators available for in-memory evaluation, keyed by name."""

    def __init__(self, operators: Iterable[MemoryOperator] = ()) -> None:
        self._operators: dict[SpecificationOperator, MemoryOperator] = {}
        self.register_all(*operators)

    def register(self, operator: MemoryOperator) -> None:
        """Add *operator*, replacing any previous one with the same name."""
        self._operators[operator.name] = operator

    def register_all(self, *operators: MemoryOperator) -> None:
        for operator in operators:
            self.register(operator)

    def get(self, name: SpecificationOperator) -> MemoryOperator | None:
        return self._operators.get(name)

    def has(self, name: SpecificationOperator) -> bool:
        return name in self._operators

    @property
    def supported_operators(self) -> set[SpecificationOperator]:
        return set(self._operators)

    def evaluate(
        self,
        name: SpecificationOperator,
        field_value: Any,
        condition_value: Any,
    ) -> bool:
        """
        Evaluate *name* against the two values.

        Raises:
            ValueError: No operator is registered under *name*.
        """
        operator = self._operators.get(name)
        if operator is None:
            raise ValueError(f"Unsupported operator for in-memory evaluation: {name}")
        return operator.evaluate(field_value, condition_value)

"""
Operator compilation for SQLAlchemy.

Mirrors the in-memory evaluator: every leaf :class:`SpecificationOperator`
maps to one ``SQLAlchemyOperator`` that turns ``(column, val)`` into a
``ColumnElement[bool]``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

from catalog_specifications.exceptions import OperatorNotFoundError
from catalog_specifications.operators import SpecificationOperator

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy import ColumnElement


class SQLAlchemyOperator(ABC):
    """Compiles one leaf operator against an instrumented column."""

    name: ClassVar[SpecificationOperator]

    @abstractmethod
    def apply(self, column: Any, value: Any) -> ColumnElement[bool]: ...


class SQLAlchemyOperatorRegistry:
    """Operators the relational compiler can emit, keyed by name."""

    def __init__(self, operators: Iterable[SQLAlchemyOperator] = ()) -> None:
        self._operators = {op.name: op for op in operators}

    def register(self, operator: SQLAlchemyOperator) -> None:
        self._operators[operator.name] = operator

    def has(self, name: SpecificationOperator | str) -> bool:
        return self._lookup(name) is not None

    @property
    def supported_operators(self) -> set[SpecificationOperator]:
        return set(self._operators)

    def apply(
        self,
        name: SpecificationOperator | str,
        column: Any,
        value: Any,
    ) -> ColumnElement[bool]:
        """
        Raises:
            OperatorNotFoundError: Nothing is registered under *name*.
        """
        operator = self._lookup(name)
        if operator is None:
            raise OperatorNotFoundError(
                str(getattr(name, "value", name)),
                [op.value for op in self._operators],
            )
        return operator.apply(column, value)

    def _lookup(self, name: SpecificationOperator | str) -> SQLAlchemyOperator | None:
        try:
            return self._operators.get(SpecificationOperator(name))
        except ValueError:
            return None

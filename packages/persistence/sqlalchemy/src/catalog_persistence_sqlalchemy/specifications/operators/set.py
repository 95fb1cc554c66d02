"""Membership and range operators."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from catalog_specifications.operators import SpecificationOperator

from ..strategy import SQLAlchemyOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement


class InOperator(SQLAlchemyOperator):
    name = SpecificationOperator.IN

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return column.in_(list(value))  # type: ignore[no-any-return]


class NotInOperator(SQLAlchemyOperator):
    name = SpecificationOperator.NOT_IN

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return column.not_in(list(value))  # type: ignore[no-any-return]


class BetweenOperator(SQLAlchemyOperator):
    """Inclusive on both ends; ``val`` is a ``[low, high]`` pair."""

    name = SpecificationOperator.BETWEEN

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        low, high = value
        return column.between(low, high)  # type: ignore[no-any-return]

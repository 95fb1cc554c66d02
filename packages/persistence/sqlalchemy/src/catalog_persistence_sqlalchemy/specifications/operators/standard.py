"""Comparison operators; SQLAlchemy overloads the Python operators."""

from __future__ import annotations

import operator
from typing import TYPE_CHECKING, Any, ClassVar

from catalog_specifications.operators import SpecificationOperator

from ..strategy import SQLAlchemyOperator

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.sql.elements import ColumnElement


class ComparisonOperator(SQLAlchemyOperator):
    compare: ClassVar[Callable[[Any, Any], Any]]

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return type(self).compare(column, value)  # type: ignore[no-any-return]


class EqualOperator(ComparisonOperator):
    name = SpecificationOperator.EQ
    compare = operator.eq


class NotEqualOperator(ComparisonOperator):
    name = SpecificationOperator.NE
    compare = operator.ne


class GreaterThanOperator(ComparisonOperator):
    name = SpecificationOperator.GT
    compare = operator.gt


class LessThanOperator(ComparisonOperator):
    name = SpecificationOperator.LT
    compare = operator.lt


class GreaterEqualOperator(ComparisonOperator):
    name = SpecificationOperator.GE
    compare = operator.ge


class LessEqualOperator(ComparisonOperator):
    name = SpecificationOperator.LE
    compare = operator.le

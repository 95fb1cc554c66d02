from __future__ import annotations

from typing import TYPE_CHECKING, Any

from catalog_specifications.operators import SpecificationOperator

from ..strategy import SQLAlchemyOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement


class IsNullOperator(SQLAlchemyOperator):
    name = SpecificationOperator.IS_NULL

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:  # noqa: ARG002
        return column.is_(None)  # type: ignore[no-any-return]


class IsNotNullOperator(SQLAlchemyOperator):
    name = SpecificationOperator.IS_NOT_NULL

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:  # noqa: ARG002
        return column.is_not(None)  # type: ignore[no-any-return]

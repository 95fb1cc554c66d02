"""
Case-sensitive substring operators.

The generic rendering is ``LIKE`` with ``autoescape=True``, so ``%`` and
``_`` in a search term match literally. SQLite's ``LIKE`` ignores ASCII
case, so on that dialect the same elements compile to ``instr`` and
``substr`` comparisons instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from sqlalchemy import Boolean
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement

from catalog_specifications.operators import SpecificationOperator

from ..strategy import SQLAlchemyOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.compiler import SQLCompiler
    from sqlalchemy.sql.elements import ColumnElement


class CaseSensitiveMatch(FunctionElement[bool]):
    """``(column, value)`` substring test; subclasses fix the position."""

    type = Boolean()
    # the LIKE rendering derives its bind from the value at compile time
    inherit_cache = False
    like_method: ClassVar[str]


class ContainsMatch(CaseSensitiveMatch):
    inherit_cache = False
    like_method = "contains"


class StartsWithMatch(CaseSensitiveMatch):
    inherit_cache = False
    like_method = "startswith"


class EndsWithMatch(CaseSensitiveMatch):
    inherit_cache = False
    like_method = "endswith"


@compiles(ContainsMatch)
@compiles(StartsWithMatch)
@compiles(EndsWithMatch)
def _match_as_like(element: Any, compiler: SQLCompiler, **kw: Any) -> str:
    column, value = list(element.clauses)[:2]
    like = getattr(column, element.like_method)(value.value, autoescape=True)
    return compiler.process(like, **kw)


@compiles(ContainsMatch, "sqlite")
def _contains_sqlite(element: Any, compiler: SQLCompiler, **kw: Any) -> str:
    column, value = (compiler.process(c, **kw) for c in element.clauses)
    return f"(instr({column}, {value}) > 0)"


@compiles(StartsWithMatch, "sqlite")
def _startswith_sqlite(element: Any, compiler: SQLCompiler, **kw: Any) -> str:
    column, value = (compiler.process(c, **kw) for c in element.clauses)
    return f"(instr({column}, {value}) = 1)"


@compiles(EndsWithMatch, "sqlite")
def _endswith_sqlite(element: Any, compiler: SQLCompiler, **kw: Any) -> str:
    # the value is bound a second time as its own parameter for length()
    column, value, again = (compiler.process(c, **kw) for c in element.clauses)
    return f"(substr({column}, -length({again})) = {value})"


class SubstringOperator(SQLAlchemyOperator):
    match: ClassVar[type[CaseSensitiveMatch]]

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        if value == "":
            return column.is_not(None)  # type: ignore[no-any-return]
        return self.match(column, value)  # type: ignore[return-value]


class ContainsOperator(SubstringOperator):
    name = SpecificationOperator.CONTAINS
    match = ContainsMatch


class StartsWithOperator(SubstringOperator):
    name = SpecificationOperator.STARTSWITH
    match = StartsWithMatch


class EndsWithOperator(SubstringOperator):
    name = SpecificationOperator.ENDSWITH

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        if value == "":
            return column.is_not(None)  # type: ignore[no-any-return]
        return EndsWithMatch(column, value, value)  # type: ignore[return-value]

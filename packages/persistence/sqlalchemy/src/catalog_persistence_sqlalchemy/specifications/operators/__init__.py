"""
Built-in SQLAlchemy operators.

``DEFAULT_SQLA_REGISTRY`` covers every leaf operator of the query AST and
is what the compiler and the repository use unless given another one::

    expr = DEFAULT_SQLA_REGISTRY.apply(SpecificationOperator.IN, column, values)
"""

from __future__ import annotations

from ..strategy import SQLAlchemyOperatorRegistry
from . import null, standard, string
from . import set as membership

DEFAULT_OPERATORS = (
    standard.EqualOperator,
    standard.NotEqualOperator,
    standard.GreaterThanOperator,
    standard.LessThanOperator,
    standard.GreaterEqualOperator,
    standard.LessEqualOperator,
    membership.InOperator,
    membership.NotInOperator,
    membership.BetweenOperator,
    string.ContainsOperator,
    string.StartsWithOperator,
    string.EndsWithOperator,
    null.IsNullOperator,
    null.IsNotNullOperator,
)


def build_default_sqla_registry() -> SQLAlchemyOperatorRegistry:
    return SQLAlchemyOperatorRegistry(cls() for cls in DEFAULT_OPERATORS)


DEFAULT_SQLA_REGISTRY = build_default_sqla_registry()

__all__ = [
    "DEFAULT_OPERATORS",
    "DEFAULT_SQLA_REGISTRY",
    "SQLAlchemyOperatorRegistry",
    "build_default_sqla_registry",
]

"""
In-memory operator implementations.

Usage::

    registry = build_default_registry()
    registry.evaluate(SpecificationOperator.IN, "Angular", ["Angular", "React"])
"""

from __future__ import annotations

from ..evaluator import MemoryOperator, MemoryOperatorRegistry
from .null import IsNotNullOperator, IsNullOperator
from .set import BetweenOperator, InOperator, NotInOperator
from .standard import (
    EqualOperator,
    GreaterEqualOperator,
    GreaterThanOperator,
    LessEqualOperator,
    LessThanOperator,
    NotEqualOperator,
)
from .string import ContainsOperator, EndsWithOperator, StartsWithOperator

DEFAULT_OPERATORS: tuple[type[MemoryOperator], ...] = (
    EqualOperator,
    NotEqualOperator,
    GreaterThanOperator,
    LessThanOperator,
    GreaterEqualOperator,
    LessEqualOperator,
    InOperator,
    NotInOperator,
    BetweenOperator,
    ContainsOperator,
    StartsWithOperator,
    EndsWithOperator,
    IsNullOperator,
    IsNotNullOperator,
)


def build_default_registry() -> MemoryOperatorRegistry:
    """A new registry holding one instance of every built-in operator."""
    return MemoryOperatorRegistry(cls() for cls in DEFAULT_OPERATORS)


__all__ = [
    "DEFAULT_OPERATORS",
    "MemoryOperatorRegistry",
    "build_default_registry",
]

"""Criteria nodes: the logical groups of the query AST."""

from __future__ import annotations

from typing import Any, ClassVar, Generic, TypeVar

from catalog_core.domain.entity import Entity
from catalog_core.domain.specification import ISpecification

from .operators import SpecificationOperator

T = TypeVar("T", contravariant=True, bound=Entity)


class BaseSpecification(Generic[T], ISpecification[T]):
    """Criteria node composable with ``&``, ``|`` and ``~``."""

    def __and__(self, other: ISpecification[T]) -> AndSpecification[T]:
        return AndSpecification(self, other)

    def __or__(self, other: ISpecification[T]) -> OrSpecification[T]:
        return OrSpecification(self, other)

    def __invert__(self) -> NotSpecification[T]:
        return NotSpecification(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_dict()!r})"


class _GroupSpecification(BaseSpecification[T]):
    op: ClassVar[SpecificationOperator]

    def __init__(self, *specifications: ISpecification[T]) -> None:
        self.specifications = specifications

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": self.op.value,
            "conditions": [spec.to_dict() for spec in self.specifications],
        }


class AndSpecification(_GroupSpecification[T]):
    """Satisfied when every child is."""

    op = SpecificationOperator.AND

    def is_satisfied_by(self, candidate: T) -> bool:
        return all(spec.is_satisfied_by(candidate) for spec in self.specifications)


class OrSpecification(_GroupSpecification[T]):
    """Satisfied when any child is; the search term and its variant use it."""

    op = SpecificationOperator.OR

    def is_satisfied_by(self, candidate: T) -> bool:
        return any(spec.is_satisfied_by(candidate) for spec in self.specifications)


class NotSpecification(_GroupSpecification[T]):
    """Negates exactly one child."""

    op = SpecificationOperator.NOT

    def __init__(self, specification: ISpecification[T]) -> None:
        super().__init__(specification)

    @property
    def specification(self) -> ISpecification[T]:
        return self.specifications[0]

    def is_satisfied_by(self, candidate: T) -> bool:
        return not self.specification.is_satisfied_by(candidate)

"""Specification pattern primitives."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeVar, runtime_checkable

from .entity import Entity

if TYPE_CHECKING:
    from collections.abc import Mapping

T = TypeVar("T", contravariant=True, bound=Entity)
E = TypeVar("E", bound=Entity)


@runtime_checkable
class ISpecification(Protocol, Generic[T]):
    """
    Protocol for a filter predicate.

    ``to_dict()`` returns the predicate as a query AST
    (``{"op", "attr", "val"}`` leaves, ``{"op", "conditions"}`` groups)
    which each store compiles on its own; ``is_satisfied_by`` evaluates the
    same predicate in memory.
    """

    def is_satisfied_by(self, candidate: T) -> bool: ...

    def to_dict(self) -> dict[str, Any]: ...


@runtime_checkable
class IProjection(Protocol):
    """Projection of an entity onto a set of fields."""

    @property
    def fields(self) -> tuple[str, ...]: ...

    def build(self, values: Mapping[str, Any]) -> Any:
        """Build one result from already selected field values."""
        ...

    def project(self, source: Any) -> Any:
        """Select the fields from *source* and build one result."""
        ...


@runtime_checkable
class IQuerySpecification(Protocol, Generic[E]):
    """
    Read-only view of a complete query description.

    Filter, single-key ordering, paging, optional projection and the
    distinct flag. Repositories only ever read these attributes.
    """

    @property
    def criteria(self) -> ISpecification[E] | None: ...

    @property
    def order_by(self) -> str | None: ...

    @property
    def order_by_descending(self) -> str | None: ...

    @property
    def skip(self) -> int: ...

    @property
    def take(self) -> int: ...

    @property
    def is_paging_enabled(self) -> bool: ...

    @property
    def select(self) -> IProjection | None: ...

    @property
    def is_distinct(self) -> bool: ...

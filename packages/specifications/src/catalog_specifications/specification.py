"""
Query specifications: criteria plus ordering, paging and projection.

A :class:`Specification` is configured through its mutating methods
(all chainable) and then handed to a repository, which only reads it::

    spec = (
        Specification(criteria)
        .add_order_by("price")
        .apply_paging(skip=0, take=6)
    )
    products = await repo.list(spec)

Ordering holds a single key: ``add_order_by`` and
``add_order_by_descending`` overwrite each other, the last call wins.
With no ordering the repositories order by ``id``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar, cast

from catalog_core.domain.entity import Entity
from catalog_core.utils import read_field

from .exceptions import ValidationError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from catalog_core.domain.specification import ISpecification

T = TypeVar("T", bound=Entity)
TResult = TypeVar("TResult")


@dataclass(frozen=True)
class Projection(Generic[TResult]):
    """
    Fields to select and how to shape each result.

    - one field, no factory: the bare value (``Projection.of("brand")``)
    - several fields, no factory: a ``dict`` keyed by field name
    - factory: ``factory(**values)``
    """

    fields: tuple[str, ...]
    factory: Callable[..., TResult] | None = None

    def __post_init__(self) -> None:
        if not self.fields:
            raise ValidationError("Projection requires at least one field")

    @classmethod
    def of(
        cls, *fields: str, into: Callable[..., TResult] | None = None
    ) -> Projection[TResult]:
        return cls(tuple(fields), into)

    def build(self, values: Mapping[str, Any]) -> TResult:
        if self.factory is not None:
            return self.factory(**{f: values.get(f) for f in self.fields})
        if len(self.fields) == 1:
            return values.get(self.fields[0])  # type: ignore[return-value]
        return {f: values.get(f) for f in self.fields}  # type: ignore[return-value]

    def project(self, source: Any) -> TResult:
        return self.build({f: read_field(source, f) for f in self.fields})


class Specification(Generic[T]):
    """Criteria, single-key ordering, paging, projection and distinct."""

    def __init__(self, criteria: ISpecification[T] | None = None) -> None:
        self._criteria = criteria
        self._order_by: str | None = None
        self._order_by_descending: str | None = None
        self._skip = 0
        self._take = 0
        self._is_paging_enabled = False
        self._select: Projection[Any] | None = None
        self._is_distinct = False

    # -- configuration -------------------------------------------------------

    def set_criteria(self, criteria: ISpecification[T] | None) -> Specification[T]:
        """Replace the filter; ``None`` matches everything."""
        self._criteria = criteria
        return self

    def add_order_by(self, field: str) -> Specification[T]:
        self._order_by = field
        self._order_by_descending = None
        return self

    def add_order_by_descending(self, field: str) -> Specification[T]:
        self._order_by_descending = field
        self._order_by = None
        return self

    def apply_paging(self, skip: int, take: int) -> Specification[T]:
        if skip < 0:
            raise ValidationError(f"skip must be >= 0, got {skip}", path="skip")
        if take < 1:
            raise ValidationError(f"take must be >= 1, got {take}", path="take")
        self._skip = skip
        self._take = take
        self._is_paging_enabled = True
        return self

    def apply_projection(self, projection: Projection[Any]) -> Specification[T]:
        self._select = projection
        return self

    def mark_distinct(self) -> Specification[T]:
        self._is_distinct = True
        return self

    # -- read side -----------------------------------------------------------

    @property
    def criteria(self) -> ISpecification[T] | None:
        return self._criteria

    @property
    def order_by(self) -> str | None:
        return self._order_by

    @property
    def order_by_descending(self) -> str | None:
        return self._order_by_descending

    @property
    def skip(self) -> int:
        return self._skip

    @property
    def take(self) -> int:
        return self._take

    @property
    def is_paging_enabled(self) -> bool:
        return self._is_paging_enabled

    @property
    def select(self) -> Projection[Any] | None:
        return self._select

    @property
    def is_distinct(self) -> bool:
        return self._is_distinct

    def to_dict(self) -> dict[str, Any]:
        """Serializable view, mostly for logging."""
        return {
            "criteria": self._criteria.to_dict() if self._criteria else None,
            "order_by": self._order_by,
            "order_by_descending": self._order_by_descending,
            "skip": self._skip,
            "take": self._take,
            "is_paging_enabled": self._is_paging_enabled,
            "select": list(self._select.fields) if self._select else None,
            "is_distinct": self._is_distinct,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_dict()!r})"


class ProjectedSpecification(Specification[T], Generic[T, TResult]):
    """A specification whose results are always projected."""

    def __init__(
        self,
        projection: Projection[TResult],
        criteria: ISpecification[T] | None = None,
    ) -> None:
        super().__init__(criteria)
        if projection is None:
            raise ValidationError("A projected specification requires a projection")
        self._select = projection

    @property
    def select(self) -> Projection[TResult]:
        return cast("Projection[TResult]", self._select)

    def apply_projection(
        self, projection: Projection[Any]
    ) -> ProjectedSpecification[T, TResult]:
        if projection is None:
            raise ValidationError("A projected specification requires a projection")
        self._select = projection
        return self

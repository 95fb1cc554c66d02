"""IRepository — the store-agnostic repository contract."""

from __future__ import annotations

import builtins
from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

from ..domain.entity import Entity

if TYPE_CHECKING:
    from ..domain.specification import IQuerySpecification
    from .search_result import SearchResult

T = TypeVar("T", bound=Entity)


@runtime_checkable
class IRepository(Protocol[T]):
    """
    Generic repository over one entity collection.

    Writes are staged: ``add`` / ``update`` / ``remove`` only record the
    mutation, and ``save_all`` flushes everything staged since the last
    flush (adds, then updates, then deletes, each in call order). Staging
    is not safe for concurrent callers; use one repository per unit of
    work.

    Reads take an ``IQuerySpecification``. ``list`` and ``list_projected``
    return a lazy :class:`SearchResult`::

        products = await repo.list(spec)
        async for name in repo.list_projected(names_spec).stream():
            ...
    """

    def add(self, entity: T) -> None: ...

    def update(self, entity: T) -> None: ...

    def remove(self, entity: T) -> None: ...

    async def get_by_id(self, entity_id: int) -> T | None: ...

    async def get_entity_with_spec(self, spec: IQuerySpecification[T]) -> T | None: ...

    async def get_projected_with_spec(self, spec: IQuerySpecification[T]) -> Any: ...

    def list(self, spec: IQuerySpecification[T]) -> SearchResult[T]: ...

    def list_projected(self, spec: IQuerySpecification[T]) -> SearchResult[Any]: ...

    async def list_all(self) -> builtins.list[T]: ...

    async def count(self, spec: IQuerySpecification[T]) -> int: ...

    async def exists(self, entity_id: int) -> bool: ...

    async def save_all(self) -> bool: ...

"""InMemoryRepository — dict-backed repository for tests and fixtures."""

from __future__ import annotations

import builtins
import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ...domain.entity import Entity
from ...domain.partitioning import resolve_partition_key
from ...ports.repository import IRepository
from ...ports.search_result import SearchResult, stream_from_list
from ...primitives.exceptions import PartitionKeyImmutableError
from ...utils import order_items, page_items, project_items

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ...domain.specification import IQuerySpecification

T = TypeVar("T", bound=Entity)

logger = logging.getLogger(__name__)


class InMemoryRepository(IRepository[T], Generic[T]):
    """In-memory implementation of ``IRepository[T]``.

    Stores copies of the entities in a dict keyed by ``id`` and evaluates
    specifications with ``is_satisfied_by``. Staging and ``save_all``
    behave like the store-backed repositories, including partition key
    immutability and idempotent deletes.
    """

    def __init__(self, entities: Iterable[T] | None = None) -> None:
        self._store: dict[int, T] = {}
        for entity in entities or ():
            self._store[entity.id] = entity.model_copy(deep=True)
        self._pending_adds: list[T] = []
        self._pending_updates: list[T] = []
        self._pending_deletes: list[T] = []

    # -- staging ------------------------------------------------------------

    def add(self, entity: T) -> None:
        self._pending_adds.append(entity)

    def update(self, entity: T) -> None:
        stored = self._store.get(entity.id)
        if stored is not None:
            old_key = resolve_partition_key(stored)
            new_key = resolve_partition_key(entity)
            if old_key != new_key:
                raise PartitionKeyImmutableError(entity.id, old_key, new_key)
        self._pending_updates.append(entity)

    def remove(self, entity: T) -> None:
        self._pending_deletes.append(entity)

    async def save_all(self) -> bool:
        executed = 0
        try:
            for entity in [*self._pending_adds, *self._pending_updates]:
                self._store[entity.id] = entity.model_copy(deep=True)
                executed += 1
            for entity in self._pending_deletes:
                if self._store.pop(entity.id, None) is not None:
                    executed += 1
        finally:
            self._pending_adds.clear()
            self._pending_updates.clear()
            self._pending_deletes.clear()
        logger.debug("In-memory save_all executed %d operation(s)", executed)
        return executed > 0

    # -- reads --------------------------------------------------------------

    async def get_by_id(self, entity_id: int) -> T | None:
        entity = self._store.get(entity_id)
        return entity.model_copy(deep=True) if entity is not None else None

    async def get_entity_with_spec(self, spec: IQuerySpecification[T]) -> T | None:
        return await self.list(spec).first()

    async def get_projected_with_spec(self, spec: IQuerySpecification[T]) -> Any:
        return await self.list_projected(spec).first()

    def list(self, spec: IQuerySpecification[T]) -> SearchResult[T]:
        async def list_fn() -> builtins.list[T]:
            return self._evaluate(spec)

        return SearchResult(list_fn, stream_from_list(list_fn))

    def list_projected(self, spec: IQuerySpecification[T]) -> SearchResult[Any]:
        async def list_fn() -> builtins.list[Any]:
            return project_items(self._evaluate(spec), spec)

        return SearchResult(list_fn, stream_from_list(list_fn))

    async def list_all(self) -> builtins.list[T]:
        return [self._store[key].model_copy(deep=True) for key in sorted(self._store)]

    async def count(self, spec: IQuerySpecification[T]) -> int:
        return len(self._filter(spec))

    async def exists(self, entity_id: int) -> bool:
        return entity_id in self._store

    # -- internals ----------------------------------------------------------

    def _filter(self, spec: IQuerySpecification[T]) -> builtins.list[T]:
        criteria = spec.criteria
        return [
            entity
            for entity in self._store.values()
            if criteria is None or criteria.is_satisfied_by(entity)
        ]

    def _evaluate(self, spec: IQuerySpecification[T]) -> builtins.list[T]:
        ordered = order_items(self._filter(spec), spec)
        return [e.model_copy(deep=True) for e in page_items(ordered, spec)]

from __future__ import annotations

import builtins
import logging
from collections.abc import AsyncIterator, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from catalog_core.domain.entity import Entity
from catalog_core.domain.partitioning import resolve_partition_key
from catalog_core.ports.repository import IRepository
from catalog_core.ports.search_result import SearchResult, stream_from_list
from catalog_core.primitives.exceptions import PartitionKeyImmutableError
from catalog_core.utils import distinct

from ..exceptions import SQLAlchemyPersistenceError
from ..specifications.compiler import (
    build_count,
    build_projected_select,
    build_select,
)
from .model_mapper import ModelMapper

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from catalog_core.domain.specification import IQuerySpecification

    from ..specifications.strategy import SQLAlchemyOperatorRegistry

T = TypeVar("T", bound=Entity)

logger = logging.getLogger(__name__)


class SQLAlchemyRepository(IRepository[T], Generic[T]):
    """
    ``IRepository`` over a relational table.

    The caller owns the ``AsyncSession``; the repository never opens or
    closes it. ``add`` / ``update`` / ``remove`` stage in memory and
    ``save_all`` applies them (adds, updates, deletes) and commits::

        async with session_factory() as session:
            repo = SQLAlchemyRepository(session, Product, ProductModel)
            page = await repo.list(ProductSpecification(params))
            total = await repo.count(ProductCountSpecification(params))

    Specifications are compiled to SQL: filter, ordering, paging and
    column projection all run in the database.
    """

    def __init__(
        self,
        session: AsyncSession,
        entity_cls: type[T],
        db_model_cls: type[Any],
        *,
        registry: SQLAlchemyOperatorRegistry | None = None,
        partition_key_column: str | None = "partition_key",
        stream_batch_size: int = 100,
    ) -> None:
        self._session = session
        self.entity_cls = entity_cls
        self.db_model_cls = db_model_cls
        self._registry = registry
        self._mapper = ModelMapper(entity_cls, db_model_cls)
        self._partition_column = (
            partition_key_column
            if partition_key_column in self._mapper.columns
            else None
        )
        self._stream_batch_size = stream_batch_size
        self._pending_adds: builtins.list[T] = []
        self._pending_updates: builtins.list[T] = []
        self._pending_deletes: builtins.list[T] = []
        self._known_partition_keys: dict[int, str | None] = {}

    # -- mapping ------------------------------------------------------------

    def to_model(self, entity: T) -> Any:
        return self._mapper.to_model(entity)

    def from_model(self, model: Any) -> T:
        entity = self._mapper.from_model(model)
        self._known_partition_keys[entity.id] = resolve_partition_key(entity)
        return entity

    # -- staging ------------------------------------------------------------

    def add(self, entity: T) -> None:
        self._pending_adds.append(entity)

    def update(self, entity: T) -> None:
        new_key = resolve_partition_key(entity)
        if self._partition_column and entity.id in self._known_partition_keys:
            stored_key = self._known_partition_keys[entity.id]
            if stored_key != new_key:
                raise PartitionKeyImmutableError(entity.id, stored_key, new_key)
        self._pending_updates.append(entity)

    def remove(self, entity: T) -> None:
        self._pending_deletes.append(entity)

    async def save_all(self) -> bool:
        """
        Apply everything staged and commit.

        Returns ``False`` without touching the database when nothing is
        staged. Deleting a row that no longer exists is not counted.

        Raises:
            PartitionKeyImmutableError: A staged update changes the stored
                partition key; nothing is written.
            SQLAlchemyPersistenceError: The database rejected a write; the
                session is rolled back.

        The staged batch is cleared whether or not the call succeeds, so
        after an error every pending add, update and delete must be staged
        again.
        """
        if not (self._pending_adds or self._pending_updates or self._pending_deletes):
            return False

        executed = 0
        try:
            await self._check_partition_keys(self._pending_updates)

            for entity in self._pending_adds:
                self._session.add(self.to_model(entity))
                executed += 1
            if self._pending_adds:
                await self._session.flush()

            for entity in self._pending_updates:
                await self._session.merge(self.to_model(entity))
                executed += 1
            if self._pending_updates:
                await self._session.flush()

            for entity in self._pending_deletes:
                result = await self._session.execute(
                    delete(self.db_model_cls).where(
                        self.db_model_cls.id == entity.id
                    )
                )
                if getattr(result, "rowcount", 0):
                    executed += 1
                self._known_partition_keys.pop(entity.id, None)

            await self._session.commit()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            raise SQLAlchemyPersistenceError(
                f"save_all failed for {self.db_model_cls.__name__}: {exc}"
            ) from exc
        finally:
            self._pending_adds.clear()
            self._pending_updates.clear()
            self._pending_deletes.clear()

        logger.info(
            "save_all on %s executed %d operation(s)",
            self.db_model_cls.__tablename__,
            executed,
        )
        return executed > 0

    async def _check_partition_keys(self, entities: builtins.list[T]) -> None:
        if not self._partition_column or not entities:
            return
        partition_col = getattr(self.db_model_cls, self._partition_column)
        rows = await self._session.execute(
            select(self.db_model_cls.id, partition_col).where(
                self.db_model_cls.id.in_([e.id for e in entities])
            )
        )
        stored = {row[0]: (row[1] or None) for row in rows}
        for entity in entities:
            if entity.id not in stored:
                continue
            new_key = resolve_partition_key(entity)
            if stored[entity.id] != new_key:
                raise PartitionKeyImmutableError(entity.id, stored[entity.id], new_key)

    # -- reads --------------------------------------------------------------

    @contextmanager
    def _store_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            raise SQLAlchemyPersistenceError(
                f"{action} failed for {self.db_model_cls.__name__}: {exc}"
            ) from exc

    async def get_by_id(self, entity_id: int) -> T | None:
        with self._store_errors("get_by_id"):
            model = await self._session.get(
                self.db_model_cls, entity_id, populate_existing=True
            )
        return self.from_model(model) if model is not None else None

    async def get_entity_with_spec(self, spec: IQuerySpecification[T]) -> T | None:
        return await self.list(spec).first()

    async def get_projected_with_spec(self, spec: IQuerySpecification[T]) -> Any:
        return await self.list_projected(spec).first()

    def list(self, spec: IQuerySpecification[T]) -> SearchResult[T]:
        return SearchResult(
            list_fn=lambda: self._execute_list(spec),
            stream_fn=lambda batch_size: self._execute_stream(
                spec, batch_size=batch_size
            ),
        )

    def list_projected(self, spec: IQuerySpecification[T]) -> SearchResult[Any]:
        async def list_fn() -> builtins.list[Any]:
            return await self._execute_projected(spec)

        return SearchResult(list_fn, stream_from_list(list_fn))

    async def list_all(self) -> builtins.list[T]:
        stmt = select(self.db_model_cls).order_by(self.db_model_cls.id)
        with self._store_errors("list_all"):
            result = await self._session.execute(
                stmt.execution_options(populate_existing=True)
            )
        return [self.from_model(m) for m in result.scalars().all()]

    async def count(self, spec: IQuerySpecification[T]) -> int:
        stmt = build_count(self.db_model_cls, spec, registry=self._registry)
        logger.debug("Count query: %s", stmt)
        with self._store_errors("count"):
            return int((await self._session.execute(stmt)).scalar_one())

    async def exists(self, entity_id: int) -> bool:
        stmt = (
            select(self.db_model_cls.id)
            .where(self.db_model_cls.id == entity_id)
            .limit(1)
        )
        with self._store_errors("exists"):
            return (await self._session.execute(stmt)).scalar_one_or_none() is not None

    # -- internal query execution --------------------------------------------

    async def _execute_list(self, spec: IQuerySpecification[T]) -> builtins.list[T]:
        stmt = build_select(self.db_model_cls, spec, registry=self._registry)
        logger.debug("List query: %s", stmt)
        with self._store_errors("list"):
            result = await self._session.execute(
                stmt.execution_options(populate_existing=True)
            )
        return [self.from_model(m) for m in result.scalars().all()]

    async def _execute_stream(
        self,
        spec: IQuerySpecification[T],
        *,
        batch_size: int | None = None,
    ) -> AsyncIterator[T]:
        stmt = build_select(self.db_model_cls, spec, registry=self._registry)
        effective_batch = batch_size or self._stream_batch_size
        with self._store_errors("stream"):
            result = await self._session.stream_scalars(
                stmt.execution_options(yield_per=effective_batch, populate_existing=True)
            )
            async for model in result:
                yield self.from_model(model)

    async def _execute_projected(
        self, spec: IQuerySpecification[T]
    ) -> builtins.list[Any]:
        projection = spec.select
        if projection is None:
            entities = await self._execute_list(spec)
            return distinct(entities) if spec.is_distinct else entities

        stmt, sql_distinct = build_projected_select(
            self.db_model_cls, spec, projection.fields, registry=self._registry
        )
        logger.debug("Projected query: %s", stmt)
        with self._store_errors("list_projected"):
            result = await self._session.execute(stmt)
            items = [projection.build(row._mapping) for row in result]
        if spec.is_distinct and not sql_distinct:
            return distinct(items)
        return items

"""
PartitionedMongoRepository — catalog repository over a partitioned collection.

Every write is a point operation keyed by ``(_id, partition key)`` so that
a sharded collection routes it to a single shard. Reads by id do not know
the partition and scan across partitions.
"""

from __future__ import annotations

import builtins
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pymongo.errors import PyMongoError

from catalog_core.config import CatalogConfig
from catalog_core.domain.entity import Entity
from catalog_core.domain.partitioning import resolve_partition_key
from catalog_core.ports.repository import IRepository
from catalog_core.ports.search_result import SearchResult, stream_from_list
from catalog_core.primitives.exceptions import PartitionKeyImmutableError
from catalog_core.utils import project_items

from .exceptions import DocumentStoreError
from .query_builder import MongoQueryBuilder
from .serialization import model_from_doc, model_to_doc

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator

    from catalog_core.domain.specification import IQuerySpecification

    from .connection import MongoConnectionManager

T = TypeVar("T", bound=Entity)

logger = logging.getLogger(__name__)


class PartitionedMongoRepository(IRepository[T], Generic[T]):
    """
    ``IRepository`` over a MongoDB collection partitioned by a key field.

    ``add`` / ``update`` / ``remove`` only stage; ``save_all`` is the only
    method that writes. It first checks staged updates against the stored
    partition keys, then upserts adds, upserts updates and deletes, each
    batch in call order.

    Entities without a partition key are written with an ``_id``-only
    filter (a scatter write on a sharded cluster). Such writes are logged
    and their ids collected in :attr:`degraded_writes`. Setting
    ``CatalogConfig.fallback_partition_key`` writes them under that key
    instead.
    """

    def __init__(
        self,
        connection: MongoConnectionManager,
        entity_cls: type[T],
        *,
        config: CatalogConfig | None = None,
        collection: str | None = None,
        query_builder: MongoQueryBuilder | None = None,
    ) -> None:
        self._connection = connection
        self._entity_cls = entity_cls
        self._config = config or CatalogConfig()
        self._collection_name = collection or self._config.products_collection
        self._partition_field = self._config.partition_key_field
        self._query_builder = query_builder or MongoQueryBuilder()
        self._pending_adds: builtins.list[T] = []
        self._pending_updates: builtins.list[T] = []
        self._pending_deletes: builtins.list[T] = []
        self._known_partition_keys: dict[int, str | None] = {}
        self.degraded_writes: builtins.list[int] = []

    def _collection(self) -> Any:
        return self._connection.collection(self._collection_name)

    # -- mapping ------------------------------------------------------------

    def _from_doc(self, doc: dict[str, Any]) -> T:
        entity = model_from_doc(self._entity_cls, doc)
        self._known_partition_keys[entity.id] = doc.get(self._partition_field) or None
        return entity

    def _partition_key(self, entity: T) -> str | None:
        key = resolve_partition_key(entity)
        if key is None:
            key = self._config.fallback_partition_key or None
        return key

    def _point_filter(self, entity: T) -> dict[str, Any]:
        key = self._partition_key(entity)
        if key is None:
            logger.warning(
                "%s %s has no partition key; writing by _id across all partitions",
                self._entity_cls.__name__,
                entity.id,
            )
            self.degraded_writes.append(entity.id)
            return {"_id": entity.id}
        return {"_id": entity.id, self._partition_field: key}

    def _to_doc(self, entity: T, filter_: dict[str, Any]) -> dict[str, Any]:
        doc = model_to_doc(entity)
        if self._partition_field in filter_:
            doc[self._partition_field] = filter_[self._partition_field]
        return doc

    # -- staging ------------------------------------------------------------

    def add(self, entity: T) -> None:
        self._pending_adds.append(entity)

    def update(self, entity: T) -> None:
        if entity.id in self._known_partition_keys:
            stored_key = self._known_partition_keys[entity.id]
            new_key = self._partition_key(entity)
            if stored_key != new_key:
                raise PartitionKeyImmutableError(entity.id, stored_key, new_key)
        self._pending_updates.append(entity)

    def remove(self, entity: T) -> None:
        self._pending_deletes.append(entity)

    async def save_all(self) -> bool:
        """
        Flush staged writes.

        Returns:
            ``True`` when at least one write took effect. A delete whose
            document is already gone is not counted and is not an error.

        Raises:
            PartitionKeyImmutableError: A staged update would move a stored
                document to another partition; nothing is written.
            DocumentStoreError: The driver rejected a read or write.

        The staged batch is cleared whether or not the call succeeds: after
        any of the errors above, staged adds and deletes are discarded along
        with the rejected update and must be staged again.
        """
        if not (self._pending_adds or self._pending_updates or self._pending_deletes):
            return False

        executed = 0
        coll = self._collection()
        try:
            await self._check_partition_keys(coll, self._pending_updates)

            for entity in [*self._pending_adds, *self._pending_updates]:
                filter_ = self._point_filter(entity)
                await coll.replace_one(
                    filter_, self._to_doc(entity, filter_), upsert=True
                )
                self._known_partition_keys[entity.id] = self._partition_key(entity)
                executed += 1

            for entity in self._pending_deletes:
                result = await coll.delete_one(self._point_filter(entity))
                if result.deleted_count:
                    executed += 1
                else:
                    logger.debug("Delete of missing document %s ignored", entity.id)
                self._known_partition_keys.pop(entity.id, None)
        except PyMongoError as exc:
            raise DocumentStoreError(
                f"save_all failed on {self._collection_name}: {exc}"
            ) from exc
        finally:
            self._pending_adds.clear()
            self._pending_updates.clear()
            self._pending_deletes.clear()

        logger.info(
            "save_all on %s executed %d operation(s)", self._collection_name, executed
        )
        return executed > 0

    async def _check_partition_keys(
        self, coll: Any, entities: builtins.list[T]
    ) -> None:
        if not entities:
            return
        cursor = coll.find(
            {"_id": {"$in": [e.id for e in entities]}},
            {self._partition_field: 1},
        )
        stored = {
            doc["_id"]: doc.get(self._partition_field) or None async for doc in cursor
        }
        for entity in entities:
            if entity.id not in stored:
                continue
            new_key = self._partition_key(entity)
            if stored[entity.id] != new_key:
                raise PartitionKeyImmutableError(entity.id, stored[entity.id], new_key)

    # -- reads --------------------------------------------------------------

    @contextmanager
    def _store_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except PyMongoError as exc:
            raise DocumentStoreError(
                f"{action} failed on {self._collection_name}: {exc}"
            ) from exc

    async def get_by_id(self, entity_id: int) -> T | None:
        logger.debug(
            "Cross-partition read of %s %s", self._entity_cls.__name__, entity_id
        )
        with self._store_errors("get_by_id"):
            doc = await self._collection().find_one({"_id": entity_id})
        return self._from_doc(doc) if doc is not None else None

    async def get_entity_with_spec(self, spec: IQuerySpecification[T]) -> T | None:
        return await self.list(spec).first()

    async def get_projected_with_spec(self, spec: IQuerySpecification[T]) -> Any:
        return await self.list_projected(spec).first()

    def list(self, spec: IQuerySpecification[T]) -> SearchResult[T]:
        pipeline = self._query_builder.build_pipeline(spec)

        async def list_fn() -> builtins.list[T]:
            with self._store_errors("list"):
                cursor = self._collection().aggregate(pipeline)
                return [self._from_doc(doc) async for doc in cursor]

        async def stream_fn(batch_size: int | None) -> AsyncIterator[T]:
            batch = batch_size or self._config.stream_batch_size
            with self._store_errors("stream"):
                cursor = self._collection().aggregate(pipeline, batchSize=batch)
                async for doc in cursor:
                    yield self._from_doc(doc)

        return SearchResult(list_fn, stream_fn)

    def list_projected(self, spec: IQuerySpecification[T]) -> SearchResult[Any]:
        entities = self.list(spec)

        async def list_fn() -> builtins.list[Any]:
            return project_items(await entities, spec)

        if spec.is_distinct or spec.select is None:
            return SearchResult(list_fn, stream_from_list(list_fn))

        projection = spec.select

        async def stream_fn(batch_size: int | None) -> AsyncIterator[Any]:
            async for entity in entities.stream(batch_size=batch_size):
                yield projection.project(entity)

        return SearchResult(list_fn, stream_fn)

    async def list_all(self) -> builtins.list[T]:
        with self._store_errors("list_all"):
            cursor = self._collection().find({}, sort=[("_id", 1)])
            return [self._from_doc(doc) async for doc in cursor]

    async def count(self, spec: IQuerySpecification[T]) -> int:
        match = self._query_builder.build_match(spec)
        with self._store_errors("count"):
            return int(await self._collection().count_documents(match))

    async def exists(self, entity_id: int) -> bool:
        with self._store_errors("exists"):
            doc = await self._collection().find_one({"_id": entity_id}, {"_id": 1})
        return doc is not None

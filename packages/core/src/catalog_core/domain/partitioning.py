"""Partition key capability for document-store entities."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IPartitioned(Protocol):
    """
    Capability of entities that live in a partitioned collection.

    The returned key routes and co-locates the entity in the document
    store. It must be set when the entity is created and must not change
    afterwards.
    """

    def get_partition_key(self) -> str | None: ...


def resolve_partition_key(entity: object) -> str | None:
    """Return the entity's partition key, or ``None`` if it has none.

    Blank keys count as missing.
    """
    if not isinstance(entity, IPartitioned):
        return None
    key = entity.get_partition_key()
    if key is None or not key.strip():
        return None
    return key

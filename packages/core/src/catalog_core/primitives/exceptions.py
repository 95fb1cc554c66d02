"""Domain and infrastructure exceptions for catalog-core."""

from __future__ import annotations


class CatalogError(Exception):
    """Root exception for the entire catalog query layer."""


class DomainError(CatalogError):
    """Base class for all domain-related errors."""


class InvalidInputError(DomainError):
    """Raised when caller-supplied input cannot be accepted.

    Maps to a client error at the outer (HTTP) boundary.
    """


class PartitionKeyImmutableError(InvalidInputError):
    """Raised when an update would move an entity to another partition."""

    def __init__(
        self,
        entity_id: object,
        stored_key: str | None,
        new_key: str | None,
    ) -> None:
        self.entity_id = entity_id
        self.stored_key = stored_key
        self.new_key = new_key
        super().__init__(
            f"partition key is immutable: entity id={entity_id!r} is stored "
            f"under {stored_key!r}, update carries {new_key!r}"
        )


class InfrastructureError(CatalogError):
    """Base class for all infrastructure-related errors."""


class PersistenceError(InfrastructureError):
    """Base class for all persistence-related errors."""


class StoreError(PersistenceError):
    """Raised when the backing store rejects or fails an operation.

    The query layer performs no retries; a ``StoreError`` is terminal for
    the operation that raised it.
    """

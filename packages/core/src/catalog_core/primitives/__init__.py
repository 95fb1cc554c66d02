from .exceptions import (
    CatalogError,
    DomainError,
    InfrastructureError,
    InvalidInputError,
    PartitionKeyImmutableError,
    PersistenceError,
    StoreError,
)

__all__ = [
    "CatalogError",
    "DomainError",
    "InfrastructureError",
    "InvalidInputError",
    "PartitionKeyImmutableError",
    "PersistenceError",
    "StoreError",
]

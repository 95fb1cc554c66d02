"""catalog-core — entities, repository port and shared primitives.

No store dependencies; pydantic for the entity models.
"""

from __future__ import annotations

from .adapters.memory import InMemoryRepository
from .config import CatalogConfig
from .domain import (
    Entity,
    IPartitioned,
    IProjection,
    IQuerySpecification,
    ISpecification,
    Product,
    resolve_partition_key,
)
from .ports import IRepository, SearchResult
from .primitives import (
    CatalogError,
    DomainError,
    InfrastructureError,
    InvalidInputError,
    PartitionKeyImmutableError,
    PersistenceError,
    StoreError,
)

__all__ = [
    # Adapters
    "InMemoryRepository",
    # Config
    "CatalogConfig",
    # Domain
    "Entity",
    "IPartitioned",
    "IProjection",
    "IQuerySpecification",
    "ISpecification",
    "Product",
    "resolve_partition_key",
    # Ports
    "IRepository",
    "SearchResult",
    # Exceptions
    "CatalogError",
    "DomainError",
    "InfrastructureError",
    "InvalidInputError",
    "PartitionKeyImmutableError",
    "PersistenceError",
    "StoreError",
]

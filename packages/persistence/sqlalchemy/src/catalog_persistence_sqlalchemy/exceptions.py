"""Exceptions for the SQLAlchemy persistence layer."""

from __future__ import annotations

from catalog_core.primitives.exceptions import StoreError


class SQLAlchemyPersistenceError(StoreError):
    """Base exception for all SQLAlchemy-specific persistence errors."""


class MappingError(SQLAlchemyPersistenceError):
    """Raised when mapping between domain entities and DB models fails."""


__all__: list[str] = [
    "MappingError",
    "SQLAlchemyPersistenceError",
]

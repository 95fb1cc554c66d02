"""MongoDB persistence exceptions."""

from __future__ import annotations

from catalog_core.primitives.exceptions import StoreError


class MongoPersistenceError(StoreError):
    """Base for MongoDB persistence errors."""


class MongoConnectionError(MongoPersistenceError):
    """Raised when connection to MongoDB fails."""


class MongoQueryError(MongoPersistenceError):
    """Raised when a query or compilation fails."""


class DocumentStoreError(MongoPersistenceError):
    """Raised when a staged write is rejected by the document store."""

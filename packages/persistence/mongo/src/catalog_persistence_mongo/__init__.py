"""catalog-persistence-mongo — document-store evaluator for catalog specifications."""

from .connection import MongoConnectionManager
from .exceptions import (
    DocumentStoreError,
    MongoConnectionError,
    MongoPersistenceError,
    MongoQueryError,
)
from .query_builder import MongoQueryBuilder
from .repository import PartitionedMongoRepository
from .serialization import model_from_doc, model_to_doc

__all__ = [
    "DocumentStoreError",
    "MongoConnectionError",
    "MongoConnectionManager",
    "MongoPersistenceError",
    "MongoQueryBuilder",
    "MongoQueryError",
    "PartitionedMongoRepository",
    "model_from_doc",
    "model_to_doc",
]

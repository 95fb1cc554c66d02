"""catalog-persistence-sqlalchemy — relational catalog evaluator."""

from .core.model_mapper import ModelMapper
from .core.models import CatalogBase, ProductModel
from .core.repository import SQLAlchemyRepository
from .exceptions import MappingError, SQLAlchemyPersistenceError
from .specifications import (
    DEFAULT_SQLA_REGISTRY,
    SQLAlchemyOperator,
    SQLAlchemyOperatorRegistry,
    build_default_sqla_registry,
    build_sqla_filter,
)

__all__ = [
    "CatalogBase",
    "DEFAULT_SQLA_REGISTRY",
    "MappingError",
    "ModelMapper",
    "ProductModel",
    "SQLAlchemyOperator",
    "SQLAlchemyOperatorRegistry",
    "SQLAlchemyPersistenceError",
    "SQLAlchemyRepository",
    "build_default_sqla_registry",
    "build_sqla_filter",
]

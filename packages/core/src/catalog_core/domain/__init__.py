from .entity import Entity
from .partitioning import IPartitioned, resolve_partition_key
from .product import Product
from .specification import IProjection, IQuerySpecification, ISpecification

__all__ = [
    "Entity",
    "IPartitioned",
    "IProjection",
    "IQuerySpecification",
    "ISpecification",
    "Product",
    "resolve_partition_key",
]

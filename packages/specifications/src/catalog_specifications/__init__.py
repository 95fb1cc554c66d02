"""catalog-specifications — query AST, builders and catalog specifications.

Criteria nodes evaluate in memory through an injected
:class:`MemoryOperatorRegistry` and serialise to the dictionary AST that
the relational and document-store compilers consume.
"""

from __future__ import annotations

from .ast import AttributeSpecification
from .base import (
    AndSpecification,
    BaseSpecification,
    NotSpecification,
    OrSpecification,
)
from .builder import SpecificationBuilder
from .canonical import canonical_values, title_case
from .catalog import (
    BrandListSpecification,
    ProductCountSpecification,
    ProductSpecification,
    TypeListSpecification,
    build_product_criteria,
)
from .evaluator import MemoryOperator, MemoryOperatorRegistry
from .exceptions import (
    FieldNotFoundError,
    OperatorNotFoundError,
    SpecificationError,
    ValidationError,
)
from .operators import SpecificationOperator
from .operators_memory import build_default_registry
from .query_params import CatalogQueryParams, CatalogSort
from .specification import ProjectedSpecification, Projection, Specification

__all__ = [
    # AST
    "AndSpecification",
    "AttributeSpecification",
    "BaseSpecification",
    "NotSpecification",
    "OrSpecification",
    "SpecificationOperator",
    # Building
    "SpecificationBuilder",
    "build_default_registry",
    "MemoryOperator",
    "MemoryOperatorRegistry",
    # Query specifications
    "Projection",
    "ProjectedSpecification",
    "Specification",
    # Catalog
    "BrandListSpecification",
    "CatalogQueryParams",
    "CatalogSort",
    "ProductCountSpecification",
    "ProductSpecification",
    "TypeListSpecification",
    "build_product_criteria",
    "canonical_values",
    "title_case",
    # Exceptions
    "FieldNotFoundError",
    "OperatorNotFoundError",
    "SpecificationError",
    "ValidationError",
]

"""
Product catalog specifications built from :class:`CatalogQueryParams`.

The predicate is::

    (brands empty OR brand IN brands)
    AND (types empty OR type IN types)
    AND (search empty OR name CONTAINS term OR name CONTAINS Term)

Empty clauses are left out of the tree entirely, so a request with no
filters carries no criteria and matches every product. Comparisons are
exact and case-sensitive; case tolerance comes from canonicalising the
inputs (see :mod:`.canonical`) since the document store cannot lower-case
an indexed field server-side.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from catalog_core.domain.product import Product

from .builder import SpecificationBuilder
from .canonical import canonical_values, title_case
from .operators import SpecificationOperator
from .query_params import CatalogSort
from .specification import ProjectedSpecification, Projection, Specification

if TYPE_CHECKING:
    from catalog_core.domain.specification import ISpecification

    from .evaluator import MemoryOperatorRegistry
    from .query_params import CatalogQueryParams

logger = logging.getLogger(__name__)


def build_product_criteria(
    params: CatalogQueryParams,
    *,
    registry: MemoryOperatorRegistry | None = None,
) -> ISpecification[Product] | None:
    """Build the catalog filter, or ``None`` when no filter was requested."""
    builder = SpecificationBuilder(registry)

    brands = canonical_values(params.brands)
    if brands:
        builder.where("brand", SpecificationOperator.IN, brands)

    types = canonical_values(title_case(t) for t in canonical_values(params.types))
    if types:
        builder.where("type", SpecificationOperator.IN, types)

    term = (params.search or "").strip()
    if term:
        variant = title_case(term)
        if variant == term:
            builder.where("name", SpecificationOperator.CONTAINS, term)
        else:
            (
                builder.or_group()
                .where("name", SpecificationOperator.CONTAINS, term)
                .where("name", SpecificationOperator.CONTAINS, variant)
                .end_group()
            )

    return builder.build_or_none()


class ProductSpecification(Specification[Product]):
    """Filtered, sorted and paged product listing."""

    def __init__(
        self,
        params: CatalogQueryParams,
        *,
        registry: MemoryOperatorRegistry | None = None,
    ) -> None:
        super().__init__(build_product_criteria(params, registry=registry))

        if params.sort is CatalogSort.PRICE_ASC:
            self.add_order_by("price")
        elif params.sort is CatalogSort.PRICE_DESC:
            self.add_order_by_descending("price")
        else:
            self.add_order_by("name")

        self.apply_paging(
            skip=params.page_size * (params.page_index - 1),
            take=params.page_size,
        )
        logger.debug("Built product specification: %r", self)


class ProductCountSpecification(Specification[Product]):
    """Same filter as :class:`ProductSpecification`, no ordering or paging."""

    def __init__(
        self,
        params: CatalogQueryParams,
        *,
        registry: MemoryOperatorRegistry | None = None,
    ) -> None:
        super().__init__(build_product_criteria(params, registry=registry))


class _DistinctFieldSpecification(ProjectedSpecification[Product, Any]):
    field_name: str

    def __init__(self) -> None:
        super().__init__(Projection.of(self.field_name))
        self.add_order_by(self.field_name)
        self.mark_distinct()


class BrandListSpecification(_DistinctFieldSpecification):
    """Sorted distinct brand names."""

    field_name = "brand"


class TypeListSpecification(_DistinctFieldSpecification):
    """Sorted distinct product type names."""

    field_name = "type"

"""Shared fixtures for catalog-core tests."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import pytest

from catalog_core.domain.product import Product


class PriceAbove:
    """Criteria matching products priced strictly above ``limit``."""

    def __init__(self, limit: float) -> None:
        self.limit = limit

    def is_satisfied_by(self, candidate: Product) -> bool:
        return candidate.price > self.limit

    def to_dict(self) -> dict[str, Any]:
        return {"op": ">", "attr": "price", "val": self.limit}


class FieldsProjection:
    def __init__(self, *fields: str) -> None:
        self.fields = fields

    def build(self, values: Any) -> Any:
        if len(self.fields) == 1:
            return values[self.fields[0]]
        return {f: values[f] for f in self.fields}

    def project(self, source: Any) -> Any:
        return self.build({f: getattr(source, f) for f in self.fields})


@dataclass
class QuerySpec:
    criteria: Any = None
    order_by: str | None = None
    order_by_descending: str | None = None
    skip: int = 0
    take: int = 0
    is_paging_enabled: bool = False
    select: Any = None
    is_distinct: bool = False


def _make_product(product_id: int, **overrides: Any) -> Product:
    data: dict[str, Any] = {
        "id": product_id,
        "name": f"Product {product_id}",
        "price": 10.0 * product_id,
        "type": "Boots",
        "brand": "Angular",
        "partition_key": "Angular",
    }
    data.update(overrides)
    return Product(**data)


@pytest.fixture
def make_product() -> Callable[..., Product]:
    """Factory for products with sensible defaults."""
    return _make_product


@pytest.fixture
def query_spec() -> type[QuerySpec]:
    return QuerySpec


@pytest.fixture
def price_above() -> type[PriceAbove]:
    return PriceAbove


@pytest.fixture
def fields_projection() -> type[FieldsProjection]:
    return FieldsProjection

"""Catalog specifications evaluated against the in-memory repository."""

from __future__ import annotations

import pytest

from catalog_core import InMemoryRepository
from catalog_specifications import (
    BrandListSpecification,
    CatalogQueryParams,
    ProductCountSpecification,
    ProductSpecification,
    TypeListSpecification,
    build_product_criteria,
)


@pytest.fixture
def repo(products):
    return InMemoryRepository(products)


def test_no_filters_means_no_criteria():
    assert build_product_criteria(CatalogQueryParams()) is None


def test_brands_are_trimmed_deduplicated_and_kept_as_is(registry):
    criteria = build_product_criteria(
        CatalogQueryParams(brands=[" React", "", "React", "angular "]),
        registry=registry,
    )

    assert criteria is not None
    assert criteria.to_dict() == {
        "op": "in",
        "attr": "brand",
        "val": ["React", "angular"],
    }


def test_types_are_title_cased():
    params = CatalogQueryParams(types="bOOTS, gloves,Boots")
    criteria = build_product_criteria(params)

    assert criteria is not None
    assert criteria.to_dict() == {
        "op": "in",
        "attr": "type",
        "val": ["Boots", "Gloves"],
    }


def test_search_checks_raw_term_and_title_variant():
    criteria = build_product_criteria(CatalogQueryParams(search="  ang "))

    assert criteria is not None
    assert criteria.to_dict() == {
        "op": "or",
        "conditions": [
            {"op": "contains", "attr": "name", "val": "ang"},
            {"op": "contains", "attr": "name", "val": "Ang"},
        ],
    }


def test_search_already_title_cased_is_checked_once():
    criteria = build_product_criteria(CatalogQueryParams(search="Boots"))

    assert criteria is not None
    assert criteria.to_dict() == {"op": "contains", "attr": "name", "val": "Boots"}


def test_all_clauses_are_anded():
    criteria = build_product_criteria(
        CatalogQueryParams(brands="React", types="hats", search="wool")
    )

    assert criteria is not None
    data = criteria.to_dict()
    assert data["op"] == "and"
    attrs = [c.get("attr", c["op"]) for c in data["conditions"]]
    assert attrs == ["brand", "type", "or"]


@pytest.mark.parametrize(
    ("sort", "order_by", "order_by_descending"),
    [
        ("priceAsc", "price", None),
        ("priceDesc", None, "price"),
        ("default", "name", None),
        ("somethingElse", "name", None),
        (None, "name", None),
    ],
)
def test_sort_mapping(sort, order_by, order_by_descending):
    spec = ProductSpecification(CatalogQueryParams(sort=sort))

    assert spec.order_by == order_by
    assert spec.order_by_descending == order_by_descending


@pytest.mark.parametrize(
    ("page_index", "page_size", "skip"), [(1, 6, 0), (3, 6, 12), (2, 5, 5)]
)
def test_paging_is_always_applied(page_index, page_size, skip):
    spec = ProductSpecification(
        CatalogQueryParams(page_index=page_index, page_size=page_size)
    )

    assert spec.is_paging_enabled is True
    assert spec.skip == skip
    assert spec.take == page_size


@pytest.mark.asyncio
async def test_brand_and_type_filter_sorted_by_price(repo):
    params = CatalogQueryParams(
        brands=["Angular", "React"],
        types=["Boots", "Gloves"],
        sort="priceAsc",
        page_size=50,
    )

    items = await repo.list(ProductSpecification(params))

    assert items
    assert all(p.brand in {"Angular", "React"} for p in items)
    assert all(p.type in {"Boots", "Gloves"} for p in items)
    prices = [p.price for p in items]
    assert prices == sorted(prices)
    assert {p.id for p in items} == {12, 13, 17, 18, 19, 20}


@pytest.mark.asyncio
async def test_search_is_case_tolerant_through_variants(repo):
    params = CatalogQueryParams(search="ang", page_size=50)
    items = await repo.list(ProductSpecification(params))

    names = [p.name for p in items]
    assert "Angular Speedster Board 2000" in names
    assert "Tangerine React Boots" in names
    assert "BANG Loud Boots" not in names
    assert names == sorted(names)


@pytest.mark.asyncio
async def test_page_is_bounded_and_count_ignores_paging(repo):
    params = CatalogQueryParams(types="boots", page_index=2, page_size=3)

    page = await repo.list(ProductSpecification(params))
    total = await repo.count(ProductCountSpecification(params))

    assert len(page) == 3
    assert total == 7
    assert [p.name for p in page] == [
        "Core Purple Boots",
        "Core Red Boots",
        "Redis Red Boots",
    ]


@pytest.mark.asyncio
async def test_page_past_the_end_is_empty(repo):
    params = CatalogQueryParams(page_index=10, page_size=6)
    assert await repo.list(ProductSpecification(params)) == []


@pytest.mark.asyncio
async def test_brand_and_type_lists_are_distinct_and_sorted(repo):
    brands = await repo.list_projected(BrandListSpecification())
    types = await repo.list_projected(TypeListSpecification())

    assert brands == ["Angular", "NetCore", "React", "Redis", "Typescript", "Vue"]
    assert types == ["Boards", "Boots", "Gloves", "Hats"]

"""PartitionedMongoRepository against mongomock."""

from __future__ import annotations

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo.errors import OperationFailure, ServerSelectionTimeoutError

from catalog_core import PartitionKeyImmutableError, Product, StoreError
from catalog_persistence_mongo import DocumentStoreError, PartitionedMongoRepository
from catalog_specifications import (
    BrandListSpecification,
    CatalogQueryParams,
    ProductCountSpecification,
    ProductSpecification,
    Projection,
    Specification,
    SpecificationBuilder,
    SpecificationOperator,
    TypeListSpecification,
)


def _product(pid: int, partition_key: str | None = "Vue", **overrides) -> Product:
    data = {
        "id": pid,
        "name": f"Product {pid}",
        "price": 5.0,
        "type": "Hats",
        "brand": "Vue",
        "partition_key": partition_key,
    }
    data.update(overrides)
    return Product(**data)


# -- queries ---------------------------------------------------------------


@pytest.mark.asyncio
async def test_list_filters_by_brand_and_type_sorted_by_price(repo):
    params = CatalogQueryParams(
        brands=["Angular", "React"], types=["Boots", "Gloves"], sort="priceAsc"
    )

    products = await repo.list(ProductSpecification(params))

    assert {p.id for p in products} == {12, 13, 17, 18, 19, 20}
    prices = [p.price for p in products]
    assert prices == sorted(prices)


@pytest.mark.asyncio
async def test_type_filter_is_title_cased(repo):
    params = CatalogQueryParams(types=[" hATS ", "hats"], page_size=10)

    products = await repo.list(ProductSpecification(params))

    assert [p.name for p in products] == [
        "Core Blue Hat",
        "Green React Woolen Hat",
        "Purple React Woolen Hat",
    ]


@pytest.mark.asyncio
async def test_search_is_case_sensitive_with_title_case_variant(repo):
    params = CatalogQueryParams(search="ang", page_size=20)

    products = await repo.list(ProductSpecification(params))

    assert {p.id for p in products} == {1, 2, 13, 17, 18, 20}
    assert 19 not in {p.id for p in products}


@pytest.mark.asyncio
async def test_paging_and_count(repo):
    params = CatalogQueryParams(types=["boots"], page_index=2, page_size=3)

    page = await repo.list(ProductSpecification(params))
    total = await repo.count(ProductCountSpecification(params))

    assert [p.name for p in page] == [
        "Core Purple Boots",
        "Core Red Boots",
        "Redis Red Boots",
    ]
    assert total == 7
    assert await repo.count(ProductSpecification(params)) == 7


@pytest.mark.asyncio
async def test_sort_descending_breaks_ties_by_id(repo):
    params = CatalogQueryParams(types=["boards"], sort="priceDesc")

    products = await repo.list(ProductSpecification(params))

    assert [p.id for p in products] == [4, 5, 1, 3, 2, 6]


@pytest.mark.asyncio
async def test_empty_specification_lists_all_by_id(repo):
    assert [p.id for p in await repo.list(Specification())] == list(range(1, 21))
    assert [p.id for p in await repo.list_all()] == list(range(1, 21))


@pytest.mark.asyncio
async def test_stream_yields_matching_documents(repo):
    criteria = SpecificationBuilder().where("type", SpecificationOperator.EQ, "Hats").build()

    streamed = [
        p async for p in repo.list(Specification(criteria)).stream(batch_size=2)
    ]

    assert [p.id for p in streamed] == [7, 8, 9]


@pytest.mark.asyncio
async def test_brand_and_type_lists(repo):
    brands = await repo.list_projected(BrandListSpecification())
    types = await repo.list_projected(TypeListSpecification())

    assert brands == ["Angular", "NetCore", "React", "Redis", "Typescript", "Vue"]
    assert types == ["Boards", "Boots", "Gloves", "Hats"]


@pytest.mark.asyncio
async def test_projection_is_applied_after_paging(repo):
    spec = (
        Specification()
        .add_order_by("price")
        .apply_paging(skip=0, take=2)
        .apply_projection(Projection.of("id", "name"))
    )

    rows = await repo.list_projected(spec)
    streamed = [row async for row in repo.list_projected(spec).stream()]

    assert rows == [
        {"id": 8, "name": "Green React Woolen Hat"},
        {"id": 7, "name": "Core Blue Hat"},
    ]
    assert streamed == rows
    assert await repo.get_projected_with_spec(spec) == rows[0]


@pytest.mark.asyncio
async def test_get_entity_with_spec(repo):
    priciest = await repo.get_entity_with_spec(
        Specification().add_order_by_descending("price")
    )

    assert priciest is not None
    assert priciest.id == 4


@pytest.mark.asyncio
async def test_get_by_id_reads_across_partitions(repo, caplog):
    with caplog.at_level(logging.DEBUG, logger="catalog_persistence_mongo.repository"):
        product = await repo.get_by_id(15)

    assert product is not None
    assert product.brand == "NetCore"
    assert product.price == 189.99
    assert "Cross-partition read" in caplog.text
    assert await repo.get_by_id(404) is None


@pytest.mark.asyncio
async def test_exists(repo):
    assert await repo.exists(1) is True
    assert await repo.exists(404) is False


# -- writes ----------------------------------------------------------------


@pytest.mark.asyncio
async def test_save_all_with_nothing_staged_returns_false(repo):
    assert await repo.save_all() is False


@pytest.mark.asyncio
async def test_add_only_stages_until_save_all(empty_repo, mongo_connection):
    empty_repo.add(_product(1))
    assert await empty_repo.exists(1) is False

    assert await empty_repo.save_all() is True

    doc = await mongo_connection.database.get_collection("products").find_one(
        {"_id": 1}
    )
    assert doc["partition_key"] == "Vue"
    assert doc["name"] == "Product 1"
    assert empty_repo.degraded_writes == []


@pytest.mark.asyncio
async def test_update_replaces_document_in_its_partition(repo):
    product = await repo.get_by_id(10)
    assert product is not None
    product.quantity_in_stock = 0

    repo.update(product)
    assert await repo.save_all() is True

    stored = await repo.get_by_id(10)
    assert stored is not None
    assert stored.quantity_in_stock == 0
    assert await repo.count(Specification()) == 20


@pytest.mark.asyncio
async def test_update_with_new_partition_key_rejected_after_read(repo):
    product = await repo.get_by_id(17)
    assert product is not None

    with pytest.raises(PartitionKeyImmutableError, match="partition key is immutable"):
        repo.update(product.model_copy(update={"partition_key": "React"}))

    assert await repo.save_all() is False


@pytest.mark.asyncio
async def test_update_with_new_partition_key_rejected_on_save(
    mongo_connection, products_collection
):
    repo = PartitionedMongoRepository(mongo_connection, Product)
    repo.add(_product(30))
    repo.update(
        _product(17, partition_key="React", name="Angular Purple Boots", brand="React")
    )

    with pytest.raises(PartitionKeyImmutableError):
        await repo.save_all()

    stored = await repo.get_by_id(17)
    assert stored is not None
    assert stored.partition_key == "Angular"
    assert await repo.exists(30) is False
    assert await repo.save_all() is False


@pytest.mark.asyncio
async def test_delete_twice_succeeds_both_times(repo):
    product = await repo.get_by_id(3)
    assert product is not None

    repo.remove(product)
    assert await repo.save_all() is True
    repo.remove(product)
    assert await repo.save_all() is False

    assert await repo.get_by_id(3) is None


@pytest.mark.asyncio
async def test_adds_run_before_deletes(empty_repo):
    product = _product(5)

    empty_repo.add(product)
    empty_repo.remove(product)
    assert await empty_repo.save_all() is True

    assert await empty_repo.exists(5) is False


@pytest.mark.asyncio
async def test_missing_partition_key_is_a_degraded_write(empty_repo, caplog):
    with caplog.at_level(logging.WARNING):
        empty_repo.add(_product(7, partition_key=None))
        assert await empty_repo.save_all() is True

    assert empty_repo.degraded_writes == [7]
    assert "has no partition key" in caplog.text
    stored = await empty_repo.get_by_id(7)
    assert stored is not None
    assert stored.partition_key is None


@pytest.mark.asyncio
async def test_fallback_partition_key_is_used_when_configured(
    fallback_repo, mongo_connection
):
    fallback_repo.add(_product(8, partition_key=None))
    assert await fallback_repo.save_all() is True

    doc = await mongo_connection.database.get_collection("products").find_one(
        {"_id": 8}
    )
    assert doc["partition_key"] == "unassigned"
    assert fallback_repo.degraded_writes == []


@pytest.mark.asyncio
async def test_driver_failure_is_wrapped_and_batch_cleared(empty_repo, monkeypatch):
    coll = MagicMock()
    coll.replace_one = AsyncMock(side_effect=OperationFailure("write rejected"))
    monkeypatch.setattr(empty_repo, "_collection", lambda: coll)

    empty_repo.add(_product(9))
    with pytest.raises(DocumentStoreError, match="write rejected"):
        await empty_repo.save_all()

    assert await empty_repo.save_all() is False


@pytest.mark.asyncio
async def test_read_failures_surface_as_store_errors(repo, monkeypatch):
    error = ServerSelectionTimeoutError("store down")
    coll = MagicMock()
    coll.find_one = AsyncMock(side_effect=error)
    coll.count_documents = AsyncMock(side_effect=error)
    coll.aggregate = MagicMock(side_effect=error)
    coll.find = MagicMock(side_effect=error)
    monkeypatch.setattr(repo, "_collection", lambda: coll)
    spec = ProductSpecification(CatalogQueryParams(brands=["Vue"]))

    with pytest.raises(DocumentStoreError, match="store down"):
        await repo.count(spec)
    with pytest.raises(StoreError):
        await repo.get_by_id(1)
    with pytest.raises(StoreError):
        await repo.exists(1)
    with pytest.raises(StoreError):
        await repo.list(spec)
    with pytest.raises(StoreError):
        await repo.list_projected(BrandListSpecification())
    with pytest.raises(StoreError):
        await repo.list_all()
    with pytest.raises(StoreError):
        async for _ in repo.list(spec).stream():
            pass

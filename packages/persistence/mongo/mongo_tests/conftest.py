"""Test configuration for the MongoDB catalog evaluator."""

import pytest
from mongomock_motor import AsyncMongoMockClient

from catalog_core import CatalogConfig, Product
from catalog_persistence_mongo import (
    MongoConnectionManager,
    PartitionedMongoRepository,
    model_to_doc,
)

pytest_plugins = ["pytest_asyncio"]

PRODUCT_ROWS = [
    (1, "Angular Speedster Board 2000", 200.0, "Boards", "Angular"),
    (2, "Green Angular Board 3000", 150.0, "Boards", "Angular"),
    (3, "Core Board Speed Rush 3", 180.0, "Boards", "NetCore"),
    (4, "Net Core Super Board", 300.0, "Boards", "NetCore"),
    (5, "React Board Super Whizzy Fast", 250.0, "Boards", "React"),
    (6, "Typescript Entry Board", 120.0, "Boards", "Typescript"),
    (7, "Core Blue Hat", 10.0, "Hats", "NetCore"),
    (8, "Green React Woolen Hat", 8.0, "Hats", "React"),
    (9, "Purple React Woolen Hat", 15.0, "Hats", "React"),
    (10, "Blue Code Gloves", 18.0, "Gloves", "Vue"),
    (11, "Green Code Gloves", 15.0, "Gloves", "Vue"),
    (12, "Purple React Gloves", 16.0, "Gloves", "React"),
    (13, "Green Angular Gloves", 14.0, "Gloves", "Angular"),
    (14, "Redis Red Boots", 250.0, "Boots", "Redis"),
    (15, "Core Red Boots", 189.99, "Boots", "NetCore"),
    (16, "Core Purple Boots", 199.99, "Boots", "NetCore"),
    (17, "Angular Purple Boots", 150.0, "Boots", "Angular"),
    (18, "Angular Blue Boots", 180.0, "Boots", "Angular"),
    (19, "BANG Loud Boots", 99.0, "Boots", "React"),
    (20, "Tangerine React Boots", 120.0, "Boots", "React"),
]


@pytest.fixture
async def mongo_connection():
    """Connection manager backed by mongomock instead of a server."""
    connection = MongoConnectionManager.__new__(MongoConnectionManager)
    connection._client = AsyncMongoMockClient(default_database_name="test_db")
    connection._database = "test_db"
    connection._url = "mongodb://mock:27017"
    yield connection
    connection._client = None


@pytest.fixture
def catalog_products() -> list[Product]:
    return [
        Product(
            id=pid,
            name=name,
            price=price,
            type=type_,
            brand=brand,
            quantity_in_stock=pid,
            partition_key=brand,
        )
        for pid, name, price, type_, brand in PRODUCT_ROWS
    ]


@pytest.fixture
async def products_collection(mongo_connection, catalog_products):
    coll = mongo_connection.database.get_collection("products")
    await coll.insert_many([model_to_doc(p) for p in catalog_products])
    return coll


@pytest.fixture
def repo(mongo_connection, products_collection):
    return PartitionedMongoRepository(mongo_connection, Product)


@pytest.fixture
def empty_repo(mongo_connection):
    return PartitionedMongoRepository(mongo_connection, Product)


@pytest.fixture
def fallback_repo(mongo_connection):
    return PartitionedMongoRepository(
        mongo_connection,
        Product,
        config=CatalogConfig(fallback_partition_key="unassigned"),
    )

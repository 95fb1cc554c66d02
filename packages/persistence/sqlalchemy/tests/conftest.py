"""Shared fixtures for the relational evaluator tests."""

from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from catalog_core import Product
from catalog_persistence_sqlalchemy import CatalogBase, ProductModel, SQLAlchemyRepository

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
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(CatalogBase.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
async def seeded_session(session: AsyncSession) -> AsyncSession:
    session.add_all(
        ProductModel(
            id=pid,
            name=name,
            description="",
            price=price,
            picture_url="",
            type=type_,
            brand=brand,
            quantity_in_stock=pid,
            partition_key=brand,
        )
        for pid, name, price, type_, brand in PRODUCT_ROWS
    )
    await session.commit()
    session.expunge_all()
    return session


@pytest.fixture
def repo(seeded_session: AsyncSession) -> SQLAlchemyRepository[Product]:
    return SQLAlchemyRepository(seeded_session, Product, ProductModel)


@pytest.fixture
def empty_repo(session: AsyncSession) -> SQLAlchemyRepository[Product]:
    return SQLAlchemyRepository(session, Product, ProductModel)

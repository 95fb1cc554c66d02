from __future__ import annotations

from sqlalchemy import Integer, Numeric, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class CatalogBase(DeclarativeBase):
    """Declarative base for the catalog tables."""


class ProductModel(CatalogBase):
    """Relational row for :class:`catalog_core.domain.Product`."""

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(100), index=True)
    description: Mapped[str] = mapped_column(String(500), default="")
    price: Mapped[float] = mapped_column(Numeric(18, 2, asdecimal=False))
    picture_url: Mapped[str] = mapped_column(String, default="")
    type: Mapped[str] = mapped_column(String(50), index=True)
    brand: Mapped[str] = mapped_column(String(50), index=True)
    quantity_in_stock: Mapped[int] = mapped_column(Integer, default=0)
    partition_key: Mapped[str | None] = mapped_column(String(100), nullable=True)

"""Product — the catalog entity."""

from __future__ import annotations

from .entity import Entity


class Product(Entity):
    """A catalog product.

    ``price`` is a float: the document store keeps numbers as doubles and
    both stores must order by the same value.
    """

    name: str
    description: str = ""
    price: float
    picture_url: str = ""
    type: str
    brand: str
    quantity_in_stock: int = 0
    partition_key: str | None = None

    def get_partition_key(self) -> str | None:
        return self.partition_key

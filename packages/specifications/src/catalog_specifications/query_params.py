"""Inbound catalog query parameters."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CatalogSort(str, Enum):
    DEFAULT = "default"
    PRICE_ASC = "priceAsc"
    PRICE_DESC = "priceDesc"

    @classmethod
    def parse(cls, value: str | None) -> CatalogSort:
        """Case-insensitive lookup; unknown or missing values map to DEFAULT."""
        if value is None:
            return cls.DEFAULT
        wanted = value.strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        return cls.DEFAULT


class CatalogQueryParams(BaseModel):
    """
    Filter, sort and paging request for the product catalog.

    ``brands`` and ``types`` accept either a list or a comma separated
    string (``"Angular,React"``). Values are kept as supplied; trimming and
    case canonicalisation happen when the specification is built.
    """

    model_config = ConfigDict(frozen=True)

    brands: tuple[str, ...] = ()
    types: tuple[str, ...] = ()
    search: str | None = None
    sort: CatalogSort = CatalogSort.DEFAULT
    page_index: int = Field(default=1, ge=1)
    page_size: int = Field(default=6, ge=1)

    @field_validator("brands", "types", mode="before")
    @classmethod
    def _split_csv(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            return tuple(value.split(","))
        return value

    @field_validator("sort", mode="before")
    @classmethod
    def _parse_sort(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return CatalogSort.parse(value)
        return value

"""Canonicalisation of user-supplied catalog filter values."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


def title_case(value: str) -> str:
    """First character upper case, the rest lower case (``"bOOTS"`` -> ``"Boots"``)."""
    return value[:1].upper() + value[1:].lower()


def canonical_values(values: Iterable[str] | None) -> list[str]:
    """Trim, drop empties and de-duplicate, keeping first-occurrence order."""
    result: list[str] = []
    for raw in values or ():
        value = raw.strip()
        if value and value not in result:
            result.append(value)
    return result

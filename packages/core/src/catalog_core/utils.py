"""Helpers shared by repositories that finish a query in memory."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .domain.specification import IQuerySpecification

T = TypeVar("T")


def read_field(source: Any, field: str) -> Any:
    """Read *field* from a mapping or an object."""
    if isinstance(source, dict):
        return source.get(field)
    return getattr(source, field, None)


def _sort_key(field: str) -> Any:
    # None sorts first, as NULLs do in ascending SQL / MongoDB order
    def key(item: Any) -> tuple[bool, Any]:
        value = read_field(item, field)
        return (value is not None, value)

    return key


def order_items(items: Iterable[T], spec: IQuerySpecification[Any]) -> list[T]:
    """Order *items* the way the repositories do.

    ``order_by`` ascending, else ``order_by_descending``, else by id; equal
    keys keep id order.
    """
    ordered = sorted(items, key=_sort_key("id"))
    if spec.order_by is not None:
        ordered.sort(key=_sort_key(spec.order_by))
    elif spec.order_by_descending is not None:
        ordered.sort(key=_sort_key(spec.order_by_descending), reverse=True)
    return ordered


def page_items(items: Sequence[T], spec: IQuerySpecification[Any]) -> list[T]:
    """Apply skip/take when paging is enabled."""
    if not spec.is_paging_enabled:
        return list(items)
    return list(items[spec.skip : spec.skip + spec.take])


def distinct(items: Iterable[T]) -> list[T]:
    """Drop repeated items, keeping the first occurrence.

    Unhashable items (dict projections) are compared by equality.
    """
    seen: set[Any] = set()
    seen_unhashable: list[Any] = []
    result: list[T] = []
    for item in items:
        try:
            if item in seen:
                continue
            seen.add(item)
        except TypeError:
            if item in seen_unhashable:
                continue
            seen_unhashable.append(item)
        result.append(item)
    return result


def project_items(items: Iterable[Any], spec: IQuerySpecification[Any]) -> list[Any]:
    """Apply the specification's projection and distinct flag.

    Without a projection the items are returned unchanged.
    """
    projected = (
        [spec.select.project(item) for item in items]
        if spec.select is not None
        else list(items)
    )
    return distinct(projected) if spec.is_distinct else projected

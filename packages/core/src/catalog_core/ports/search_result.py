"""
SearchResult — lazy query result: ``await`` it for a list, or ``.stream()``.

Usage::

    # Batch mode
    products = await repo.list(spec)

    # Stream mode
    async for product in repo.list(spec).stream(batch_size=100):
        process(product)

Nothing touches the store when the result is created. The query runs
when the caller awaits it or starts iterating the stream, and it runs
again on every await.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable, Coroutine, Generator

T = TypeVar("T")


class SearchResult(Generic[T]):
    """
    Deferred, re-runnable query result.

    Parameters
    ----------
    list_fn:
        Zero-argument async callable that materialises the whole result.
    stream_fn:
        Callable ``(batch_size: int | None) -> AsyncIterator[T]``.
    """

    __slots__ = ("_list_fn", "_stream_fn")

    def __init__(
        self,
        list_fn: Callable[[], Coroutine[Any, Any, list[T]]],
        stream_fn: Callable[[int | None], AsyncIterator[T]],
    ) -> None:
        self._list_fn = list_fn
        self._stream_fn = stream_fn

    def __await__(self) -> Generator[Any, None, list[T]]:
        return self._list_fn().__await__()

    def stream(self, *, batch_size: int | None = None) -> AsyncIterator[T]:
        """Iterate the result without holding it all in memory.

        Args:
            batch_size: Items fetched per store round-trip. ``None`` lets
                the repository use its configured default.
        """
        return self._stream_fn(batch_size)

    async def first(self) -> T | None:
        """Return the first item, or ``None`` for an empty result."""
        items = await self._list_fn()
        return items[0] if items else None


def stream_from_list(
    list_fn: Callable[[], Coroutine[Any, Any, list[T]]],
) -> Callable[[int | None], AsyncIterator[T]]:
    """Build a ``stream_fn`` that materialises ``list_fn`` and yields from it.

    For stores (or pipeline stages) that cannot stream natively.
    """

    async def stream_fn(batch_size: int | None) -> AsyncIterator[T]:  # noqa: ARG001
        for item in await list_fn():
            yield item

    return stream_fn

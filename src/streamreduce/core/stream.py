"""
This module provides the `reduce` factory and the `Stream` wrapper, the two
ways of turning an (async) iterable into a `Reducer`.
"""
from __future__ import annotations

from typing import Any, AsyncIterable, AsyncIterator, Callable, Generic, Iterable, TypeVar, Union

from typeguard import typechecked

from .reducer import Reducer
from .utils import ensure_async_iterable

T = TypeVar("T")


@typechecked
def reduce(
    source: Union[AsyncIterable[Any], Iterable[Any]],
    merge: Callable[[Any, Any], Any],
) -> Reducer:
    """
    Creates a `Reducer` that folds ``source`` with ``merge``, seeded by its first item.

    Nothing is read from the source and ``merge`` is not called until the
    returned reducer is awaited.

    Args:
        source: An async iterable, or a plain iterable which is adapted to one.
        merge: Called as ``merge(accumulator, item)`` for every item after
            the first. It returns an awaitable resolving to the new
            accumulator, or the new accumulator itself.

    Returns:
        An awaitable resolving to ``None`` if the source is empty, otherwise
        to the accumulated value.

    Example:
        >>> async def add(a, b):
        ...     return a + b
        >>> await reduce([1, 2, 3, 4, 5], add)
        15
    """
    return Reducer(ensure_async_iterable(source), merge)


class Stream(Generic[T]):
    """
    Wraps an async (or plain) iterable so that it can be reduced in place.

    A Stream is itself async iterable and hands out the wrapped source's
    iterator, so it can be used anywhere the source could.

    Example:
        >>> total = await Stream(numbers()).reduce(add)
    """

    @typechecked
    def __init__(self, source: Union[AsyncIterable[Any], Iterable[Any]]):
        self._source = ensure_async_iterable(source)

    def __repr__(self) -> str:
        return f"Stream(source={self._source!r})"

    def __aiter__(self) -> AsyncIterator[T]:
        return self._source.__aiter__()

    @typechecked
    def reduce(self, merge: Callable[[Any, Any], Any]) -> Reducer:
        """Creates a `Reducer` over this stream. See `streamreduce.reduce`."""
        return Reducer(self._source, merge)

import asyncio
from typing import Any, AsyncIterable, AsyncIterator, Awaitable, Iterable, TypeVar, Union

T = TypeVar("T")


async def _to_async(iterable: Iterable[Any]) -> AsyncIterator[Any]:
    for item in iterable:
        yield item


def ensure_async_iterable(obj: Union[AsyncIterable[T], Iterable[T]]) -> AsyncIterable[T]:
    """
    Ensures that the given object can be consumed with `async for`.

    Async iterables are returned as is. Plain iterables are wrapped in an
    async generator that yields their items in order without suspending.
    """
    if hasattr(obj, "__aiter__"):
        return obj
    if hasattr(obj, "__iter__"):
        return _to_async(obj)
    raise TypeError(f"{type(obj).__name__!r} object is neither iterable nor async iterable")


def block_on(awaitable: Awaitable[T]) -> T:
    """
    Runs an awaitable to completion from synchronous code and returns its result.

    A fresh event loop is created for the call and closed afterwards.

    .. warning::
        This cannot be called from a running event loop. Use `await` there.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        pass
    else:
        raise RuntimeError(
            "block_on() cannot be called from a running event loop. "
            "Await the reducer instead."
        )

    async def _main() -> T:
        return await awaitable

    return asyncio.run(_main())

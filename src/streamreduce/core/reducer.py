"""
This module defines the `Reducer`, an awaitable that folds an async stream
into a single value without a seed.

The first item produced by the source becomes the accumulator. Every later
item is merged into it by calling ``merge(accumulator, item)``, which returns
an awaitable (or a plain value) resolving to the new accumulator. Awaiting
the reducer yields ``None`` for an empty source, otherwise the accumulated
value.

The reducer drives its sub-operations by hand instead of using an
``async def`` body: it is its own ``__await__`` iterator, and every call to
``send`` advances whichever operation is in flight (the source's next item
or the current merge) until one of them suspends or the source is
exhausted.
"""
from __future__ import annotations

import enum
import inspect
import time
from typing import Any, AsyncIterable, AsyncIterator, Callable, Generic, Iterator, Optional, Tuple, TypeVar

from .errors import PolledAfterCompletionError
from .log import get_logger

T = TypeVar("T")


class _Empty:
    def __repr__(self) -> str:
        return "<empty>"


# Marks an empty accumulator, so that ``None`` stays a legal item.
_EMPTY: Any = _Empty()


class ReducerState(enum.Enum):
    """The phases a `Reducer` moves through while it is being resumed."""

    AWAITING_FIRST_ITEM = "awaiting_first_item"
    AWAITING_NEXT_ITEM = "awaiting_next_item"
    AWAITING_MERGE = "awaiting_merge"
    DONE = "done"


def _advance(iterator: Iterator[Any], value: Any = None, error: Optional[BaseException] = None) -> Tuple[bool, Any]:
    """
    Resumes a suspended ``__await__`` iterator once.

    Returns ``(True, result)`` when the operation finished and
    ``(False, token)`` when it suspended again, where ``token`` must be
    handed to whoever drives the outermost task.
    """
    try:
        if error is not None:
            throw = getattr(iterator, "throw", None)
            if throw is None:
                raise error
            token = throw(error)
        elif value is None:
            token = next(iterator)
        else:
            token = iterator.send(value)
    except StopIteration as stop:
        return True, stop.value
    return False, token


def _close(iterator: Optional[Iterator[Any]]) -> None:
    close = getattr(iterator, "close", None)
    if close is not None:
        close()


class Reducer(Generic[T]):
    """
    A seedless, sequential fold over an async iterable.

    Users normally obtain a Reducer from `streamreduce.reduce` or
    `Stream.reduce` and simply ``await`` it. Constructing one does no work:
    neither the source nor ``merge`` is touched until the first resumption.

    At most one asynchronous operation is outstanding at any time. The
    source is never asked for another item while a merge is pending, and
    ``merge`` is called exactly once per item after the first, strictly in
    source order.

    A Reducer can be awaited only once. Resuming it after it produced its
    result raises `PolledAfterCompletionError`.

    Attributes:
        state: The current `ReducerState`.
        items_seen: How many items the source has produced so far.
        merges_started: How many times ``merge`` has been called so far.
    """

    def __init__(self, source: AsyncIterable[T], merge: Callable[[T, T], Any]):
        self._source = source
        self._merge = merge
        self._iterator: Optional[AsyncIterator[T]] = None
        self._accumulator: Any = _EMPTY
        self._pending_merge: Optional[Iterator[Any]] = None
        self._pending_next: Optional[Iterator[Any]] = None
        self._state = ReducerState.AWAITING_FIRST_ITEM
        self._items_seen = 0
        self._merges_started = 0
        self._started_at: Optional[float] = None
        self._logger = get_logger("streamreduce.reducer")

    @property
    def state(self) -> ReducerState:
        return self._state

    @property
    def items_seen(self) -> int:
        return self._items_seen

    @property
    def merges_started(self) -> int:
        return self._merges_started

    def __repr__(self) -> str:
        return (
            f"Reducer(state={self._state.value}, source={self._source!r}, "
            f"accumulator={self._accumulator!r}, pending_merge={self._pending_merge!r})"
        )

    # --- Awaitable / iterator protocol ---

    def __await__(self) -> "Reducer[T]":
        return self

    def __iter__(self) -> "Reducer[T]":
        return self

    def __next__(self) -> Any:
        return self.send(None)

    def send(self, value: Any) -> Any:
        """
        Resumes the reducer once.

        ``value`` is forwarded to the sub-operation that was suspended on
        the previous call. Returns the suspension token of whichever
        sub-operation blocks next, or raises ``StopIteration`` carrying the
        final result.
        """
        return self._resume(value, None)

    def throw(self, typ: Any, val: Any = None, tb: Any = None) -> Any:
        """
        Raises an exception (e.g. a cancellation) inside the suspended sub-operation.

        On a finished reducer the exception is raised straight back to the
        caller, as it would be for a finished generator.
        """
        if isinstance(typ, BaseException):
            error = typ
        elif val is None:
            error = typ()
        elif isinstance(val, BaseException):
            error = val
        else:
            error = typ(val)
        if tb is not None:
            error = error.with_traceback(tb)
        if self._state is ReducerState.DONE:
            raise error
        return self._resume(None, error)

    def close(self) -> None:
        """
        Abandons the reduction.

        Any in-flight next-item or merge operation is closed along with the
        reducer, and the partial accumulator is discarded.
        """
        if self._state is ReducerState.DONE:
            return
        self._logger.debug(
            "reduce_released",
            state=self._state.value,
            items=self._items_seen,
            merges=self._merges_started,
        )
        self._release()

    # --- State machine ---

    def _resume(self, value: Any, error: Optional[BaseException]) -> Any:
        if self._state is ReducerState.DONE:
            raise PolledAfterCompletionError(repr(self))
        if self._started_at is None:
            self._started_at = time.monotonic()

        try:
            finished, payload = self._drive(value, error)
        except BaseException as e:
            # Cancellation and GeneratorExit are not failures of the reduction
            if isinstance(e, Exception):
                self._logger.warning(
                    "reduce_failed",
                    state=self._state.value,
                    items=self._items_seen,
                    merges=self._merges_started,
                    error=repr(e),
                )
            self._release()
            # Let out of send(), StopIteration would read as a normal result
            if isinstance(e, StopIteration):
                raise RuntimeError("merge or source raised StopIteration") from e
            raise

        if not finished:
            return payload

        self._logger.debug(
            "reduce_finished",
            items=self._items_seen,
            merges=self._merges_started,
            duration=round(time.monotonic() - self._started_at, 4),
        )
        self._release()
        raise StopIteration(payload)

    def _drive(self, value: Any, error: Optional[BaseException]) -> Tuple[bool, Any]:
        """
        Makes as much progress as possible within one resumption.

        Returns ``(False, token)`` on suspension and ``(True, result)`` once
        the source is exhausted. ``value`` and ``error`` belong to the
        operation that was suspended when this resumption started and are
        consumed by the first operation advanced.
        """
        while True:
            if self._state is ReducerState.AWAITING_MERGE:
                ready, out = _advance(self._pending_merge, value, error)
                value = error = None
                if not ready:
                    return False, out
                self._pending_merge = None
                self._accumulator = out
                self._state = ReducerState.AWAITING_NEXT_ITEM
                self._logger.debug("merge_resolved", merge=self._merges_started)

            # The same __anext__() awaitable is kept across suspensions so
            # that no item is requested twice.
            if self._iterator is None:
                self._iterator = self._source.__aiter__()
            try:
                # A plain ``def __anext__`` may raise StopAsyncIteration itself
                if self._pending_next is None:
                    self._pending_next = self._iterator.__anext__().__await__()
                ready, out = _advance(self._pending_next, value, error)
            except StopAsyncIteration:
                self._pending_next = None
                if self._accumulator is _EMPTY:
                    return True, None
                accumulator, self._accumulator = self._accumulator, _EMPTY
                return True, accumulator
            value = error = None
            if not ready:
                return False, out
            self._pending_next = None
            self._items_seen += 1
            self._logger.debug("item_received", item=self._items_seen)

            if self._state is ReducerState.AWAITING_FIRST_ITEM:
                self._accumulator = out
                self._state = ReducerState.AWAITING_NEXT_ITEM
                continue

            accumulator, self._accumulator = self._accumulator, _EMPTY
            self._merges_started += 1
            self._logger.debug("merge_started", merge=self._merges_started)
            result = self._merge(accumulator, out)
            if inspect.isawaitable(result):
                self._pending_merge = result.__await__()
                self._state = ReducerState.AWAITING_MERGE
            else:
                self._accumulator = result

    def _release(self) -> None:
        _close(self._pending_next)
        _close(self._pending_merge)
        self._pending_next = None
        self._pending_merge = None
        self._accumulator = _EMPTY
        self._iterator = None
        self._state = ReducerState.DONE

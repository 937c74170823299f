# streamreduce.core
# This package contains the reducer state machine and the helpers it
# is built from.

from .errors import StreamReduceError, PolledAfterCompletionError
from .reducer import Reducer, ReducerState
from .stream import Stream, reduce
from .utils import block_on, ensure_async_iterable

__all__ = [
    "Reducer",
    "ReducerState",
    "Stream",
    "reduce",
    "block_on",
    "ensure_async_iterable",
    "StreamReduceError",
    "PolledAfterCompletionError",
]

from __future__ import annotations


class StreamReduceError(Exception):
    """Base class for all exceptions raised by the streamreduce library."""

    pass


class PolledAfterCompletionError(StreamReduceError, RuntimeError):
    """
    Raised when a `Reducer` is resumed after it already produced its result.

    A finished reducer has released its source and accumulator, so there is
    nothing meaningful left to return. Resuming it is a bug in the caller
    (typically awaiting the same reducer twice), not a runtime condition.
    """

    def __init__(self, reducer_repr: str):
        self.reducer_repr = reducer_repr
        super().__init__(f"Reducer polled after completion: {reducer_repr}")

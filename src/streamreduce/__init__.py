from .core.reducer import Reducer, ReducerState
from .core.stream import Stream, reduce
from .core.errors import StreamReduceError, PolledAfterCompletionError
from .core.utils import block_on, ensure_async_iterable
from .core.log import configure_logging, get_logger
from .config import Config, load_config, configure_logging_from

__all__ = [
    "Reducer",
    "ReducerState",
    "Stream",
    "reduce",
    "block_on",
    "ensure_async_iterable",
    "StreamReduceError",
    "PolledAfterCompletionError",
    "configure_logging",
    "get_logger",
    "Config",
    "load_config",
    "configure_logging_from",
]

__version__ = "0.1.0"

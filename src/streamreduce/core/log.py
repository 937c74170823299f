import logging
import sys
from typing import Optional

import structlog

_RENDERERS = ("json", "console")

_configured = False


def configure_logging(level: str = "INFO", renderer: str = "json") -> None:
    """
    Configures structlog to render through the standard library's logging.

    Args:
        level: The name of the minimum level to emit (e.g. 'DEBUG').
        renderer: 'json' for one JSON object per line, 'console' for
            human-readable output.
    """
    global _configured
    if renderer not in _RENDERERS:
        raise ValueError(f"Log renderer must be one of {list(_RENDERERS)}")

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    # Named so repeated configuration replaces it instead of stacking handlers
    handler.set_name("streamreduce_handler")

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if existing.get_name() == "streamreduce_handler":
            root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level.upper())

    if renderer == "json":
        final_processor = structlog.processors.JSONRenderer()
    else:
        final_processor = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            final_processor,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """
    Returns a structlog logger for the given name.

    The first call applies the default configuration, unless the
    application has already configured structlog itself.
    """
    global _configured
    if not _configured:
        if not structlog.is_configured():
            configure_logging()
        _configured = True
    return structlog.get_logger(name)

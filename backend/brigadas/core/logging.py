"""Structured JSON logging for the Brigadas API.

Every module logs through ``structlog.get_logger(__name__)``; values bound
with :mod:`structlog.contextvars` (the request id set by the request logging
middleware) are merged into each entry.
"""

import logging

import structlog
from structlog import contextvars as structlog_contextvars

# Access lines come from RequestLoggingMiddleware
_QUIETED_LOGGERS = ("uvicorn.access",)


def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure structlog on top of the standard library logger.

    :param log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", level=level)
    for name in _QUIETED_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog_contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

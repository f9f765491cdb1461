"""
Structured logging for BoiBritto.

Every record is one JSON line on stdout. Request-scoped fields (request id,
method, path and, once authenticated, the caller's user id) are bound with
``bind_request_context`` and appear on every log line emitted while the
request is handled.
"""

import logging
import sys

import structlog
from structlog.typing import EventDict, WrappedLogger

from boibritto.settings import LOG_LEVEL

LOGGER_NAME = "boibritto"

# Chatty at INFO: token certificate fetches, HTTP connection pools
QUIET_LOGGERS = ("firebase_admin", "google.auth", "urllib3", "cachecontrol")


def flatten_extra(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Merge a stdlib-style ``extra`` dict into the event.

    logger.info("Book created", extra={"book_id": b}) -> {"event": "Book created", "book_id": b, ...}
    """
    extra = event_dict.pop("extra", None)
    if isinstance(extra, dict):
        event_dict.update(extra)
    return event_dict


shared_processors = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.processors.StackInfoRenderer(),
    structlog.dev.set_exc_info,
    structlog.processors.format_exc_info,
    flatten_extra,
]


def bind_request_context(**fields) -> None:
    """Attach fields to every log line for the rest of the current request."""
    structlog.contextvars.bind_contextvars(**fields)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def configure_logging(log_level: str = LOG_LEVEL):
    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # uvicorn and firebase_admin log through stdlib; render them the same way
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    level = getattr(logging, log_level.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(level)
    logging.getLogger(LOGGER_NAME).setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uv_logger = logging.getLogger(name)
        uv_logger.handlers = []
        uv_logger.propagate = True


configure_logging()

logger = structlog.get_logger(LOGGER_NAME)

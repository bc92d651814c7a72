"""Structured logging for run log retrieval.

Events are structlog key/value records rendered through the stdlib root
handler, as JSON in deployed services and as colored console output locally.
While a request for a run is being served, its ``run_id`` is bound as a
context variable so backend warnings (throttling, unresolved executables)
can be traced back to the poll that caused them without threading ids
through every call.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from functools import lru_cache

import structlog
from structlog.types import EventDict, WrappedLogger

from runlog_spine.core.settings import Settings

SERVICE_NAME = "runlog-spine"


def _add_service(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def configure_logging(settings: Settings) -> None:
    """Route structlog through stdlib logging using ``settings.log_level``/``log_format``."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper()),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if settings.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    formatter = structlog.stdlib.ProcessorFormatter(processor=renderer)
    for handler in logging.root.handlers:
        handler.setFormatter(formatter)


@lru_cache(maxsize=100)
def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance."""
    return structlog.get_logger(name)


@contextmanager
def log_context(**kwargs) -> Iterator[None]:
    """Bind context variables for the duration of a block.

    Values bound by the caller before entering (a request id, say) are
    restored on exit rather than cleared.
    """
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield

"""Structured logging for the shot chart service.

structlog events are rendered by a ``ProcessorFormatter`` on the stdlib root
handlers, so uvicorn and library records come out in the same json or
console format. API requests bind a ``trace_id`` that every event logged
while handling the request carries.
"""

import logging
import sys
import uuid
from typing import List, Optional

import structlog
from structlog.types import Processor

from .config import get_settings

QUIET_LOGGERS = ("httpx", "httpcore", "aiosqlite", "asyncio", "matplotlib")


def new_trace_id() -> str:
    return uuid.uuid4().hex[:8]


def set_trace_id(trace_id: Optional[str] = None) -> str:
    """Bind a trace id (a fresh one when omitted) to the current context."""
    trace_id = trace_id or new_trace_id()
    structlog.contextvars.bind_contextvars(trace_id=trace_id)
    return trace_id


def get_trace_id() -> Optional[str]:
    return structlog.contextvars.get_contextvars().get("trace_id")


def clear_trace_id() -> None:
    structlog.contextvars.unbind_contextvars("trace_id")


def _shared_processors() -> List[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def configure_logging() -> None:
    """Install the structlog pipeline and the root handlers from settings."""
    settings = get_settings()
    level = getattr(logging, settings.LOG_LEVEL)

    if settings.LOG_FORMAT == "json":
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    shared = _shared_processors()
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.LOG_FILE:
        settings.LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(settings.LOG_FILE))

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)

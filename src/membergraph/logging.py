"""
Structured logging for Membergraph.

Every module logs through ``get_logger(__name__)`` with key/value fields.
The id of the HTTP request being served is attached to each event.
"""

import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Any

import structlog

_request_id: ContextVar[str | None] = ContextVar("membergraph_request_id", default=None)


def add_request_id(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog processor copying the current request id into the event."""
    _ = logger, method_name

    request_id = _request_id.get()
    if request_id is not None:
        event_dict.setdefault("request_id", request_id)
    return event_dict


def configure_logging(debug: bool = False) -> None:
    """Route stdlib logging to stdout and install the structlog pipeline.

    Args:
        debug: Log DEBUG events and render them for a terminal instead of as JSON.
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        stream=sys.stdout,
        format="%(message)s",
        force=True,
    )

    renderer: Any = (
        structlog.dev.ConsoleRenderer(colors=True)
        if debug
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_request_id,
            structlog.processors.TimeStamper(fmt="ISO", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def generate_request_id() -> str:
    return uuid.uuid4().hex


def get_request_id() -> str | None:
    """Request id bound to the current context, if any."""
    return _request_id.get()


def set_request_context(request_id: str | None = None) -> str:
    """Bind a request id (a fresh one when None) and return it."""
    request_id = request_id or generate_request_id()
    _request_id.set(request_id)
    return request_id


def clear_request_context() -> None:
    _request_id.set(None)

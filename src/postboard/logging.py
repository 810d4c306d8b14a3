"""
structlog setup for Postboard

Everything logs through stdlib logging so uvicorn, SQLAlchemy and Alembic
records end up in the same stream. Each HTTP request carries an id (and,
once someone registers or logs in, a user id) that is stamped on every line
written while it is being served.
"""

import base64
import logging
import secrets
import sys
import time
from contextvars import ContextVar
from typing import Any

import structlog

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_user_id: ContextVar[str | None] = ContextVar("user_id", default=None)

_configured = False


def add_request_context(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog processor: copy the current request and user ids onto the event."""
    del logger, method_name

    request_id = _request_id.get()
    if request_id:
        event_dict["request_id"] = request_id

    user_id = _user_id.get()
    if user_id:
        event_dict["user_id"] = user_id

    return event_dict


def _resolve_level(debug: bool, log_level: str | None) -> int:
    if log_level:
        level = logging.getLevelName(log_level.upper())
        if isinstance(level, int):
            return level
    return logging.DEBUG if debug else logging.INFO


def configure_logging(debug: bool = False, log_level: str | None = None) -> None:
    """Route structlog through stdlib logging.

    Debug mode renders coloured console lines; otherwise one JSON object per
    line. An explicit `log_level` name wins over the level `debug` implies.
    """
    global _configured

    logging.basicConfig(
        level=_resolve_level(debug, log_level),
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
            add_request_context,
            structlog.processors.TimeStamper(fmt="ISO", utc=True),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )
    _configured = True


def logging_configured() -> bool:
    """True once configure_logging() has run in this process."""
    return _configured


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)


def generate_request_id() -> str:
    """14 URL-safe characters: a microsecond timestamp plus two random bytes."""
    stamp = int(time.time() * 1_000_000).to_bytes(8, byteorder="big")
    raw = stamp + secrets.token_bytes(2)
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def set_request_context(request_id: str | None = None, user_id: str | None = None) -> str:
    """Start logging on behalf of a request; returns the request id in effect."""
    request_id = request_id or generate_request_id()
    _request_id.set(request_id)
    if user_id is not None:
        _user_id.set(user_id)
    return request_id


def clear_request_context() -> None:
    _request_id.set(None)
    _user_id.set(None)


def get_request_id() -> str | None:
    return _request_id.get()


def get_user_id() -> str | None:
    return _user_id.get()


def bind_user_id(user_id: str | int | None) -> None:
    """Attach the authenticated user to log lines for the rest of the request."""
    _user_id.set(str(user_id) if user_id is not None else None)

"""Per-session log correlation.

Records carry two extra attributes, ``session_id`` and ``client_id`` (the
resolved source address). They are held in context variables, so the
reader task, the keepalive watchdog and the upstream event pump, which are
all spawned inside a session's ``log_context``, inherit the same values.
Outside a session both read ``-``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import Token, ContextVar

from .config.logging import APP_LOG_LEVEL, APP_LOG_FORMAT, APP_LOG_DATEFMT, QUIET_LOGGERS

_UNSET = "-"
_FIELDS: dict[str, ContextVar[str]] = {
    "session_id": ContextVar("session_id", default=_UNSET),
    "client_id": ContextVar("client_id", default=_UNSET),
}
_factory_installed = False


def current_log_context() -> dict[str, str]:
    """Return the correlation fields active in the current task."""
    return {name: var.get() for name, var in _FIELDS.items()}


@contextmanager
def log_context(**fields: str | None) -> Iterator[None]:
    """Bind correlation fields for the duration of the block.

    Fields passed as None keep their current value.

    Raises:
        TypeError: An unknown field name was given.
    """
    unknown = set(fields) - set(_FIELDS)
    if unknown:
        raise TypeError(f"unknown log context field(s): {', '.join(sorted(unknown))}")

    tokens: list[tuple[ContextVar[str], Token[str]]] = []
    for name, value in fields.items():
        if value is not None:
            var = _FIELDS[name]
            tokens.append((var, var.set(value)))
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)


def install_log_context() -> None:
    """Wrap the LogRecord factory so every record gets the correlation fields."""
    global _factory_installed  # noqa: PLW0603
    if _factory_installed:
        return

    base_factory = logging.getLogRecordFactory()

    def record_factory(*args, **kwargs):
        record = base_factory(*args, **kwargs)
        for name, var in _FIELDS.items():
            setattr(record, name, var.get())
        return record

    logging.setLogRecordFactory(record_factory)
    _factory_installed = True


def configure_logging() -> None:
    """Configure root logging once per process.

    When uvicorn (or a test runner) already attached handlers they are kept
    and only re-leveled and re-formatted.
    """
    install_log_context()
    formatter = logging.Formatter(APP_LOG_FORMAT, datefmt=APP_LOG_DATEFMT)
    root_logger = logging.getLogger()
    if root_logger.handlers:
        root_logger.setLevel(APP_LOG_LEVEL)
        for handler in root_logger.handlers:
            handler.setFormatter(formatter)
    else:
        logging.basicConfig(level=APP_LOG_LEVEL, format=APP_LOG_FORMAT, datefmt=APP_LOG_DATEFMT)

    # Per-request/per-frame chatter from the HTTP and WebSocket clients
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = [
    "configure_logging",
    "current_log_context",
    "install_log_context",
    "log_context",
]

"""Logging for the ordering service.

Standard library handlers own the sinks: stdout, ``logs/ordering.log`` and
``logs/ordering_error.log``, both rotating. structlog formats every event
with key/value context, including the per-request fields bound by the HTTP
middleware.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

import structlog

LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))
LOG_FILE_PREFIX = "ordering"

_LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}
_JSON_ENVIRONMENTS = ("production", "staging")
_MAX_LOG_BYTES = 10 * 1024 * 1024


def get_environment() -> str:
    """Name of the running environment, lower-cased."""
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    """``LOG_LEVEL`` if set, else the default for the environment."""
    return os.getenv("LOG_LEVEL", _LEVELS.get(get_environment(), "INFO")).upper()


def _rotating_file(suffix: str, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=LOG_DIR / f"{LOG_FILE_PREFIX}{suffix}.log",
        maxBytes=_MAX_LOG_BYTES,
        backupCount=5,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging() -> None:
    level = get_log_level()
    LOG_DIR.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [console, _rotating_file("", level), _rotating_file("_error", logging.ERROR)]

    # Protean logs every repository call at DEBUG
    logging.getLogger("protean").setLevel(logging.WARNING)


def _renderer(environment: str) -> list:
    if environment in _JSON_ENVIRONMENTS:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [
        structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=True, max_frames=2),
        )
    ]


def setup_structlog() -> None:
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
    ]

    structlog.configure(
        processors=processors + _renderer(get_environment()),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging() -> None:
    setup_stdlib_logging()
    setup_structlog()


def bind_request_context(method: str, path: str, caller_id: str | None = None, caller_role: str | None = None) -> None:
    """Attach the request and the forwarded caller identity to every log line of this request."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        method=method,
        path=path,
        caller_id=caller_id or None,
        caller_role=caller_role or None,
    )


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()

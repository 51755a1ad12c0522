"""
Structured Logging Configuration
structlog on top of stdlib logging; events are snake_case names with
key/value fields (``logger.info("document_parsed", screens=3)``).
"""

import logging
import sys
from collections.abc import Mapping
from contextvars import Token
from typing import Any, TYPE_CHECKING

import structlog
from pythonjsonlogger.json import JsonFormatter

if TYPE_CHECKING:
    from .config import Settings

_CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _stdlib_handler(json_logs: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter(_JSON_FORMAT) if json_logs else logging.Formatter(_CONSOLE_FORMAT))
    return handler


def _processors(json_logs: bool) -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(colors=False),
    ]


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """
    Route engine logs through stdlib logging.

    Only the ``drivenui`` logger hierarchy is configured; the host keeps
    control of the root logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: One JSON object per line instead of console text
    """
    engine_logger = logging.getLogger("drivenui")
    engine_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    engine_logger.handlers[:] = [_stdlib_handler(json_logs)]
    engine_logger.propagate = False

    structlog.configure(
        processors=_processors(json_logs),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def configure_from_settings(settings: "Settings") -> None:
    configure_logging(settings.log_level, settings.json_logs)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Structured logger for a module (pass ``__name__``)."""
    return structlog.get_logger(name)


class LogContext:
    """
    Bind fields to every log event in scope.

    Nested scopes binding the same key restore the outer value on exit.
    """

    def __init__(self, **kwargs: Any):
        self.context = kwargs
        self._tokens: Mapping[str, Token[Any]] = {}

    def __enter__(self) -> "LogContext":
        self._tokens = structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.reset_contextvars(**self._tokens)
        self._tokens = {}


__all__ = ["configure_logging", "configure_from_settings", "get_logger", "LogContext"]

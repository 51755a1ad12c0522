"""Core utilities and infrastructure."""

from .cache import LRUCache, Stats
from .config import Settings, get_settings
from .errors import DispatchError, DispatchErrorKind, ParseError
from .hash import Algorithm, hash_fields, hash_string
from .id import new_screen_state_id, new_session_id
from .json import JSONParseError, decode_json, safe_json_dumps
from .logging_config import LogContext, configure_from_settings, configure_logging, get_logger
from .validate import (
    MAX_COMPONENT_DEPTH,
    MAX_MARKUP_SIZE,
    ValidationError,
    ValidationResult,
    validate_depth,
    validate_markup_size,
)


def create_container(settings: Settings | None = None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Errors
    "ParseError",
    "DispatchError",
    "DispatchErrorKind",
    # Validation
    "ValidationError",
    "ValidationResult",
    "MAX_MARKUP_SIZE",
    "MAX_COMPONENT_DEPTH",
    "validate_markup_size",
    "validate_depth",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "LogContext",
    # JSON
    "decode_json",
    "safe_json_dumps",
    "JSONParseError",
    # DI
    "create_container",
    # Hashing
    "Algorithm",
    "hash_string",
    "hash_fields",
    # IDs
    "new_screen_state_id",
    "new_session_id",
    # Caching
    "LRUCache",
    "Stats",
]

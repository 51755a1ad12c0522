"""DrivenUI - server-driven UI engine.

Parse markup into a ``Document``, resolve bindings against a ``ContextStore``
and drive navigation with ``ActionDispatcher``.
"""

from .core import Settings, configure_logging, create_container, get_settings
from .core.errors import DispatchError, DispatchErrorKind, ParseError
from .engine import (
    ActionDispatcher,
    ContextStore,
    EngineSession,
    NavigationStack,
    ScreenState,
    StyleRegistry,
    resolve_value_expression,
)
from .models import Document, UiAction
from .parser import SDUIParser, parse_microapp

__version__ = "0.3.0"

__all__ = [
    "SDUIParser",
    "parse_microapp",
    "Document",
    "UiAction",
    "ContextStore",
    "StyleRegistry",
    "resolve_value_expression",
    "NavigationStack",
    "ScreenState",
    "ActionDispatcher",
    "EngineSession",
    "ParseError",
    "DispatchError",
    "DispatchErrorKind",
    "Settings",
    "get_settings",
    "configure_logging",
    "create_container",
]

"""Runtime engine: context, expressions, styles, navigation and dispatch."""

from .context import ContextStore
from .dispatcher import (
    ActionDispatcher,
    ContextTarget,
    DispatchOutcome,
    DispatchResult,
    DispatchSuccess,
    parse_context_target,
    source_key,
)
from .expression import (
    Conditional,
    evaluate_arithmetic,
    evaluate_condition,
    parse_conditional,
    resolve_value_expression,
    resolve_variables,
)
from .navigation import NavigationEvent, NavigationEventKind, NavigationStack, ScreenState
from .resolver import ComponentResolver
from .session import DocumentScreenProvider, EngineSession
from .styles import ResolvedStyles, StyleRegistry
from .types import (
    ExternalDeeplinkHandler,
    NativeActionExecutor,
    NativeError,
    NativeResult,
    NativeSuccess,
    ScreenProvider,
    StaticDeeplinkHandler,
)

__all__ = [
    # Context
    "ContextStore",
    # Expressions
    "Conditional",
    "resolve_value_expression",
    "resolve_variables",
    "parse_conditional",
    "evaluate_condition",
    "evaluate_arithmetic",
    # Styles
    "StyleRegistry",
    "ResolvedStyles",
    "ComponentResolver",
    # Navigation
    "NavigationStack",
    "NavigationEvent",
    "NavigationEventKind",
    "ScreenState",
    # Dispatch
    "ActionDispatcher",
    "DispatchSuccess",
    "DispatchOutcome",
    "DispatchResult",
    "ContextTarget",
    "parse_context_target",
    "source_key",
    # Host collaborators
    "ScreenProvider",
    "ExternalDeeplinkHandler",
    "NativeActionExecutor",
    "NativeSuccess",
    "NativeError",
    "NativeResult",
    "StaticDeeplinkHandler",
    # Session
    "EngineSession",
    "DocumentScreenProvider",
]

"""Action dispatcher: interprets UiActions against navigation and context.

One action at a time per session. Failures come back as ``Failure`` values
and leave navigation and context untouched. ``asyncio.CancelledError`` is
never converted: a cancelled dispatch propagates and skips every mutation
that was waiting on the cancelled await.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any

from returns.result import Failure, Result, Success

from ..core.errors import DispatchError, DispatchErrorKind
from ..core.logging_config import get_logger
from ..models.actions import (
    Back,
    DataTransform,
    Empty,
    ExecuteQuery,
    NativeCode,
    OpenBottomSheet,
    OpenDeeplink,
    OpenScreen,
    RefreshLayout,
    RefreshScreen,
    RefreshWidget,
    SaveToContext,
    UiAction,
)
from ..models.document import ScreenDefinition
from ..models.values import ContextValue
from .context import ContextStore
from .navigation import NavigationStack, ScreenState
from .types import (
    ExternalDeeplinkHandler,
    NativeActionExecutor,
    NativeError,
    NativeSuccess,
    ScreenProvider,
)

logger = get_logger(__name__)


class DispatchOutcome(str, Enum):
    NONE = "none"
    NAVIGATED = "navigated"
    NAVIGATED_BACK = "navigated_back"
    BOTTOM_SHEET = "bottom_sheet"
    EXTERNAL = "external"


@dataclass(frozen=True)
class DispatchSuccess:
    outcome: DispatchOutcome = DispatchOutcome.NONE
    sheet: ScreenDefinition | None = None


DispatchResult = Result[DispatchSuccess, DispatchError]


@dataclass(frozen=True)
class ContextTarget:
    """Where a value is written: engine scope when ``microapp_code`` is None."""

    name: str
    microapp_code: str | None = None


def _braced(expression: str, prefix: str) -> str | None:
    if expression.startswith(prefix) and expression.endswith("}"):
        return expression[len(prefix):-1]
    return None


def parse_context_target(expression: str, default_microapp: str | None = None) -> ContextTarget | None:
    """
    Parse a write target.

    ``@{code.name}`` is microapp scope, ``@@{name}`` engine scope, and a bare
    name goes to ``default_microapp`` (engine scope when that is None).
    Malformed braced forms return ``None``.
    """
    expression = expression.strip()
    if (content := _braced(expression, "@@{")) is not None:
        name = content.strip()
        return ContextTarget(name) if name else None
    if (content := _braced(expression, "@{")) is not None:
        code, dot, name = content.partition(".")
        code, name = code.strip(), name.strip()
        if not dot or not code or not name:
            return None
        return ContextTarget(name, code)
    if not expression or "{" in expression or "}" in expression:
        return None
    return ContextTarget(expression, default_microapp)


def source_key(expression: str) -> str:
    """Key into the merged source view for a ``SaveToContext`` source."""
    expression = expression.strip()
    for prefix in ("@@{", "@{", "%{"):
        if (content := _braced(expression, prefix)) is not None:
            return ".".join(part.strip() for part in content.split(".", 1))
    return expression


def _fail(kind: DispatchErrorKind, message: str, cause: BaseException | None = None) -> DispatchResult:
    return Failure(DispatchError(kind, message, cause))


class ActionDispatcher:
    """
    Interprets the closed ``UiAction`` set.

    Args:
        navigation: Session navigation stack
        context: Session context store
        screens: Screen lookup
        native_executor: Host executor for ``NativeCode`` (optional)
        deeplink_handler: Host handler for external deeplinks (optional)
        microapp_code: Scope for bare context names and native results
    """

    def __init__(
        self,
        navigation: NavigationStack,
        context: ContextStore,
        screens: ScreenProvider,
        native_executor: NativeActionExecutor | None = None,
        deeplink_handler: ExternalDeeplinkHandler | None = None,
        microapp_code: str | None = None,
    ) -> None:
        self.navigation = navigation
        self.context = context
        self.screens = screens
        self.native_executor = native_executor
        self.deeplink_handler = deeplink_handler
        self.microapp_code = microapp_code or None

    async def dispatch(self, action: UiAction) -> DispatchResult:
        """Dispatch one action. Only cancellation escapes as an exception."""
        try:
            result = await self._dispatch(action)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error("dispatch_crashed", action=action.type, error=str(e), exc_info=True)
            result = _fail(
                DispatchErrorKind.UNEXPECTED, f"Error handling action {action.type}: {e}", e
            )

        if isinstance(result, Failure):
            error = result.failure()
            logger.warning("dispatch_failed", action=action.type, kind=error.kind.value, error=error.message)
        else:
            logger.debug("dispatched", action=action.type, outcome=result.unwrap().outcome.value)
        return result

    async def _dispatch(self, action: UiAction) -> DispatchResult:
        match action:
            case OpenScreen(screen_code=code):
                return await self._open_screen(code)
            case OpenBottomSheet(screen_code=code):
                return await self._open_bottom_sheet(code)
            case Back():
                return self._back()
            case OpenDeeplink(deeplink=deeplink):
                return await self._open_deeplink(deeplink)
            case RefreshScreen() | ExecuteQuery():
                # Reserved for host-side query execution; intentionally inert
                return Success(DispatchSuccess())
            case DataTransform(variable_name=name, new_value=value):
                return self._data_transform(name, value)
            case SaveToContext(value_from=value_from, value_to=value_to):
                return self._save_to_context(value_from, value_to)
            case NativeCode(action_code=code, parameters=parameters):
                return await self._native_code(code, parameters)
            case RefreshWidget() | RefreshLayout() | Empty():
                return Success(DispatchSuccess())
            case _:
                raise TypeError(f"Unknown action: {action!r}")

    async def _open_screen(self, screen_code: str) -> DispatchResult:
        screen = await self.screens.find_screen(screen_code)
        if screen is None:
            return _fail(DispatchErrorKind.SCREEN_NOT_FOUND, f"Screen not found: {screen_code}")
        self.navigation.push(ScreenState.from_definition(screen))
        return Success(DispatchSuccess(DispatchOutcome.NAVIGATED))

    async def _open_bottom_sheet(self, screen_code: str) -> DispatchResult:
        screen = await self.screens.find_screen(screen_code)
        if screen is None:
            return _fail(DispatchErrorKind.SCREEN_NOT_FOUND, f"Bottom sheet screen not found: {screen_code}")
        return Success(DispatchSuccess(DispatchOutcome.BOTTOM_SHEET, sheet=screen))

    def _back(self) -> DispatchResult:
        if self.navigation.pop() is None:
            return _fail(DispatchErrorKind.AT_ROOT, "Cannot navigate back: already at root")
        return Success(DispatchSuccess(DispatchOutcome.NAVIGATED_BACK))

    async def _open_deeplink(self, deeplink: str) -> DispatchResult:
        screen = await self.screens.find_screen_by_deeplink(deeplink)
        if screen is not None:
            self.navigation.push(ScreenState.from_definition(screen))
            return Success(DispatchSuccess(DispatchOutcome.NAVIGATED))

        if self.deeplink_handler is not None and await self.deeplink_handler.handle(deeplink):
            return Success(DispatchSuccess(DispatchOutcome.EXTERNAL))
        return _fail(DispatchErrorKind.DEEPLINK_UNHANDLED, f"Deeplink not handled: {deeplink}")

    def _data_transform(self, name: str, value: str) -> DispatchResult:
        target = parse_context_target(name, self.microapp_code) or ContextTarget(name.strip())
        self._write(target, value)
        return Success(DispatchSuccess())

    def _save_to_context(self, value_from: str, value_to: str) -> DispatchResult:
        target = parse_context_target(value_to, self.microapp_code)
        if target is None:
            return _fail(
                DispatchErrorKind.INVALID_TARGET,
                f"Invalid target {value_to!r}: expected @{{microapp.name}}, @@{{name}} or a bare name",
            )

        sources = self._source_view()
        key = source_key(value_from)
        if key not in sources:
            return _fail(DispatchErrorKind.SOURCE_MISSING, f"Source not found: {value_from}")

        self._write(target, sources[key])
        return Success(DispatchSuccess())

    async def _native_code(self, action_code: str, parameters: dict[str, str]) -> DispatchResult:
        if self.native_executor is None:
            return _fail(DispatchErrorKind.NO_EXECUTOR, f"No native executor registered for {action_code}")

        try:
            result = await self.native_executor.execute(action_code, dict(parameters))
        except asyncio.CancelledError:
            raise
        except Exception as e:
            return _fail(
                DispatchErrorKind.HOST_EXECUTOR_FAILURE, f"Error executing native action {action_code}: {e}", e
            )

        match result:
            case NativeError(message=message, cause=cause):
                return _fail(DispatchErrorKind.HOST_EXECUTOR_FAILURE, message, cause)
            case NativeSuccess(data=data):
                for name, value in (data or {}).items():
                    self._write(ContextTarget(name, self.microapp_code), value)
                return Success(DispatchSuccess())
            case _:
                raise TypeError(f"Native executor returned {type(result).__name__}")

    def _source_view(self) -> dict[str, ContextValue]:
        current = self.navigation.current()
        merged: dict[str, ContextValue] = dict(current.local_data) if current else {}
        merged.update(self.context.flattened())
        return merged

    def _write(self, target: ContextTarget, value: Any) -> None:
        if target.microapp_code is None:
            self.context.set_engine_variable(target.name, value)
        else:
            self.context.set_microapp_variable(target.microapp_code, target.name, value)


__all__ = [
    "ActionDispatcher",
    "DispatchSuccess",
    "DispatchOutcome",
    "DispatchResult",
    "ContextTarget",
    "parse_context_target",
    "source_key",
]

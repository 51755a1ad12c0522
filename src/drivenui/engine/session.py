"""Engine session: one document, one navigation stack, one context."""

from collections.abc import Iterable

from returns.result import Failure, Success

from ..core.errors import DispatchError, DispatchErrorKind
from ..core.id import SessionID, new_session_id
from ..core.logging_config import LogContext, get_logger
from ..models.actions import UiAction
from ..models.components import WidgetEvent
from ..models.document import Document, ScreenDefinition
from ..parser.events import TAP_EVENT, actions_for_event
from .context import ContextStore
from .dispatcher import ActionDispatcher, DispatchOutcome, DispatchResult, DispatchSuccess
from .navigation import NavigationStack, ScreenState
from .resolver import ComponentResolver
from .styles import StyleRegistry
from .types import ExternalDeeplinkHandler, NativeActionExecutor

logger = get_logger(__name__)


class DocumentScreenProvider:
    """Screen lookup backed by a parsed document."""

    def __init__(self, document: Document) -> None:
        self.document = document

    async def find_screen(self, screen_code: str) -> ScreenDefinition | None:
        return self.document.find_screen(screen_code)

    async def find_screen_by_deeplink(self, deeplink: str) -> ScreenDefinition | None:
        return self.document.find_screen_by_deeplink(deeplink)


class EngineSession:
    """
    Wires a document to navigation, context and the host collaborators.

    Usage:
        session = EngineSession(document, native_executor=host)
        await session.start()
        await session.dispatch(OpenScreen(screen_code="details"))
    """

    def __init__(
        self,
        document: Document,
        context: ContextStore | None = None,
        native_executor: NativeActionExecutor | None = None,
        deeplink_handler: ExternalDeeplinkHandler | None = None,
        theme: str = "light",
    ) -> None:
        self.id: SessionID = new_session_id()
        self.document = document
        self.context = context if context is not None else ContextStore()
        self.navigation = NavigationStack()
        self.styles = StyleRegistry(document.styles, theme=theme)
        self.resolver = ComponentResolver(self.context)
        microapp_code = document.microapp.code if document.microapp else None
        self.dispatcher = ActionDispatcher(
            navigation=self.navigation,
            context=self.context,
            screens=DocumentScreenProvider(document),
            native_executor=native_executor,
            deeplink_handler=deeplink_handler,
            microapp_code=microapp_code,
        )

    @property
    def microapp_code(self) -> str | None:
        return self.dispatcher.microapp_code

    async def start(self, screen_code: str | None = None) -> DispatchResult:
        """Push the root screen (the first screen when no code is given)."""
        if screen_code is None:
            screen = self.document.screens[0] if self.document.screens else None
        else:
            screen = self.document.find_screen(screen_code)
        if screen is None:
            return Failure(
                DispatchError(DispatchErrorKind.SCREEN_NOT_FOUND, f"No start screen: {screen_code or '<first>'}")
            )

        self.navigation.clear()
        self.navigation.push(ScreenState.from_definition(screen))
        logger.info("session_started", session_id=self.id, screen_code=screen.screen_code)
        return Success(DispatchSuccess(DispatchOutcome.NAVIGATED))

    async def dispatch(self, action: UiAction) -> DispatchResult:
        with LogContext(session_id=self.id):
            return await self.dispatcher.dispatch(action)

    async def dispatch_all(self, actions: Iterable[UiAction]) -> DispatchResult:
        """Dispatch in order, stopping at the first failure."""
        result: DispatchResult = Success(DispatchSuccess())
        for action in actions:
            result = await self.dispatch(action)
            if isinstance(result, Failure):
                break
        return result

    async def handle_event(self, events: list[WidgetEvent], event_code: str = TAP_EVENT) -> DispatchResult:
        return await self.dispatch_all(actions_for_event(events, event_code))

    def current_screen(self) -> ScreenDefinition | None:
        """Resolved copy of the top screen."""
        state = self.navigation.current()
        if state is None:
            return None
        return self.resolver.resolve_screen(state.definition)


__all__ = ["EngineSession", "DocumentScreenProvider"]

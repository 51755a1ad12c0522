"""Navigation history as a stack of screen frames.

Single-writer structure; observers are notified synchronously after each
change, in subscription order. A failing observer is logged and skipped.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..core.id import ScreenStateID, new_screen_state_id
from ..core.logging_config import get_logger
from ..models.document import ScreenDefinition
from ..models.values import ContextValue

logger = get_logger(__name__)


@dataclass(frozen=True)
class ScreenState:
    """One navigation frame; ``local_data`` lives only while the frame does."""

    definition: ScreenDefinition
    local_data: dict[str, ContextValue] = field(default_factory=dict)
    id: ScreenStateID = field(default_factory=new_screen_state_id)
    created_at: float = field(default_factory=time.time)

    @property
    def screen_code(self) -> str:
        return self.definition.screen_code

    @classmethod
    def from_definition(cls, definition: ScreenDefinition, **local_data: Any) -> "ScreenState":
        return cls(definition=definition, local_data=dict(local_data))


class NavigationEventKind(str, Enum):
    PUSH = "push"
    POP = "pop"
    REPLACE = "replace"
    CLEAR = "clear"


@dataclass(frozen=True)
class NavigationEvent:
    kind: NavigationEventKind
    stack_size: int
    current: ScreenState | None


NavigationListener = Callable[[NavigationEvent], None]


class NavigationStack:
    """
    LIFO of ``ScreenState``; the bottom frame (root) is never popped.

    Examples:
        >>> stack = NavigationStack()
        >>> stack.push(ScreenState(ScreenDefinition(screen_code="home")))
        >>> stack.pop() is None
        True
        >>> len(stack)
        1
    """

    def __init__(self) -> None:
        self._frames: list[ScreenState] = []
        self._listeners: list[NavigationListener] = []

    def push(self, state: ScreenState) -> None:
        self._frames.append(state)
        logger.debug("screen_pushed", screen_code=state.screen_code, stack_size=len(self._frames))
        self._notify(NavigationEventKind.PUSH)

    def pop(self) -> ScreenState | None:
        """Remove the top frame and return the new top; ``None`` at the root."""
        if len(self._frames) <= 1:
            return None
        removed = self._frames.pop()
        logger.debug("screen_popped", screen_code=removed.screen_code, stack_size=len(self._frames))
        self._notify(NavigationEventKind.POP)
        return self._frames[-1]

    def current(self) -> ScreenState | None:
        return self._frames[-1] if self._frames else None

    def previous(self) -> ScreenState | None:
        return self._frames[-2] if len(self._frames) > 1 else None

    def can_go_back(self) -> bool:
        return len(self._frames) > 1

    def replace_current(self, state: ScreenState) -> None:
        """Swap the top frame (push when empty)."""
        if self._frames:
            self._frames[-1] = state
        else:
            self._frames.append(state)
        self._notify(NavigationEventKind.REPLACE)

    def clear(self) -> None:
        self._frames.clear()
        self._notify(NavigationEventKind.CLEAR)

    @property
    def frames(self) -> tuple[ScreenState, ...]:
        return tuple(self._frames)

    def __len__(self) -> int:
        return len(self._frames)

    def subscribe(self, listener: NavigationListener) -> Callable[[], None]:
        """Register ``listener``; call the returned function to unsubscribe."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, kind: NavigationEventKind) -> None:
        event = NavigationEvent(kind=kind, stack_size=len(self._frames), current=self.current())
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                # The stack has already changed; later observers still run
                logger.error("navigation_listener_failed", kind=kind.value, error=str(e), exc_info=True)


__all__ = [
    "ScreenState",
    "NavigationStack",
    "NavigationEvent",
    "NavigationEventKind",
    "NavigationListener",
]

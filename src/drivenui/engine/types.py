"""
Host Collaborator Types
Interfaces the engine consumes; implementations are supplied by the host.
"""

from dataclasses import dataclass, field
from typing import Any, Protocol

from ..models.document import ScreenDefinition


class ScreenProvider(Protocol):
    """Screen lookup used by navigation actions"""

    async def find_screen(self, screen_code: str) -> ScreenDefinition | None:
        ...

    async def find_screen_by_deeplink(self, deeplink: str) -> ScreenDefinition | None:
        ...


class ExternalDeeplinkHandler(Protocol):
    """Opens deeplinks the document does not own"""

    async def handle(self, deeplink: str) -> bool:
        """Return True when the host handled the deeplink"""
        ...


@dataclass(frozen=True)
class NativeSuccess:
    """Host action finished; ``data`` is merged into the context"""

    data: dict[str, Any] | None = None


@dataclass(frozen=True)
class NativeError:
    message: str
    cause: BaseException | None = None


NativeResult = NativeSuccess | NativeError


class NativeActionExecutor(Protocol):
    """Runs ``nativeCode`` actions inside the host application"""

    async def execute(self, action_code: str, parameters: dict[str, str]) -> NativeResult:
        ...


@dataclass
class StaticDeeplinkHandler:
    """Accepts deeplinks by scheme prefix; records what it handled."""

    prefixes: tuple[str, ...] = ()
    handled: list[str] = field(default_factory=list)

    async def handle(self, deeplink: str) -> bool:
        if any(deeplink.startswith(prefix) for prefix in self.prefixes):
            self.handled.append(deeplink)
            return True
        return False


__all__ = [
    "ScreenProvider",
    "ExternalDeeplinkHandler",
    "NativeActionExecutor",
    "NativeSuccess",
    "NativeError",
    "NativeResult",
    "StaticDeeplinkHandler",
]

"""Two-tier runtime context: engine scope and per-microapp scope.

Single-writer structure scoped to one session; callers serialize access.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from ..core.logging_config import get_logger
from ..models.values import ContextValue, coerce_value

logger = get_logger(__name__)


class ContextStore:
    """
    Engine-scoped and microapp-scoped variables (last write wins).

    Snapshots returned by ``get_*_context`` are read-only copies; later
    writes to the store do not show through them.

    Examples:
        >>> store = ContextStore()
        >>> store.set_microapp_variable("app", "x", 5)
        >>> store.get_microapp_variable("app", "x")
        5
    """

    def __init__(self) -> None:
        self._engine: dict[str, ContextValue] = {}
        self._microapps: dict[str, dict[str, ContextValue]] = {}

    def set_microapp_variable(self, microapp_code: str, name: str, value: Any) -> None:
        self._microapps.setdefault(microapp_code, {})[name] = coerce_value(value)
        logger.debug("microapp_variable_set", microapp=microapp_code, name=name)

    def get_microapp_variable(self, microapp_code: str, name: str) -> ContextValue:
        return self._microapps.get(microapp_code, {}).get(name)

    def has_microapp_variable(self, microapp_code: str, name: str) -> bool:
        return name in self._microapps.get(microapp_code, {})

    def set_engine_variable(self, name: str, value: Any) -> None:
        self._engine[name] = coerce_value(value)
        logger.debug("engine_variable_set", name=name)

    def get_engine_variable(self, name: str) -> ContextValue:
        return self._engine.get(name)

    def has_engine_variable(self, name: str) -> bool:
        return name in self._engine

    def get_microapp_context(self, microapp_code: str) -> Mapping[str, ContextValue]:
        return MappingProxyType(dict(self._microapps.get(microapp_code, {})))

    def get_engine_context(self) -> Mapping[str, ContextValue]:
        return MappingProxyType(dict(self._engine))

    def microapp_codes(self) -> list[str]:
        return list(self._microapps)

    def flattened(self) -> dict[str, ContextValue]:
        """
        One-level view of both scopes.

        Engine variables keep their bare name; microapp variables are keyed
        ``"<microappCode>.<name>"``.
        """
        flat: dict[str, ContextValue] = dict(self._engine)
        for code, variables in self._microapps.items():
            for name, value in variables.items():
                flat[f"{code}.{name}"] = value
        return flat

    def clear_microapp_context(self, microapp_code: str) -> None:
        self._microapps.pop(microapp_code, None)
        logger.debug("microapp_context_cleared", microapp=microapp_code)

    def clear_engine_context(self) -> None:
        self._engine.clear()
        logger.debug("engine_context_cleared")

    def clear_all(self) -> None:
        self._microapps.clear()
        self._engine.clear()
        logger.debug("context_cleared")


__all__ = ["ContextStore"]

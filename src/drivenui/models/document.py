"""Parsed microapp document: metadata, screens, queries and styles."""

from typing import Any

from pydantic import Field

from .base import FrozenModel
from .components import Component, count_components
from .styles import StyleSet


class Microapp(FrozenModel):
    title: str = ""
    code: str = ""
    short_code: str = ""
    deeplink: str = ""
    persistents: tuple[str, ...] = ()


class QueryProperty(FrozenModel):
    code: str = ""
    variable_name: str = ""
    variable_value: str = ""


class QueryCondition(FrozenModel):
    code: str = ""
    value: str = ""


class Query(FrozenModel):
    """Data query declared by the microapp (executed by the host)."""

    title: str = ""
    code: str
    type: str = ""
    endpoint: str = ""
    mock_file: str | None = None
    properties: tuple[QueryProperty, ...] = ()
    conditions: tuple[QueryCondition, ...] = ()


class ScreenQuery(FrozenModel):
    """Binding of a query to a screen, with per-screen variable overrides."""

    code: str = ""
    screen_code: str = ""
    query_code: str = ""
    order: int = 0
    properties: tuple[QueryProperty, ...] = ()


class ScreenDefinition(FrozenModel):
    """A screen; ``root_component`` of ``None`` is an empty screen."""

    screen_code: str
    title: str = ""
    short_code: str = ""
    deeplink: str | None = None
    root_component: Component | None = None
    screen_queries: tuple[ScreenQuery, ...] = ()

    def component_count(self) -> int:
        return count_components(self.root_component)


class Document(FrozenModel):
    """Immutable result of a parse.

    Resolution never mutates a document; it works on copies.
    """

    microapp: Microapp | None = None
    screens: tuple[ScreenDefinition, ...] = ()
    queries: tuple[Query, ...] = ()
    screen_queries: tuple[ScreenQuery, ...] = ()
    styles: StyleSet = Field(default_factory=StyleSet)

    def find_screen(self, screen_code: str) -> ScreenDefinition | None:
        for screen in self.screens:
            if screen.screen_code == screen_code:
                return screen
        return None

    def find_screen_by_deeplink(self, deeplink: str) -> ScreenDefinition | None:
        if not deeplink:
            return None
        for screen in self.screens:
            if screen.deeplink == deeplink:
                return screen
        return None

    def find_query(self, query_code: str) -> Query | None:
        for query in self.queries:
            if query.code == query_code:
                return query
        return None

    def queries_for_screen(self, screen_code: str) -> list[ScreenQuery]:
        """Screen queries bound to a screen, by ``order``."""
        matching = [sq for sq in self.screen_queries if sq.screen_code == screen_code]
        return sorted(matching, key=lambda sq: sq.order)

    def count_components(self) -> int:
        return sum(screen.component_count() for screen in self.screens)

    def has_data(self) -> bool:
        return (
            self.microapp is not None
            or bool(self.screens)
            or bool(self.queries)
            or not self.styles.is_empty()
        )

    def stats(self) -> dict[str, Any]:
        """Summary counts for logging and diagnostics."""
        return {
            "microapp": self.microapp.code if self.microapp else None,
            "screens": len(self.screens),
            "queries": len(self.queries),
            "screen_queries": len(self.screen_queries),
            "components": self.count_components(),
            **self.styles.counts(),
        }


__all__ = [
    "Microapp",
    "QueryProperty",
    "QueryCondition",
    "Query",
    "ScreenQuery",
    "ScreenDefinition",
    "Document",
]

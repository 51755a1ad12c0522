"""SDUI Parser - markup sections to an immutable Document.

Each section (microapp, styles, queries and every screen) is parsed on its
own. A failing section is logged and comes back empty; the rest of the
document is still produced, so one broken screen never blocks the app.
"""

from collections.abc import Callable, Iterable
from functools import partial
from typing import TypeVar

from ..core.config import Settings
from ..core.errors import ParseError
from ..core.logging_config import get_logger
from ..core.validate import (
    MAX_COMPONENT_DEPTH,
    MAX_MARKUP_SIZE,
    ValidationError,
    validate_markup_size,
)
from ..models.document import Document, Microapp, Query, ScreenDefinition, ScreenQuery
from ..models.styles import StyleSet
from .cache import DocumentCache, document_key
from .microapp import MicroappParser
from .queries import QueryParser
from .screens import ScreenParser
from .styles import StyleParser

logger = get_logger(__name__)

T = TypeVar("T")


class SDUIParser:
    """Parses microapp, style, query and screen markup into a ``Document``."""

    def __init__(
        self,
        max_markup_size: int = MAX_MARKUP_SIZE,
        max_component_depth: int = MAX_COMPONENT_DEPTH,
        cache: DocumentCache | None = None,
    ) -> None:
        self.max_markup_size = max_markup_size
        self.cache = cache
        self._microapp_parser = MicroappParser()
        self._style_parser = StyleParser()
        self._query_parser = QueryParser()
        self._screen_parser = ScreenParser(max_depth=max_component_depth)

    @classmethod
    def from_settings(cls, settings: Settings) -> "SDUIParser":
        cache = None
        if settings.enable_cache:
            cache = DocumentCache(max_size=settings.cache_size, ttl_seconds=settings.cache_ttl)
        return cls(
            max_markup_size=settings.max_markup_size,
            max_component_depth=settings.max_component_depth,
            cache=cache,
        )

    def parse(
        self,
        microapp_markup: str = "",
        styles_markup: str = "",
        queries_markup: str = "",
        screens: Iterable[tuple[str, str]] = (),
    ) -> Document:
        """
        Parse all sections into a Document. Never raises for bad markup.

        Args:
            microapp_markup: Markup holding ``<microapp>``
            styles_markup: Markup holding ``<allStyles>``
            queries_markup: Markup holding ``<query>`` declarations
            screens: ``(name, markup)`` pairs, one screen each

        Returns:
            Document; sections that failed are empty
        """
        screens = list(screens)
        key = None
        if self.cache is not None:
            key = document_key(microapp_markup, styles_markup, queries_markup, screens)
            if (cached := self.cache.get(key)) is not None:
                logger.debug("document_cache_hit", key=key)
                return cached

        microapp: Microapp | None = self._section(
            "microapp", microapp_markup, self._microapp_parser.parse, None
        )
        styles: StyleSet = self._section("styles", styles_markup, self._style_parser.parse, StyleSet())
        queries: list[Query] = self._section("queries", queries_markup, self._query_parser.parse, [])

        parsed: list[ScreenDefinition] = []
        for name, markup in screens:
            screen = self._section(f"screen:{name}", markup, partial(self._screen_parser.parse, name=name), None)
            if screen is None:
                logger.debug("screen_skipped", name=name)
                continue
            logger.debug("screen_parsed", name=name, screen_code=screen.screen_code)
            parsed.append(screen)

        screen_queries = [sq for screen in parsed for sq in screen.screen_queries]
        document = Document(
            microapp=microapp,
            screens=[self._attach_queries(screen, screen_queries) for screen in parsed],
            queries=queries,
            screen_queries=screen_queries,
            styles=styles,
        )
        logger.info("document_parsed", **document.stats())

        if self.cache is not None and key is not None:
            self.cache.set(key, document)
        return document

    def _section(self, name: str, markup: str, parse: Callable[[str], T], empty: T) -> T:
        if not markup or not markup.strip():
            return empty
        try:
            validate_markup_size(markup, self.max_markup_size, name=name)
            return parse(markup)
        except (ParseError, ValidationError) as e:
            logger.error("section_parse_failed", section=name, error=str(e))
        except Exception as e:
            logger.error("section_parse_crashed", section=name, error=str(e), exc_info=True)
        return empty

    @staticmethod
    def _attach_queries(screen: ScreenDefinition, screen_queries: list[ScreenQuery]) -> ScreenDefinition:
        matching = sorted(
            (sq for sq in screen_queries if sq.screen_code == screen.screen_code), key=lambda sq: sq.order
        )
        return screen.model_copy(update={"screen_queries": tuple(matching)})


def parse_microapp(
    microapp_markup: str = "",
    styles_markup: str = "",
    queries_markup: str = "",
    screens: Iterable[tuple[str, str]] = (),
) -> Document:
    """
    Convenience function to parse markup without configuring a parser.

    Examples:
        >>> doc = parse_microapp(screens=[("main", "<screen><screenCode>main</screenCode></screen>")])
        >>> doc.find_screen("main").screen_code
        'main'
    """
    return SDUIParser().parse(microapp_markup, styles_markup, queries_markup, screens)


__all__ = ["SDUIParser", "parse_microapp"]

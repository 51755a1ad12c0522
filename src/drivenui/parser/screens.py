"""Screen parser: one screen markup file → one ``ScreenDefinition``."""

from lxml import etree

from ..core.validate import MAX_COMPONENT_DEPTH
from ..models.document import ScreenDefinition, ScreenQuery
from .components import COMPONENT_TAGS, ComponentParser
from .cursor import MarkupCursor, local_name
from .queries import parse_screen_query


class ScreenParser:
    def __init__(self, max_depth: int = MAX_COMPONENT_DEPTH) -> None:
        self.components = ComponentParser(max_depth=max_depth)

    def parse(self, markup: str, name: str = "screen") -> ScreenDefinition | None:
        """
        Parse the first ``<screen>`` in ``markup``.

        Returns ``None`` when the markup holds no screen or the screen has
        no ``screenCode``.
        """
        cursor = MarkupCursor(markup, section=f"screen:{name}")
        element = cursor.find("screen")
        if element is None:
            return None
        return self._screen(cursor, element)

    def _screen(self, cursor: MarkupCursor, element: etree._Element) -> ScreenDefinition | None:
        screen_code = short_code = deeplink = ""
        root = None
        screen_queries: list[ScreenQuery] = []
        for child in cursor.children(element):
            name = local_name(child)
            match name:
                case "screenCode":
                    screen_code = cursor.text(child)
                case "screenShortCode":
                    short_code = cursor.text(child)
                case "deeplink":
                    deeplink = cursor.text(child)
                case "screenQueries":
                    for nested in cursor.children(child):
                        if local_name(nested) == "screenQuery":
                            screen_queries.append(parse_screen_query(cursor, nested))
                        else:
                            cursor.skip(nested)
                case "screenQuery":
                    screen_queries.append(parse_screen_query(cursor, child))
                case _ if name in COMPONENT_TAGS and root is None:
                    root = self.components.parse(cursor, child)
                case _:
                    cursor.skip(child)

        if not screen_code:
            return None
        # Queries listed inside a screen belong to it unless they say otherwise
        screen_queries = [
            sq if sq.screen_code else sq.model_copy(update={"screen_code": screen_code})
            for sq in screen_queries
        ]
        return ScreenDefinition(
            screen_code=screen_code,
            title=element.get("title", ""),
            short_code=short_code,
            deeplink=deeplink or None,
            root_component=root,
            screen_queries=screen_queries,
        )


__all__ = ["ScreenParser"]

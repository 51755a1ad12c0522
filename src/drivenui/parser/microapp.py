"""Microapp root parser."""

from lxml import etree

from ..models.document import Microapp
from .cursor import MarkupCursor, local_name


class MicroappParser:
    def parse(self, markup: str) -> Microapp | None:
        """Read the first ``<microapp>`` element; ``None`` when there is none."""
        cursor = MarkupCursor(markup, section="microapp")
        element = cursor.find("microapp")
        if element is None:
            return None
        return self._microapp(cursor, element)

    def _microapp(self, cursor: MarkupCursor, element: etree._Element) -> Microapp:
        code = short_code = deeplink = ""
        persistents: list[str] = []
        for child in cursor.children(element):
            match local_name(child):
                case "code":
                    code = cursor.text(child)
                case "shortCode":
                    short_code = cursor.text(child)
                case "deeplink":
                    deeplink = cursor.text(child)
                case "persistent":
                    if value := cursor.text(child):
                        persistents.append(value)
                case "persistents":
                    for nested in cursor.children(child):
                        value = cursor.text(nested)
                        if local_name(nested) == "persistent" and value:
                            persistents.append(value)
                case _:
                    # screens and anything else are parsed elsewhere
                    cursor.skip(child)
        return Microapp(
            title=element.get("title", ""),
            code=code,
            short_code=short_code,
            deeplink=deeplink,
            persistents=persistents,
        )


__all__ = ["MicroappParser"]

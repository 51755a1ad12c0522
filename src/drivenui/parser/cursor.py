"""Pull-style cursor over lxml start/end events.

Sub-parsers walk markup tag by tag and build the models directly; there
is no intermediate generic tree on the engine side. lxml itself still
assembles its element tree for the section, because the whole section is
read and checked for well-formedness before any event is handed out, so
a malformed section fails as a unit.

Every element yielded by ``children`` must be consumed by the caller,
either through ``text``, ``skip`` or a nested sub-parser that loops over
``children`` of that element.
"""

from collections.abc import Iterator

from lxml import etree

from ..core.errors import ParseError


def local_name(element: etree._Element) -> str:
    """Tag without namespace (``{urn:x}screen`` → ``screen``)."""
    return etree.QName(element).localname


class MarkupCursor:
    """Sequential access to the start/end events of one markup section."""

    def __init__(self, markup: str, section: str = "markup") -> None:
        self.section = section
        parser = etree.XMLPullParser(
            events=("start", "end"),
            resolve_entities=False,
            no_network=True,
        )
        events: list[tuple[str, etree._Element]] = []
        try:
            parser.feed(markup.encode("utf-8"))
            events.extend(parser.read_events())
            parser.close()
        except etree.XMLSyntaxError as e:
            raise ParseError(section, f"malformed markup: {e}") from e
        events.extend(parser.read_events())

        self._events = events
        self._pos = 0

    def _next(self) -> tuple[str, etree._Element] | None:
        if self._pos >= len(self._events):
            return None
        event = self._events[self._pos]
        self._pos += 1
        return event

    def starts(self) -> Iterator[etree._Element]:
        """Yield every remaining start event in document order.

        A caller may consume a yielded element (its subtree is then not
        revisited) or ignore it and keep descending.
        """
        while (event := self._next()) is not None:
            kind, element = event
            if kind == "start":
                yield element

    def find(self, tag: str) -> etree._Element | None:
        """Advance to the next start of ``tag`` at any depth."""
        for element in self.starts():
            if local_name(element) == tag:
                return element
        return None

    def find_all(self, tag: str) -> Iterator[etree._Element]:
        """Yield every start of ``tag``; the caller consumes each one."""
        while (element := self.find(tag)) is not None:
            yield element

    def children(self, parent: etree._Element) -> Iterator[etree._Element]:
        """Yield direct children of ``parent`` until its end event."""
        while (event := self._next()) is not None:
            kind, element = event
            if kind == "end":
                if element is parent:
                    return
                continue
            yield element
        raise ParseError(self.section, f"unterminated <{local_name(parent)}>")

    def skip(self, element: etree._Element) -> None:
        """Consume ``element`` and its whole subtree."""
        while (event := self._next()) is not None:
            kind, current = event
            if kind == "end" and current is element:
                return
        raise ParseError(self.section, f"unterminated <{local_name(element)}>")

    def text(self, element: etree._Element) -> str:
        """Consume ``element`` and return its leading text, trimmed."""
        self.skip(element)
        return (element.text or "").strip()

    def int_text(self, element: etree._Element, default: int = 0) -> int:
        value = self.text(element)
        try:
            return int(value)
        except ValueError:
            return default


__all__ = ["MarkupCursor", "local_name"]

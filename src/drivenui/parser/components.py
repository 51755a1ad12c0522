"""Component tree parser for ``screenLayout`` / ``screenLayoutWidget`` markup.

Fields of a node are collected first and the variant is decided last, so a
generic ``<component>`` element can be classified from what it contains.
"""

from typing import Any

from lxml import etree

from ..core.logging_config import get_logger
from ..core.validate import MAX_COMPONENT_DEPTH, validate_depth
from ..models.components import (
    ComponentProperty,
    EventAction,
    EventProperty,
    LayoutComponent,
    StyleRef,
    WidgetComponent,
    WidgetEvent,
    background_style,
    component_tag,
    round_style,
)
from .cursor import MarkupCursor, local_name

logger = get_logger(__name__)

LAYOUT_TAG = "screenLayout"
WIDGET_TAG = "screenLayoutWidget"
GENERIC_TAG = "component"
COMPONENT_TAGS = frozenset({LAYOUT_TAG, WIDGET_TAG, GENERIC_TAG})

_IMAGE_MARKERS = ("image", ".svg")


class ComponentParser:
    """Recursive, tag-driven component parser with a nesting limit."""

    def __init__(self, max_depth: int = MAX_COMPONENT_DEPTH) -> None:
        self.max_depth = max_depth

    def parse(
        self, cursor: MarkupCursor, element: etree._Element, depth: int = 1
    ) -> LayoutComponent | WidgetComponent:
        """
        Parse the component whose start tag was just read.

        Raises:
            ValidationError: If nesting exceeds ``max_depth``
            ParseError: If the markup ends inside the component
        """
        validate_depth(depth, self.max_depth, name=cursor.section)

        tag = local_name(element)
        fields: dict[str, Any] = {
            "title": element.get("title", ""),
            "properties": [],
            "styles": [],
            "events": [],
            "binding_properties": [],
        }
        children: list[LayoutComponent | WidgetComponent] = []

        for child in cursor.children(element):
            name = local_name(child)
            match name:
                case "screenLayoutCode" | "screenLayoutWidgetCode" | "code":
                    fields["code"] = cursor.text(child)
                case "layoutCode":
                    fields["layout_code"] = cursor.text(child)
                case "widgetCode":
                    fields["widget_code"] = cursor.text(child)
                case "widgetType":
                    fields["widget_type"] = cursor.text(child)
                case "screenLayoutIndex" | "index":
                    fields["index"] = cursor.int_text(child)
                case "forIndexName":
                    fields["for_index_name"] = cursor.text(child) or None
                case "properties":
                    fields["properties"].extend(self._properties(cursor, child))
                case "property":
                    if (prop := self._property(cursor, child)) is not None:
                        fields["properties"].append(prop)
                case "styles":
                    fields["styles"].extend(self._styles(cursor, child))
                case "style":
                    if (style := self._style(cursor, child)) is not None:
                        fields["styles"].append(style)
                case "events":
                    fields["events"].extend(self._events(cursor, child))
                case "event":
                    if (event := self._event(cursor, child)) is not None:
                        fields["events"].append(event)
                case "bindingProperties":
                    fields["binding_properties"].extend(self._binding_properties(cursor, child))
                case _ if name in COMPONENT_TAGS:
                    children.append(self.parse(cursor, child, depth + 1))
                case _:
                    cursor.skip(child)

        if self._classify(tag, element, fields) == "widget":
            return self._build_widget(fields)
        return self._build_layout(fields, children)

    def _classify(self, tag: str, element: etree._Element, fields: dict[str, Any]) -> str:
        # Explicit discriminator first, then the tag, then sniffing
        explicit = element.get("kind")
        if explicit in ("layout", "widget"):
            return explicit
        if tag == LAYOUT_TAG:
            return "layout"
        if tag == WIDGET_TAG:
            return "widget"
        sniff = {key: fields[key] for key in ("layout_code", "widget_code") if key in fields}
        if "widget_code" in sniff:
            sniff["widget_type"] = fields.get("widget_type", "native")
        return component_tag(sniff) or "layout"

    def _build_layout(
        self, fields: dict[str, Any], children: list[LayoutComponent | WidgetComponent]
    ) -> LayoutComponent:
        fields.pop("widget_code", None)
        fields.pop("widget_type", None)
        return LayoutComponent(
            **fields,
            children=children,
            background_style_code=background_style(fields["styles"]),
            round_style_code=round_style(fields["styles"]),
        )

    def _build_widget(self, fields: dict[str, Any]) -> WidgetComponent:
        widget_code = fields.pop("widget_code", "")
        if widget_code == "label" and any(
            marker in binding for binding in fields["binding_properties"] for marker in _IMAGE_MARKERS
        ):
            logger.debug("label_reclassified_as_image", code=fields.get("code", ""))
            widget_code = "image"
        fields.pop("layout_code", None)
        fields.pop("for_index_name", None)
        return WidgetComponent(**fields, widget_code=widget_code)

    def _properties(self, cursor: MarkupCursor, element: etree._Element) -> list[ComponentProperty]:
        result = []
        for child in cursor.children(element):
            if local_name(child) != "property":
                cursor.skip(child)
            elif (prop := self._property(cursor, child)) is not None:
                result.append(prop)
        return result

    def _property(self, cursor: MarkupCursor, element: etree._Element) -> ComponentProperty | None:
        code, value = self._code_value(cursor, element)
        return ComponentProperty(code=code, value=value) if code else None

    def _styles(self, cursor: MarkupCursor, element: etree._Element) -> list[StyleRef]:
        result = []
        for child in cursor.children(element):
            if local_name(child) != "style":
                cursor.skip(child)
            elif (style := self._style(cursor, child)) is not None:
                result.append(style)
        return result

    def _style(self, cursor: MarkupCursor, element: etree._Element) -> StyleRef | None:
        code, value = self._code_value(cursor, element)
        return StyleRef(code=code, value=value) if code else None

    def _code_value(self, cursor: MarkupCursor, element: etree._Element) -> tuple[str, str]:
        code = value = ""
        for child in cursor.children(element):
            match local_name(child):
                case "code":
                    code = cursor.text(child)
                case "value":
                    value = cursor.text(child)
                case _:
                    cursor.skip(child)
        return code, value

    def _events(self, cursor: MarkupCursor, element: etree._Element) -> list[WidgetEvent]:
        result = []
        for child in cursor.children(element):
            if local_name(child) != "event":
                cursor.skip(child)
            elif (event := self._event(cursor, child)) is not None:
                result.append(event)
        return result

    def _event(self, cursor: MarkupCursor, element: etree._Element) -> WidgetEvent | None:
        event_code = ""
        order = 0
        actions: list[EventAction] = []
        for child in cursor.children(element):
            match local_name(child):
                case "eventCode" | "event_code":
                    event_code = cursor.text(child)
                case "order":
                    order = cursor.int_text(child)
                case "eventActions":
                    for nested in cursor.children(child):
                        if local_name(nested) != "eventAction":
                            cursor.skip(nested)
                        elif (action := self._event_action(cursor, nested)) is not None:
                            actions.append(action)
                case "eventAction":
                    if (action := self._event_action(cursor, child)) is not None:
                        actions.append(action)
                case _:
                    cursor.skip(child)
        if not event_code:
            return None
        return WidgetEvent(event_code=event_code, order=order, actions=actions)

    def _event_action(self, cursor: MarkupCursor, element: etree._Element) -> EventAction | None:
        code = ""
        order = 0
        properties: list[EventProperty] = []
        for child in cursor.children(element):
            match local_name(child):
                case "code":
                    code = cursor.text(child)
                case "order":
                    order = cursor.int_text(child)
                case "properties":
                    for nested in cursor.children(child):
                        if local_name(nested) == "property":
                            prop_code, prop_value = self._code_value(cursor, nested)
                            if prop_code:
                                properties.append(EventProperty(code=prop_code, value=prop_value))
                        else:
                            cursor.skip(nested)
                case "property":
                    prop_code, prop_value = self._code_value(cursor, child)
                    if prop_code:
                        properties.append(EventProperty(code=prop_code, value=prop_value))
                case _:
                    cursor.skip(child)
        if not code:
            return None
        return EventAction(code=code, title=element.get("title", ""), order=order, properties=properties)

    def _binding_properties(self, cursor: MarkupCursor, element: etree._Element) -> list[str]:
        values = []
        for child in cursor.children(element):
            if local_name(child) == "value":
                if text := cursor.text(child):
                    values.append(text)
            else:
                cursor.skip(child)
        # Bare text form: <bindingProperties>a.b</bindingProperties>
        if (text := (element.text or "").strip()):
            values.insert(0, text)
        return values


__all__ = ["ComponentParser", "COMPONENT_TAGS", "LAYOUT_TAG", "WIDGET_TAG", "GENERIC_TAG"]

"""Component tree: layouts (containers) and widgets (leaves).

The tree is strictly acyclic; each node is owned by its parent. Serialized
components carry an explicit ``kind`` discriminator. Payloads without one
(written before the field existed) are sniffed: ``layout_code`` means a
layout, ``widget_code`` plus ``widget_type`` means a widget, and anything
else is read as a layout. That fallback exists for old payloads only.
"""

from collections.abc import Iterator, Sequence
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import Discriminator, Tag

from .base import FrozenModel


class LayoutKind(str, Enum):
    """Container arrangement."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"
    LAYERS = "layers"
    VERTICAL_FOR = "verticalFor"
    HORIZONTAL_FOR = "horizontalFor"

    @classmethod
    def from_code(cls, code: str) -> "LayoutKind":
        """Map a markup ``layoutCode``; unknown codes fall back to vertical."""
        normalized = code.strip()
        if normalized == "layer":
            return cls.LAYERS
        for kind in cls:
            if kind.value.lower() == normalized.lower():
                return kind
        return cls.VERTICAL

    @property
    def is_loop(self) -> bool:
        return self in (LayoutKind.VERTICAL_FOR, LayoutKind.HORIZONTAL_FOR)


class ComponentProperty(FrozenModel):
    """Property with its raw markup literal and, once resolved, its display value."""

    code: str
    value: str = ""
    resolved_value: str | None = None

    @property
    def effective_value(self) -> str:
        return self.value if self.resolved_value is None else self.resolved_value


class StyleRef(FrozenModel):
    """Reference from a component to a style record (``textStyle`` → ``bodyM``)."""

    code: str
    value: str = ""
    resolved_value: str | None = None

    @property
    def effective_value(self) -> str:
        return self.value if self.resolved_value is None else self.resolved_value


class EventProperty(FrozenModel):
    code: str
    value: str = ""


class EventAction(FrozenModel):
    """Declarative action attached to an event (``openScreen``, ``nativeCode`` ...)."""

    code: str
    title: str = ""
    order: int = 0
    properties: tuple[EventProperty, ...] = ()

    def find_property(self, code: str) -> str | None:
        for prop in self.properties:
            if prop.code == code:
                return prop.value
        return None


class WidgetEvent(FrozenModel):
    """Event such as ``onTap`` or ``onCreate`` with its ordered actions."""

    event_code: str
    order: int = 0
    actions: tuple[EventAction, ...] = ()


class ComponentBase(FrozenModel):
    title: str = ""
    code: str = ""
    properties: tuple[ComponentProperty, ...] = ()
    styles: tuple[StyleRef, ...] = ()
    events: tuple[WidgetEvent, ...] = ()
    binding_properties: tuple[str, ...] = ()
    index: int = 0

    def find_property(self, code: str) -> ComponentProperty | None:
        for prop in self.properties:
            if prop.code == code:
                return prop
        return None

    def property_value(self, code: str, default: str | None = None) -> str | None:
        prop = self.find_property(code)
        return prop.effective_value if prop is not None else default

    def style_code(self, code: str) -> str | None:
        for style in self.styles:
            if style.code == code:
                return style.effective_value
        return None


class LayoutComponent(ComponentBase):
    kind: Literal["layout"] = "layout"
    layout_code: str = LayoutKind.VERTICAL.value
    children: tuple["Component", ...] = ()
    background_style_code: str | None = None
    round_style_code: str | None = None
    for_index_name: str | None = None

    @property
    def layout_kind(self) -> LayoutKind:
        return LayoutKind.from_code(self.layout_code)


class WidgetComponent(ComponentBase):
    kind: Literal["widget"] = "widget"
    widget_code: str
    widget_type: str = "native"


# Layout style references promoted to dedicated fields
BACKGROUND_STYLE_CODES = ("backgroundColorStyle", "colorStyle")
ROUND_STYLE_CODE = "roundStyle"


def background_style(styles: Sequence[StyleRef]) -> str | None:
    """First background reference, ``backgroundColorStyle`` before ``colorStyle``."""
    for code in BACKGROUND_STYLE_CODES:
        for style in styles:
            if style.code == code:
                return style.effective_value
    return None


def round_style(styles: Sequence[StyleRef]) -> str | None:
    for style in styles:
        if style.code == ROUND_STYLE_CODE:
            return style.effective_value
    return None


def component_tag(value: Any) -> str | None:
    """Pick the component variant for validation input."""
    if isinstance(value, dict):
        kind = value.get("kind")
        if kind is not None:
            return kind
        if "layout_code" in value:
            return "layout"
        if "widget_code" in value and "widget_type" in value:
            return "widget"
        return "layout"
    return getattr(value, "kind", None)


Component = Annotated[
    Union[
        Annotated[LayoutComponent, Tag("layout")],
        Annotated[WidgetComponent, Tag("widget")],
    ],
    Discriminator(component_tag),
]

LayoutComponent.model_rebuild()


def iter_components(root: LayoutComponent | WidgetComponent | None) -> Iterator[LayoutComponent | WidgetComponent]:
    """Depth-first, pre-order walk."""
    if root is None:
        return
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, LayoutComponent):
            stack.extend(reversed(node.children))


def count_components(root: LayoutComponent | WidgetComponent | None) -> int:
    return sum(1 for _ in iter_components(root))


__all__ = [
    "LayoutKind",
    "ComponentProperty",
    "StyleRef",
    "EventProperty",
    "EventAction",
    "WidgetEvent",
    "ComponentBase",
    "LayoutComponent",
    "WidgetComponent",
    "Component",
    "component_tag",
    "background_style",
    "round_style",
    "iter_components",
    "count_components",
]

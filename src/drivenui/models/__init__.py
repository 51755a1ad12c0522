"""Typed document model."""

from .actions import (
    Back,
    DataTransform,
    Empty,
    ExecuteQuery,
    NativeCode,
    OpenBottomSheet,
    OpenDeeplink,
    OpenScreen,
    RefreshLayout,
    RefreshScreen,
    RefreshWidget,
    SaveToContext,
    UiAction,
)
from .components import (
    Component,
    ComponentProperty,
    EventAction,
    EventProperty,
    LayoutComponent,
    LayoutKind,
    StyleRef,
    WidgetComponent,
    WidgetEvent,
    count_components,
    iter_components,
)
from .document import (
    Document,
    Microapp,
    Query,
    QueryCondition,
    QueryProperty,
    ScreenDefinition,
    ScreenQuery,
)
from .serialization import (
    dump_action,
    dump_component,
    dump_document,
    load_action,
    load_component,
    load_document,
)
from .styles import (
    AlignmentStyle,
    ColorStyle,
    ColorTheme,
    PaddingStyle,
    RoundStyle,
    StyleSet,
    TextStyle,
)
from .values import ContextValue, as_bool, as_number, as_string, coerce_value, stringify

__all__ = [
    # Actions
    "UiAction",
    "OpenScreen",
    "Back",
    "OpenBottomSheet",
    "RefreshScreen",
    "RefreshWidget",
    "RefreshLayout",
    "OpenDeeplink",
    "ExecuteQuery",
    "DataTransform",
    "SaveToContext",
    "NativeCode",
    "Empty",
    # Components
    "Component",
    "LayoutComponent",
    "WidgetComponent",
    "LayoutKind",
    "ComponentProperty",
    "StyleRef",
    "EventAction",
    "EventProperty",
    "WidgetEvent",
    "iter_components",
    "count_components",
    # Document
    "Document",
    "Microapp",
    "Query",
    "QueryCondition",
    "QueryProperty",
    "ScreenDefinition",
    "ScreenQuery",
    # Styles
    "StyleSet",
    "TextStyle",
    "ColorStyle",
    "ColorTheme",
    "AlignmentStyle",
    "PaddingStyle",
    "RoundStyle",
    # Values
    "ContextValue",
    "coerce_value",
    "stringify",
    "as_number",
    "as_bool",
    "as_string",
    # Serialization
    "dump_document",
    "load_document",
    "dump_component",
    "load_component",
    "dump_action",
    "load_action",
]

"""UI actions produced by user interaction and interpreted by the dispatcher.

The set is closed. Serialized actions carry a ``type`` discriminator. For
payloads without it the variant is sniffed from its required fields in the
order of ``_SNIFF_ORDER``; when nothing matches the action reads as
``Empty``. The sniffing keeps older payloads loadable and is not meant for
new data.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import Discriminator, Field, Tag

from .base import FrozenModel


class OpenScreen(FrozenModel):
    type: Literal["open_screen"] = "open_screen"
    screen_code: str


class OpenBottomSheet(FrozenModel):
    type: Literal["open_bottom_sheet"] = "open_bottom_sheet"
    screen_code: str = ""


class RefreshScreen(FrozenModel):
    type: Literal["refresh_screen"] = "refresh_screen"
    screen_code: str = ""


class RefreshWidget(FrozenModel):
    type: Literal["refresh_widget"] = "refresh_widget"
    widget_code: str = ""


class RefreshLayout(FrozenModel):
    type: Literal["refresh_layout"] = "refresh_layout"
    layout_code: str = ""


class OpenDeeplink(FrozenModel):
    type: Literal["open_deeplink"] = "open_deeplink"
    deeplink: str


class ExecuteQuery(FrozenModel):
    type: Literal["execute_query"] = "execute_query"
    query_code: str


class DataTransform(FrozenModel):
    type: Literal["data_transform"] = "data_transform"
    variable_name: str
    new_value: str = ""


class SaveToContext(FrozenModel):
    type: Literal["save_to_context"] = "save_to_context"
    value_from: str
    value_to: str


class NativeCode(FrozenModel):
    type: Literal["native_code"] = "native_code"
    action_code: str
    parameters: dict[str, str] = Field(default_factory=dict)


class Back(FrozenModel):
    type: Literal["back"] = "back"


class Empty(FrozenModel):
    type: Literal["empty"] = "empty"


# (required fields, tag) checked top to bottom for untagged payloads
_SNIFF_ORDER: tuple[tuple[tuple[str, ...], str], ...] = (
    (("action_code",), "native_code"),
    (("value_from", "value_to"), "save_to_context"),
    (("variable_name",), "data_transform"),
    (("deeplink",), "open_deeplink"),
    (("query_code",), "execute_query"),
    (("widget_code",), "refresh_widget"),
    (("layout_code",), "refresh_layout"),
    (("screen_code",), "open_screen"),
)


def action_tag(value: Any) -> str | None:
    """Pick the action variant for validation input."""
    if isinstance(value, dict):
        tag = value.get("type")
        if tag is not None:
            return tag
        for required, sniffed in _SNIFF_ORDER:
            if all(key in value for key in required):
                return sniffed
        return "empty"
    return getattr(value, "type", None)


UiAction = Annotated[
    Union[
        Annotated[OpenScreen, Tag("open_screen")],
        Annotated[OpenBottomSheet, Tag("open_bottom_sheet")],
        Annotated[RefreshScreen, Tag("refresh_screen")],
        Annotated[RefreshWidget, Tag("refresh_widget")],
        Annotated[RefreshLayout, Tag("refresh_layout")],
        Annotated[OpenDeeplink, Tag("open_deeplink")],
        Annotated[ExecuteQuery, Tag("execute_query")],
        Annotated[DataTransform, Tag("data_transform")],
        Annotated[SaveToContext, Tag("save_to_context")],
        Annotated[NativeCode, Tag("native_code")],
        Annotated[Back, Tag("back")],
        Annotated[Empty, Tag("empty")],
    ],
    Discriminator(action_tag),
]


__all__ = [
    "OpenScreen",
    "OpenBottomSheet",
    "RefreshScreen",
    "RefreshWidget",
    "RefreshLayout",
    "OpenDeeplink",
    "ExecuteQuery",
    "DataTransform",
    "SaveToContext",
    "NativeCode",
    "Back",
    "Empty",
    "UiAction",
    "action_tag",
]

"""Markup events → UI actions.

Action codes are matched case-insensitively. Codes with no mapping, or
mapped codes missing a required property, become ``Empty``.
"""

from ..core.logging_config import get_logger
from ..models.actions import (
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
from ..models.components import EventAction, WidgetEvent

logger = get_logger(__name__)

TAP_EVENT = "onTap"
CREATE_EVENT = "onCreate"


def map_event_action(action: EventAction) -> UiAction:
    """Convert one declarative event action into a dispatchable action."""
    prop = action.find_property

    match action.code.lower():
        case "openscreen":
            if (screen_code := prop("screenCode")) is not None:
                return OpenScreen(screen_code=screen_code)
        case "openbottomsheet":
            return OpenBottomSheet(screen_code=prop("screenCode") or "")
        case "back" | "goback":
            return Back()
        case "refreshscreen":
            return RefreshScreen(screen_code=prop("screenCode") or "")
        case "refreshwidget":
            return RefreshWidget(widget_code=prop("widgetCode") or "")
        case "refreshlayout":
            return RefreshLayout(layout_code=prop("layoutCode") or "")
        case "opendeeplink" | "deeplink":
            if deeplink := prop("deeplink"):
                return OpenDeeplink(deeplink=deeplink)
        case "executequery" | "query":
            if query_code := prop("queryCode"):
                return ExecuteQuery(query_code=query_code)
        case "datatransform":
            if variable_name := prop("variableName"):
                return DataTransform(variable_name=variable_name, new_value=prop("newValue") or "")
        case "savetocontext":
            value_from, value_to = prop("valueFrom"), prop("valueTo")
            if value_from and value_to:
                return SaveToContext(value_from=value_from, value_to=value_to)
        case "nativecode":
            if action_code := prop("actionCode"):
                parameters = {p.code: p.value for p in action.properties if p.code != "actionCode"}
                return NativeCode(action_code=action_code, parameters=parameters)

    logger.debug("event_action_unmapped", code=action.code)
    return Empty()


def actions_for_event(events: list[WidgetEvent], event_code: str = TAP_EVENT) -> list[UiAction]:
    """Actions of the first event with ``event_code``, in declared order."""
    for event in events:
        if event.event_code == event_code:
            ordered = sorted(event.actions, key=lambda a: a.order)
            return [map_event_action(a) for a in ordered]
    return []


__all__ = ["map_event_action", "actions_for_event", "TAP_EVENT", "CREATE_EVENT"]

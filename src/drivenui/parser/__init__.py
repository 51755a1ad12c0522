"""Markup parsing: sections → Document."""

from .cache import DocumentCache, document_key
from .components import ComponentParser
from .cursor import MarkupCursor, local_name
from .events import TAP_EVENT, CREATE_EVENT, actions_for_event, map_event_action
from .microapp import MicroappParser
from .queries import QueryParser
from .screens import ScreenParser
from .sdui import SDUIParser, parse_microapp
from .styles import StyleParser
from .validate import DocumentValidator, validate_document

__all__ = [
    "SDUIParser",
    "parse_microapp",
    "MarkupCursor",
    "local_name",
    "MicroappParser",
    "StyleParser",
    "QueryParser",
    "ScreenParser",
    "ComponentParser",
    "DocumentCache",
    "document_key",
    "map_event_action",
    "actions_for_event",
    "TAP_EVENT",
    "CREATE_EVENT",
    "DocumentValidator",
    "validate_document",
]

"""JSON transport form of documents, components and actions.

Every component and action is written with its discriminator field
(``kind`` / ``type``); see ``components`` and ``actions`` for how untagged
legacy payloads are read back.
"""

from typing import Any

from pydantic import TypeAdapter, ValidationError

from ..core.json import JSONParseError, decode_json, safe_json_dumps
from .actions import UiAction
from .components import Component
from .document import Document

_action_adapter: TypeAdapter[Any] = TypeAdapter(UiAction)
_component_adapter: TypeAdapter[Any] = TypeAdapter(Component)
_document_adapter: TypeAdapter[Document] = TypeAdapter(Document)


def _dump(adapter: TypeAdapter[Any], value: Any, indent: int) -> str:
    return safe_json_dumps(adapter.dump_python(value, mode="json"), indent=indent)


def _load(adapter: TypeAdapter[Any], data: str | bytes) -> Any:
    payload = decode_json(data)
    try:
        return adapter.validate_python(payload)
    except ValidationError as e:
        raise JSONParseError(f"Invalid payload: {e.error_count()} error(s)", e) from e


def dump_document(document: Document, indent: int = 0) -> str:
    return _dump(_document_adapter, document, indent)


def load_document(data: str | bytes) -> Document:
    """
    Read a document written by ``dump_document``.

    Raises:
        JSONParseError: If the text is not JSON or does not describe a document
    """
    return _load(_document_adapter, data)


def dump_component(component: Any, indent: int = 0) -> str:
    return _dump(_component_adapter, component, indent)


def load_component(data: str | bytes) -> Any:
    return _load(_component_adapter, data)


def dump_action(action: Any, indent: int = 0) -> str:
    return _dump(_action_adapter, action, indent)


def load_action(data: str | bytes) -> Any:
    return _load(_action_adapter, data)


def action_from_dict(payload: dict[str, Any]) -> Any:
    """Validate an already-decoded action mapping."""
    return _action_adapter.validate_python(payload)


__all__ = [
    "dump_document",
    "load_document",
    "dump_component",
    "load_component",
    "dump_action",
    "load_action",
    "action_from_dict",
]

"""Fast JSON encoding/decoding for the transport form of documents and actions."""

from typing import Any
import json

import msgspec
import orjson


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


_decoder = msgspec.json.Decoder()


def decode_json(data: str | bytes, expect: type | None = dict) -> Any:
    """
    Decode JSON text.

    Args:
        data: JSON text or UTF-8 bytes
        expect: Required top-level type (None accepts anything)

    Returns:
        Decoded Python object

    Raises:
        JSONParseError: If decoding fails or the top-level type is wrong
    """
    raw = data.encode("utf-8") if isinstance(data, str) else data
    try:
        result = _decoder.decode(raw)
    except msgspec.DecodeError as e:
        raise JSONParseError(f"Invalid JSON: {e}", e) from e

    if expect is not None and not isinstance(result, expect):
        raise JSONParseError(f"Expected {expect.__name__}, got {type(result).__name__}")
    return result


def safe_json_dumps(obj: Any, **kwargs: Any) -> str:
    """
    Encode object to JSON string using fastest available library.

    Args:
        obj: Object to encode
        **kwargs: Additional arguments (indent, etc.)

    Returns:
        JSON string
    """
    indent = kwargs.get("indent", 0)

    if indent == 0:
        try:
            return orjson.dumps(obj).decode("utf-8")
        except (TypeError, ValueError):
            # Integers outside 64-bit range and similar edge cases
            pass

    return json.dumps(obj, indent=indent if indent > 0 else None, ensure_ascii=False)


__all__ = ["JSONParseError", "decode_json", "safe_json_dumps"]

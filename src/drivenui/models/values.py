"""Context value type and typed accessors.

Context variables are restricted to strings, numbers, booleans and null.
Anything else a host hands in is stringified on the way in.
"""

import re
from typing import Any, TypeAlias

ContextValue: TypeAlias = str | int | float | bool | None

_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def coerce_value(value: Any) -> ContextValue:
    """Narrow an arbitrary host value to a ``ContextValue``."""
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    return str(value)


def stringify(value: ContextValue) -> str:
    """Best-effort text form used when substituting into markup."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def parse_number(text: str) -> int | float | None:
    """Parse an integer or decimal literal; ``None`` for anything else."""
    stripped = text.strip()
    if _INT_RE.match(stripped):
        return int(stripped)
    if _FLOAT_RE.match(stripped):
        return float(stripped)
    return None


def as_number(value: ContextValue) -> int | float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        return parse_number(value)
    return None


def as_bool(value: ContextValue) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "false"):
            return lowered == "true"
    return None


def as_string(value: ContextValue) -> str | None:
    return None if value is None else stringify(value)


__all__ = [
    "ContextValue",
    "coerce_value",
    "stringify",
    "parse_number",
    "as_number",
    "as_bool",
    "as_string",
]

"""Input validation for markup sections."""

from dataclasses import dataclass
from typing import Any

# Validation limits
MAX_MARKUP_SIZE = 2 * 1024 * 1024  # 2MB per section
MAX_COMPONENT_DEPTH = 30


class ValidationError(Exception):
    """Validation failed."""

    pass


@dataclass(frozen=True)
class ValidationResult:
    """Validation error with details (for Result pattern)."""

    message: str
    field: str | None = None
    value: Any | None = None


def validate_markup_size(markup: str, max_size: int = MAX_MARKUP_SIZE, name: str = "markup") -> None:
    """
    Reject oversized markup before handing it to the XML parser.

    Raises:
        ValidationError: If the UTF-8 size exceeds the limit
    """
    size = len(markup.encode("utf-8"))
    if size > max_size:
        raise ValidationError(f"{name} size {size} bytes exceeds maximum {max_size} bytes")


def validate_depth(depth: int, max_depth: int = MAX_COMPONENT_DEPTH, name: str = "component") -> None:
    """
    Guard recursive component parsing.

    Raises:
        ValidationError: If nesting depth exceeds the limit
    """
    if depth > max_depth:
        raise ValidationError(f"{name} nesting depth {depth} exceeds maximum {max_depth}")

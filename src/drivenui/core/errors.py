"""Error taxonomy shared by parser and engine."""

from dataclasses import dataclass
from enum import Enum


class ParseError(Exception):
    """A markup section could not be parsed.

    Always handled by ``SDUIParser``; the failing section becomes empty.
    """

    def __init__(self, section: str, message: str) -> None:
        super().__init__(f"{section}: {message}")
        self.section = section
        self.message = message


class DispatchErrorKind(str, Enum):
    """Why an action could not be dispatched."""

    SCREEN_NOT_FOUND = "screen_not_found"
    AT_ROOT = "at_root"
    DEEPLINK_UNHANDLED = "deeplink_unhandled"
    SOURCE_MISSING = "source_missing"
    NO_EXECUTOR = "no_executor"
    HOST_EXECUTOR_FAILURE = "host_executor_failure"
    INVALID_TARGET = "invalid_target"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class DispatchError:
    """Typed dispatch failure returned to the caller (never raised)."""

    kind: DispatchErrorKind
    message: str
    cause: BaseException | None = None

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


__all__ = ["ParseError", "DispatchErrorKind", "DispatchError"]

"""ID Generation.

ULID-based identifiers for navigation frames and sessions. ULIDs sort by
creation time, so frame ids in logs read in push order.
"""

from typing import NewType
from ulid import ULID

ScreenStateID = NewType("ScreenStateID", str)
"""Navigation stack frame identifier"""

SessionID = NewType("SessionID", str)
"""Engine session identifier"""


class Prefix:
    """ID prefix constants."""

    SCREEN_STATE = "frame"
    SESSION = "sess"


def generate(prefix: str | None = None) -> str:
    """Generate a new ULID, optionally prefixed (``frame_01H...``)."""
    value = str(ULID())
    return f"{prefix}_{value}" if prefix else value


def new_screen_state_id() -> ScreenStateID:
    return ScreenStateID(generate(Prefix.SCREEN_STATE))


def new_session_id() -> SessionID:
    return SessionID(generate(Prefix.SESSION))


__all__ = [
    "ScreenStateID",
    "SessionID",
    "Prefix",
    "generate",
    "new_screen_state_id",
    "new_session_id",
]

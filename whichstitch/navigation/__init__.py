"""navigation — cursor movement over parsed rows."""

from whichstitch.navigation.cursor import (
    CursorMove,
    StitchCursor,
    advance_cursor,
    clamp_cursor,
    current_step,
    is_complete,
    move_to_row,
)

__all__ = [
    "CursorMove",
    "StitchCursor",
    "advance_cursor",
    "clamp_cursor",
    "current_step",
    "is_complete",
    "move_to_row",
]

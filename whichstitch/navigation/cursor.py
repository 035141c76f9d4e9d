"""
Timeline cursor over parsed rows.

A cursor addresses one cell of ``rows[row_index].expanded``. Moving forward
past the end of a row rolls into the next row; moving backward past the
start rolls into the previous one. Movement stops at the first stitch of the
first row and the last stitch of the last row.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from whichstitch.schemas.pattern import PatternRow, StitchStep


@dataclass(frozen=True)
class StitchCursor:
    row_index: int = 0
    stitch_index: int = 0


@dataclass(frozen=True)
class CursorMove:
    """
    Result of advancing a cursor.

    Attributes:
        cursor: The cursor after the move (always within bounds).
        completed: True when the cursor sits on the last stitch of the last row.
    """

    cursor: StitchCursor
    completed: bool


def _row_length(row: PatternRow) -> int:
    return max(1, len(row.expanded))


def clamp_cursor(rows: Sequence[PatternRow], cursor: StitchCursor) -> StitchCursor:
    """Clamp a cursor into the bounds of ``rows``; empty rows give (0, 0)."""
    if not rows:
        return StitchCursor()
    row_index = min(max(cursor.row_index, 0), len(rows) - 1)
    stitch_index = min(max(cursor.stitch_index, 0), _row_length(rows[row_index]) - 1)
    return StitchCursor(row_index=row_index, stitch_index=stitch_index)


def is_complete(rows: Sequence[PatternRow], cursor: StitchCursor) -> bool:
    """True if ``cursor`` is on the last stitch of the last row."""
    if not rows:
        return False
    last = len(rows) - 1
    return cursor.row_index == last and cursor.stitch_index == _row_length(rows[last]) - 1


def advance_cursor(
    rows: Sequence[PatternRow], cursor: StitchCursor, amount: int = 1
) -> CursorMove:
    """Move ``amount`` stitches (negative moves back), rolling across rows."""
    current = clamp_cursor(rows, cursor)
    if not rows:
        return CursorMove(cursor=current, completed=False)

    row_index = current.row_index
    stitch_index = current.stitch_index + amount

    while stitch_index >= _row_length(rows[row_index]) and row_index < len(rows) - 1:
        stitch_index -= _row_length(rows[row_index])
        row_index += 1
    while stitch_index < 0 and row_index > 0:
        row_index -= 1
        stitch_index += _row_length(rows[row_index])

    moved = clamp_cursor(rows, StitchCursor(row_index=row_index, stitch_index=stitch_index))
    return CursorMove(cursor=moved, completed=is_complete(rows, moved))


def move_to_row(rows: Sequence[PatternRow], cursor: StitchCursor, offset: int) -> CursorMove:
    """Jump ``offset`` rows and land on that row's first stitch."""
    moved = clamp_cursor(rows, StitchCursor(row_index=cursor.row_index + offset, stitch_index=0))
    return CursorMove(cursor=moved, completed=is_complete(rows, moved))


def current_step(rows: Sequence[PatternRow], cursor: StitchCursor) -> StitchStep | None:
    """The timeline cell under the cursor, or None when there is nothing to show."""
    if not rows:
        return None
    current = clamp_cursor(rows, cursor)
    expanded = rows[current.row_index].expanded
    if not expanded:
        return None
    return expanded[current.stitch_index]

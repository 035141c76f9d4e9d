"""
Row and stitch counters.

Counters are frozen; every operation returns a new counter. Increments keep
an undo history of previous values, and a counter flagged
``advances_cursor`` moves the timeline cursor by the change it applied.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum

from whichstitch.navigation.cursor import CursorMove, StitchCursor, advance_cursor, move_to_row
from whichstitch.schemas.pattern import PatternRow


class CounterKind(str, Enum):
    ROW = "row"
    STITCH = "stitch"


_DEFAULT_LABELS = {CounterKind.ROW: "Row", CounterKind.STITCH: "Stitch"}


@dataclass(frozen=True)
class KnitCounter:
    """
    A tally the knitter bumps as they work.

    Attributes:
        id: Caller-assigned identifier.
        kind: ROW or STITCH.
        label: Display title; defaults to "Row" / "Stitch".
        value: Current count, never negative.
        history: Previous values, most recent last.
        advances_cursor: Whether increments also move the timeline cursor.
    """

    id: str
    kind: CounterKind
    label: str = ""
    value: int = 0
    history: tuple[int, ...] = ()
    advances_cursor: bool = False

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError(f"counter value cannot be negative, got {self.value}")
        if not self.label.strip():
            object.__setattr__(self, "label", _DEFAULT_LABELS[self.kind])


def increment(counter: KnitCounter, amount: int) -> KnitCounter:
    """Add ``amount`` (floored at 0); records history only if the value changed."""
    new_value = max(0, counter.value + amount)
    if new_value == counter.value:
        return counter
    return replace(counter, value=new_value, history=counter.history + (counter.value,))


def undo(counter: KnitCounter) -> KnitCounter:
    """Restore the most recent previous value; no-op without history."""
    if not counter.history:
        return counter
    return replace(counter, value=counter.history[-1], history=counter.history[:-1])


def set_value(counter: KnitCounter, value: int) -> KnitCounter:
    return replace(counter, value=max(0, value))


def rename(counter: KnitCounter, label: str) -> KnitCounter:
    title = label.strip()
    if not title:
        return counter
    return replace(counter, label=title)


def increment_linked(
    counter: KnitCounter,
    amount: int,
    rows: Sequence[PatternRow],
    cursor: StitchCursor,
) -> tuple[KnitCounter, CursorMove]:
    """
    Increment a counter and, if it is linked, move the cursor with it.

    A STITCH counter moves the cursor by the applied change in stitches; a
    ROW counter moves it that many rows and onto the row's first stitch.
    Unlinked counters, or increments clamped to no change, leave the cursor
    where it is.
    """
    updated = increment(counter, amount)
    delta = updated.value - counter.value

    if not counter.advances_cursor or delta == 0:
        return updated, advance_cursor(rows, cursor, 0)
    if counter.kind == CounterKind.STITCH:
        return updated, advance_cursor(rows, cursor, delta)
    return updated, move_to_row(rows, cursor, delta)

"""counters — row/stitch tallies with undo and optional cursor link."""

from whichstitch.counters.counter import (
    CounterKind,
    KnitCounter,
    increment,
    increment_linked,
    rename,
    set_value,
    undo,
)

__all__ = [
    "CounterKind",
    "KnitCounter",
    "increment",
    "increment_linked",
    "rename",
    "set_value",
    "undo",
]

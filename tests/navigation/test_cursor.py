"""Tests for navigation.cursor — clamping and advancing over parsed rows."""

import pytest

from whichstitch.assembler.assembler import parse_pattern
from whichstitch.navigation.cursor import (
    StitchCursor,
    advance_cursor,
    clamp_cursor,
    current_step,
    is_complete,
    move_to_row,
)

# Three rows of 4, 3 and 2 stitches.
_ROWS = parse_pattern("Rnd1: k4\nRnd2: p3\nRnd3: k2", starting_stitches=4).rows


def at(row, stitch):
    return StitchCursor(row_index=row, stitch_index=stitch)


class TestClamp:
    def test_in_bounds_unchanged(self):
        assert clamp_cursor(_ROWS, at(1, 2)) == at(1, 2)

    def test_row_clamped(self):
        assert clamp_cursor(_ROWS, at(9, 0)) == at(2, 0)

    def test_stitch_clamped_to_row_length(self):
        assert clamp_cursor(_ROWS, at(2, 9)) == at(2, 1)

    def test_negative_clamped(self):
        assert clamp_cursor(_ROWS, at(-1, -5)) == at(0, 0)

    def test_no_rows(self):
        assert clamp_cursor((), at(3, 3)) == at(0, 0)


class TestAdvance:
    def test_within_row(self):
        move = advance_cursor(_ROWS, at(0, 0), 2)
        assert move.cursor == at(0, 2)
        assert not move.completed

    def test_rolls_into_next_row(self):
        assert advance_cursor(_ROWS, at(0, 3), 1).cursor == at(1, 0)

    def test_rolls_across_several_rows(self):
        assert advance_cursor(_ROWS, at(0, 0), 8).cursor == at(2, 1)

    def test_stops_at_last_stitch(self):
        move = advance_cursor(_ROWS, at(1, 0), 50)
        assert move.cursor == at(2, 1)
        assert move.completed

    def test_backwards_rolls_into_previous_row(self):
        assert advance_cursor(_ROWS, at(1, 0), -1).cursor == at(0, 3)

    def test_backwards_stops_at_start(self):
        assert advance_cursor(_ROWS, at(1, 1), -50).cursor == at(0, 0)

    def test_no_rows(self):
        move = advance_cursor((), at(0, 0), 3)
        assert move.cursor == at(0, 0)
        assert not move.completed

    @pytest.mark.parametrize("amount", [0, 1, 3, 7, 8])
    def test_forward_matches_flat_index(self, amount):
        flat = [(r, s) for r, row in enumerate(_ROWS) for s in range(len(row.expanded))]
        move = advance_cursor(_ROWS, at(0, 0), amount)
        assert (move.cursor.row_index, move.cursor.stitch_index) == flat[amount]


class TestHelpers:
    def test_is_complete(self):
        assert is_complete(_ROWS, at(2, 1))
        assert not is_complete(_ROWS, at(2, 0))
        assert not is_complete((), at(0, 0))

    def test_move_to_row(self):
        assert move_to_row(_ROWS, at(0, 3), 1).cursor == at(1, 0)

    def test_move_to_row_clamps(self):
        move = move_to_row(_ROWS, at(1, 2), 5)
        assert move.cursor == at(2, 0)
        assert not move.completed

    def test_current_step(self):
        step = current_step(_ROWS, at(1, 0))
        assert step is not None
        assert step.code == "p3"
        assert step.count == 1

    def test_current_step_without_rows(self):
        assert current_step((), at(0, 0)) is None

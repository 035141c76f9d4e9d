"""
End-to-end tests: pattern text + bundled glossary → rows → counter-driven
navigation, the way an interactive pattern viewer drives the engine.
"""

from __future__ import annotations

from whichstitch import default_glossary, parse_pattern
from whichstitch.counters.counter import CounterKind, KnitCounter, increment_linked
from whichstitch.navigation.cursor import StitchCursor, current_step

_CROWN = """
Note: work in the round on DPNs.
Rnd1: k around.
Rnd2: *k6, k2tog*, rep from * to * 12 times.
Rnd3: k around.
Rnd4: *k5, k2tog*, rep from * to * 12 times.
Rnd5: see Rnd3.
Rnd6: *k4, k2tog*,
  rep from * to * 12 times.
"""

_CABLE = """
Row 1: k2, place 2 sts on cn and hold to the back, k2, k2 from cn, k2
Row 2: p2, m1l, p6, m1l
Row 3: see Row 9.
"""


def test_hat_crown_decreases():
    result = parse_pattern(_CROWN, default_glossary(), 96)

    assert result.errors == ()
    assert result.warnings == ()
    assert [r.row_label for r in result.rows] == [f"Rnd {n}" for n in range(1, 7)]
    assert [(r.start_count, r.total_stitches, r.end_count) for r in result.rows] == [
        (96, 96, 96),
        (96, 96, 84),
        (84, 84, 84),
        (84, 84, 72),
        (72, 72, 72),
        (72, 72, 60),
    ]


def test_hat_crown_labels_from_glossary():
    result = parse_pattern(_CROWN, default_glossary(), 96)
    rnd2 = result.rows[1]
    assert rnd2.sequence[1].label == "Knit two together"
    assert rnd2.sequence[0].label == "Knit"
    assert result.rows[0].sequence[0].label == "Knit around"


def test_linked_counter_walks_the_timeline():
    rows = parse_pattern(_CROWN, default_glossary(), 96).rows
    counter = KnitCounter(id="stitches", kind=CounterKind.STITCH, advances_cursor=True)

    counter, move = increment_linked(counter, 96, rows, StitchCursor())
    assert move.cursor == StitchCursor(1, 0)
    assert current_step(rows, move.cursor).code == "k6"

    counter, move = increment_linked(counter, 6, rows, move.cursor)
    assert current_step(rows, move.cursor).code == "k2tog"
    assert counter.value == 102
    assert not move.completed


def test_cable_pattern_with_problems():
    result = parse_pattern(_CABLE, (), 12)

    assert [r.row_label for r in result.rows] == ["Row 1", "Row 2"]
    row1, row2 = result.rows
    assert row1.total_stitches == 9
    assert (row1.start_count, row1.end_count) == (12, 12)
    assert row2.start_count == 12
    assert len(result.warnings) == 1
    assert '"m1l"' in result.warnings[0]
    assert result.errors == ("Row 3: unresolved reference to round 9 (not parsed before it)",)

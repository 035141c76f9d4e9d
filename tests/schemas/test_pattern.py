"""Tests for schemas.pattern — engine data model."""

import pytest

from whichstitch.schemas.pattern import GlossaryEntry, ParsedOperation, RoundDraft, StitchStep


class TestParsedOperation:
    def test_delta(self):
        op = ParsedOperation(code="k2tog", label="Knit", consume=2, produce=1, units=2)
        assert op.delta == -1

    def test_warning_defaults_to_none(self):
        op = ParsedOperation(code="k", label="Knit", consume=1, produce=1, units=1)
        assert op.warning is None

    def test_rejects_negative_consume(self):
        with pytest.raises(ValueError, match="consume must be >= 0"):
            ParsedOperation(code="x", label="x", consume=-1, produce=1, units=1)

    def test_rejects_negative_produce(self):
        with pytest.raises(ValueError, match="produce must be >= 0"):
            ParsedOperation(code="x", label="x", consume=1, produce=-1, units=1)

    def test_rejects_zero_units(self):
        with pytest.raises(ValueError, match="units must be >= 1"):
            ParsedOperation(code="x", label="x", consume=0, produce=0, units=0)

    def test_is_frozen(self):
        op = ParsedOperation(code="k", label="Knit", consume=1, produce=1, units=1)
        with pytest.raises(AttributeError):
            op.units = 2  # type: ignore[misc]


class TestRoundDraft:
    def test_label_uses_keyword(self):
        assert RoundDraft(round_number=3, body="k2", raw="Row 3: k2", keyword="Row").label == "Row 3"

    def test_default_keyword_is_rnd(self):
        assert RoundDraft(round_number=1, body="k", raw="Rnd1: k").label == "Rnd 1"


class TestValueEquality:
    def test_stitch_steps_compare_by_value(self):
        assert StitchStep("k", 1, "Knit") == StitchStep("k", 1, "Knit")

    def test_glossary_detail_optional(self):
        assert GlossaryEntry(code="k", title="Knit").detail == ""

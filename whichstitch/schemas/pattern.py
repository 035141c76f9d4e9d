"""
Data model for the pattern notation engine.

RoundDraft and ParsedOperation live only inside a single parse call.
StitchStep, PatternRow and ParseResult are the engine's output and are
rebuilt wholesale on every parse. Callers key on ``PatternRow.id`` for UI
stability but never mutate rows.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GlossaryEntry:
    """
    One caller-owned glossary entry.

    Attributes:
        code: Abbreviation as written in patterns (e.g. "k2tog").
        title: Display label (e.g. "Knit two together").
        detail: Free-form explanation; never read by the engine.
    """

    code: str
    title: str
    detail: str = ""


@dataclass(frozen=True)
class RoundDraft:
    """
    A single round extracted from the pattern text, before expansion.

    Attributes:
        round_number: Positive round number from the header.
        body: Whitespace-normalized instruction text.
        raw: Original header + body text as written.
        keyword: Header keyword, "Rnd" or "Row".
        line_number: 1-based physical line the logical line started on.
    """

    round_number: int
    body: str
    raw: str
    keyword: str = "Rnd"
    line_number: int = 1

    @property
    def label(self) -> str:
        return f"{self.keyword} {self.round_number}"


@dataclass(frozen=True)
class ParsedOperation:
    """
    One classified instruction.

    Attributes:
        code: Instruction as written (cleaned token).
        label: Display label resolved from glossary / heuristics.
        consume: Stitches read from the working row.
        produce: Stitches written to the new row.
        units: Timeline grid cells the instruction occupies.
        warning: Non-fatal note (unrecognized token), or None.
    """

    code: str
    label: str
    consume: int
    produce: int
    units: int
    warning: str | None = None

    def __post_init__(self) -> None:
        if self.consume < 0:
            raise ValueError(f"consume must be >= 0, got {self.consume}")
        if self.produce < 0:
            raise ValueError(f"produce must be >= 0, got {self.produce}")
        if self.units < 1:
            raise ValueError(f"units must be >= 1, got {self.units}")

    @property
    def delta(self) -> int:
        """Net change in live stitches."""
        return self.produce - self.consume


@dataclass(frozen=True)
class StitchStep:
    """A timeline entry: ``count`` grid cells of one instruction."""

    code: str
    count: int
    label: str


@dataclass(frozen=True)
class PatternRow:
    """
    A fully expanded round.

    Attributes:
        id: Stable identifier ("row-<index>-<round>"), insignificant to content.
        raw: Original text of the round.
        row_label: Display label, e.g. "Rnd 3".
        sequence: One StitchStep per operation (count = units).
        expanded: One StitchStep per grid cell (count = 1).
        total_stitches: Sum of units; equals ``len(expanded)``.
        start_count: Live stitches entering the round.
        end_count: Live stitches leaving the round, clamped at 0.
    """

    id: str
    raw: str
    row_label: str
    sequence: tuple[StitchStep, ...]
    expanded: tuple[StitchStep, ...]
    total_stitches: int
    start_count: int
    end_count: int


@dataclass(frozen=True)
class ParseResult:
    """
    Output of one parse.

    Attributes:
        rows: Rows for every round that parsed, in ascending round order.
        errors: Row-rejecting problems, in the order they were found.
        warnings: Non-blocking advisories, deduplicated, first-seen order.
    """

    rows: tuple[PatternRow, ...]
    errors: tuple[str, ...]
    warnings: tuple[str, ...]

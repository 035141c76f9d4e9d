"""schemas — engine data model."""

from whichstitch.schemas.pattern import (
    GlossaryEntry,
    ParsedOperation,
    ParseResult,
    PatternRow,
    RoundDraft,
    StitchStep,
)

__all__ = [
    "GlossaryEntry",
    "ParsedOperation",
    "ParseResult",
    "PatternRow",
    "RoundDraft",
    "StitchStep",
]

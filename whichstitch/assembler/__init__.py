"""assembler — round ordering, back-references and the live stitch fold."""

from whichstitch.assembler.assembler import parse_pattern
from whichstitch.assembler.fold import (
    FoldContext,
    FoldState,
    RowRejected,
    StepOutcome,
    propagate,
    step,
)

__all__ = [
    "FoldContext",
    "FoldState",
    "RowRejected",
    "StepOutcome",
    "parse_pattern",
    "propagate",
    "step",
]

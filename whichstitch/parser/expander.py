"""
Body expansion: one round's instruction text → ordered ParsedOperations.

Three body shapes are recognized, checked in order:

  - ``k around``: one synthetic operation covering every live stitch.
  - ``*INNER*, rep from * to * N times``: INNER tokenized once, the
    resulting operations concatenated N times.
  - anything else: a flat comma/semicolon-delimited token list.

The live stitch count only advances between rounds, so every repetition of
a block (and every ``k around`` token in it) sees the same entering count.

A body whose operations would cover more than ``max_stitches`` timeline
cells raises StitchLimitExceeded before anything is materialized.
"""

from __future__ import annotations

import re

from whichstitch.glossary.registry import GlossaryLookup, LabelRegistry
from whichstitch.parser.classifier import (
    DEFAULT_MAX_STITCHES,
    clean_token,
    classify_token,
    knit_around_operation,
)
from whichstitch.schemas.pattern import ParsedOperation

DEFAULT_MAX_REPEAT = 10_000

_KNIT_AROUND = re.compile(r"k\s+around\.?", re.IGNORECASE)
_REPEAT = re.compile(
    r"\*\s*(?P<inner>[^*]+?)\s*\*?\s*[,;]?\s*rep(?:eat)?\s+from\s+\*(?:\s*to\s*\*)?"
    r"\s+(?P<times>\d+)\s+times?\.?",
    re.IGNORECASE,
)
_DELIMITER = re.compile(r"[,;]")


class StitchLimitExceeded(Exception):
    """Raised when a body expands to more stitches than allowed."""

    def __init__(self, units: int, max_stitches: int):
        self.units = units
        self.max_stitches = max_stitches
        super().__init__(f"{units} stitches exceed the limit of {max_stitches}")


def _check_units(units: int, max_stitches: int) -> None:
    if units > max_stitches:
        raise StitchLimitExceeded(units, max_stitches)


def tokenize(
    text: str,
    live_stitches: int,
    glossary: GlossaryLookup,
    registry: LabelRegistry | None = None,
    max_stitches: int = DEFAULT_MAX_STITCHES,
) -> list[ParsedOperation]:
    """Classify each delimited token of ``text``; empty tokens are dropped."""
    operations: list[ParsedOperation] = []
    for piece in _DELIMITER.split(text):
        token = clean_token(piece)
        if not token:
            continue
        if _KNIT_AROUND.fullmatch(token):
            _check_units(live_stitches, max_stitches)
            operations.append(knit_around_operation(live_stitches, glossary, registry))
        else:
            operations.append(classify_token(token, glossary, registry, max_stitches))
    return operations


def expand_body(
    body: str,
    live_stitches: int,
    glossary: GlossaryLookup,
    registry: LabelRegistry | None = None,
    max_repeat: int = DEFAULT_MAX_REPEAT,
    max_stitches: int = DEFAULT_MAX_STITCHES,
) -> tuple[tuple[ParsedOperation, ...], tuple[str, ...]]:
    """
    Expand a round body into operations.

    Returns ``(operations, warnings)``. Warnings are unprefixed; the caller
    attaches the round label. Repeat counts above ``max_repeat`` are clamped
    with a warning. Raises StitchLimitExceeded when the body's total units
    exceed ``max_stitches``.
    """
    text = body.strip()
    warnings: list[str] = []

    if _KNIT_AROUND.fullmatch(text):
        _check_units(live_stitches, max_stitches)
        return (knit_around_operation(live_stitches, glossary, registry),), ()

    repeat = _REPEAT.fullmatch(text)
    if repeat is not None:
        inner = tokenize(repeat.group("inner"), live_stitches, glossary, registry, max_stitches)
        times = int(repeat.group("times"))
        if times > max_repeat:
            warnings.append(f"Repeat count {times} exceeds {max_repeat}; clamped to {max_repeat}")
            times = max_repeat
        _check_units(sum(op.units for op in inner) * times, max_stitches)
        operations = inner * times
        warnings.extend(op.warning for op in inner if op.warning)
    else:
        operations = tokenize(text, live_stitches, glossary, registry, max_stitches)
        _check_units(sum(op.units for op in operations), max_stitches)
        warnings.extend(op.warning for op in operations if op.warning)

    return tuple(operations), tuple(warnings)

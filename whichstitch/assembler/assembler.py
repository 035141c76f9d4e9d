"""
Public parse entry point.

parse_pattern() runs extraction, sorts drafts by round number, and folds
them through the live stitch count. It is a pure function of its inputs:
the same text, glossary and starting count always produce an equal
ParseResult, so callers may re-run it on every edit or memoize it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from whichstitch.assembler.fold import FoldContext, FoldState, propagate, step
from whichstitch.config import EngineConfig
from whichstitch.glossary.registry import GlossaryLookup, LabelRegistry, get_registry
from whichstitch.parser.extractor import extract_round_drafts
from whichstitch.schemas.pattern import GlossaryEntry, ParseResult

logger = logging.getLogger(__name__)


def parse_pattern(
    pattern_text: str,
    glossary: Sequence[GlossaryEntry] | None = None,
    starting_stitches: int | None = None,
    *,
    config: EngineConfig | None = None,
    registry: LabelRegistry | None = None,
) -> ParseResult:
    """
    Parse pattern text into rows with per-stitch timelines.

    Parameters
    ----------
    pattern_text:
        Free-form pattern text; may be malformed.
    glossary:
        Caller glossary used for labels. Defaults to ``config.glossary``.
    starting_stitches:
        Live stitches entering the first round, floored at 1. Defaults to
        ``config.starting_stitches`` (90).
    config:
        Engine defaults and limits; ``EngineConfig()`` when omitted.
    registry:
        Label heuristics; the module singleton when omitted.

    Returns
    -------
    ParseResult
        Always returned; bad input never raises. Broken rounds are
        reported in ``errors`` and omitted from ``rows``.
    """
    config = config or EngineConfig()
    entries = config.glossary if glossary is None else glossary
    start = config.starting_stitches if starting_stitches is None else starting_stitches

    context = FoldContext(
        glossary=GlossaryLookup.from_entries(entries),
        registry=registry or get_registry(),
        max_repeat=config.max_repeat,
        max_stitches=config.max_stitches,
    )

    drafts, extract_errors = extract_round_drafts(pattern_text)
    ordered = sorted(drafts, key=lambda d: d.round_number)

    initial = FoldState(live_stitches=max(1, start), errors=extract_errors)
    final = propagate(ordered, initial, step, context)

    logger.debug(
        "Parsed %d rows (%d errors, %d warnings)",
        len(final.rows),
        len(final.errors),
        len(final.warnings),
    )
    return ParseResult(
        rows=final.rows,
        errors=final.errors,
        warnings=tuple(dict.fromkeys(final.warnings)),
    )

"""
Round draft extraction: free-form pattern text → flat list of RoundDrafts.

Physical lines are grouped into logical lines (a header line plus any
continuation lines after it), then every ``Rnd N:`` / ``Row N:`` header on a
logical line is split out into its own draft. A header naming several
rounds (``Rnds 1, 3:``) yields one draft per number, all sharing the body.

Problems are returned as error strings, never raised: a malformed line is
skipped and every other line still produces drafts.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from whichstitch.schemas.pattern import RoundDraft

logger = logging.getLogger(__name__)

_COMMENT = re.compile(r"^note\s*:", re.IGNORECASE)
_LOGICAL_START = re.compile(r"^(?:rnd|row)s?\s*\d", re.IGNORECASE)
_HEADER = re.compile(r"\b(rnd|row)s?\s*([\d,\s]*):", re.IGNORECASE)
_INTEGER = re.compile(r"\d+")
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class _LogicalLine:
    line_number: int
    text: str


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    return _WHITESPACE.sub(" ", text).strip()


def _group_logical_lines(text: str) -> tuple[list[_LogicalLine], list[str]]:
    lines: list[_LogicalLine] = []
    errors: list[str] = []

    for number, physical in enumerate(text.splitlines(), start=1):
        line = physical.strip()
        if not line or _COMMENT.match(line):
            continue
        if _LOGICAL_START.match(line):
            lines.append(_LogicalLine(line_number=number, text=line))
        elif lines:
            prev = lines[-1]
            lines[-1] = _LogicalLine(line_number=prev.line_number, text=f"{prev.text} {line}")
        else:
            errors.append(f"Line {number}: unexpected continuation without round header")

    return lines, errors


def _drafts_for_line(line: _LogicalLine) -> tuple[list[RoundDraft], list[str]]:
    headers = list(_HEADER.finditer(line.text))
    if not headers:
        return [], [f"Line {line.line_number}: missing round header (expected e.g. 'Rnd 1:')"]

    drafts: list[RoundDraft] = []
    errors: list[str] = []
    for i, header in enumerate(headers):
        end = headers[i + 1].start() if i + 1 < len(headers) else len(line.text)
        numbers = [int(n) for n in _INTEGER.findall(header.group(2)) if int(n) > 0]
        if not numbers:
            errors.append(
                f"Line {line.line_number}: round header {header.group(0).strip()!r} "
                f"has no positive round number"
            )
            continue

        body = normalize_whitespace(line.text[header.end() : end])
        raw = line.text[header.start() : end].strip()
        keyword = header.group(1).capitalize()
        for number in numbers:
            drafts.append(
                RoundDraft(
                    round_number=number,
                    body=body,
                    raw=raw,
                    keyword=keyword,
                    line_number=line.line_number,
                )
            )

    return drafts, errors


def extract_round_drafts(text: str) -> tuple[tuple[RoundDraft, ...], tuple[str, ...]]:
    """
    Split pattern text into round drafts.

    Returns ``(drafts, errors)``. Drafts are in textual order; sorting by
    round number is the assembler's job.
    """
    logical_lines, errors = _group_logical_lines(text)

    drafts: list[RoundDraft] = []
    for line in logical_lines:
        line_drafts, line_errors = _drafts_for_line(line)
        drafts.extend(line_drafts)
        errors.extend(line_errors)

    logger.debug(
        "Extracted %d drafts from %d logical lines (%d errors)",
        len(drafts),
        len(logical_lines),
        len(errors),
    )
    return tuple(drafts), tuple(errors)

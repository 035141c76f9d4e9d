"""
Operation classification: one instruction token → one ParsedOperation.

Each token is matched against RULES, an ordered table of (pattern, counts)
pairs evaluated first-match-wins. More specific shapes are listed before the
general ones they resemble (``k2tog`` before ``k2`` before ``k``). A token no
rule recognizes falls back to a neutral one-stitch operation carrying a
warning, so classification never fails.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from whichstitch.glossary.registry import GlossaryLookup, LabelRegistry, get_registry
from whichstitch.schemas.pattern import ParsedOperation

# (consume, produce, units)
Counts = tuple[int, int, int]

_QUOTES = "\"'‘’“”"
_COUNT = r"([1-9]\d*)"

KNIT_AROUND_CODE = "k around"
DEFAULT_MAX_STITCHES = 10_000


@dataclass(frozen=True)
class StitchRule:
    """
    One entry of the classification table.

    Attributes:
        name: Identifier used in tests and debugging.
        pattern: Regex that must match the whole token (case-insensitive).
        counts: Builds (consume, produce, units) from the match.
    """

    name: str
    pattern: re.Pattern[str]
    counts: Callable[[re.Match[str]], Counts]

    def match(self, token: str) -> re.Match[str] | None:
        return self.pattern.fullmatch(token)


def _rule(name: str, pattern: str, counts: Callable[[re.Match[str]], Counts]) -> StitchRule:
    return StitchRule(name=name, pattern=re.compile(pattern, re.IGNORECASE), counts=counts)


def _same(m: re.Match[str]) -> Counts:
    n = int(m.group(1))
    return n, n, n


def _decrease(m: re.Match[str]) -> Counts:
    n = int(m.group(1))
    return n, 1, n


RULES: tuple[StitchRule, ...] = (
    _rule(
        "cable_hold",
        rf"place\s+{_COUNT}\s+sts?\s+on\s+cn\s+and\s+hold\s+(?:to\s+the\s+back|in\s+front)",
        lambda m: (0, 0, 1),
    ),
    _rule("cable_from_cn", rf"k{_COUNT}\s+from\s+cn", _same),
    _rule("k1yok1", r"k1\s*yo\s*k1", lambda m: (1, 3, 1)),
    _rule("yarn_over", r"yo", lambda m: (0, 1, 1)),
    _rule("centered_double_decrease", r"cdd", lambda m: (3, 1, 3)),
    _rule("decrease", rf"[kp]{_COUNT}tog(?:\s*(?:tbl|tlb))?(?:\s+from\s+cn)?", _decrease),
    _rule("slip", rf"sl\s*{_COUNT}", _same),
    _rule("counted", rf"[kp]{_COUNT}", _same),
    _rule("single", r"[kp]", lambda m: (1, 1, 1)),
)


def clean_token(token: str) -> str:
    """Strip surrounding quotes and trailing periods: ``'"k2."'`` → ``"k2"``."""
    cleaned = token.strip().strip(_QUOTES).strip()
    cleaned = cleaned.rstrip(".").strip().strip(_QUOTES).strip()
    return cleaned


def match_rule(token: str) -> tuple[StitchRule, re.Match[str]] | None:
    """Return the first rule matching ``token`` and its match, or None."""
    for rule in RULES:
        m = rule.match(token)
        if m is not None:
            return rule, m
    return None


def classify_token(
    token: str,
    glossary: GlossaryLookup,
    registry: LabelRegistry | None = None,
    max_stitches: int = DEFAULT_MAX_STITCHES,
) -> ParsedOperation:
    """
    Classify a cleaned token.

    Always returns an operation. Unrecognized tokens, and tokens covering
    more than ``max_stitches`` stitches, count as one stitch worked even and
    carry a warning naming the token.
    """
    registry = registry or get_registry()
    label = registry.resolve_label(token, glossary)

    found = match_rule(token)
    if found is None:
        return _fallback(token, label, f'Unrecognized instruction "{token}" counted as 1 stitch')

    rule, m = found
    consume, produce, units = rule.counts(m)
    if max(consume, produce, units) > max_stitches:
        return _fallback(
            token,
            label,
            f'Instruction "{token}" exceeds {max_stitches} stitches; counted as 1 stitch',
        )
    return ParsedOperation(
        code=token, label=label, consume=consume, produce=produce, units=units
    )


def _fallback(token: str, label: str, warning: str) -> ParsedOperation:
    return ParsedOperation(
        code=token, label=label, consume=1, produce=1, units=1, warning=warning
    )


def knit_around_operation(
    live_stitches: int,
    glossary: GlossaryLookup,
    registry: LabelRegistry | None = None,
) -> ParsedOperation:
    """Synthetic operation knitting every live stitch (at least one)."""
    registry = registry or get_registry()
    count = max(1, live_stitches)
    return ParsedOperation(
        code=KNIT_AROUND_CODE,
        label=registry.resolve_label(KNIT_AROUND_CODE, glossary),
        consume=count,
        produce=count,
        units=count,
    )

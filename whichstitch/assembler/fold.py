"""
Live stitch count propagation across rounds.

step() is a pure function of one draft, the entering live count and the
bodies resolved so far; it returns a frozen StepOutcome describing what the
draft contributes. propagate() walks drafts already sorted by round number,
applies each outcome to its accumulators and returns the final FoldState.
Each draft costs the same no matter how many rounds came before it.

Rejections (unresolved back-references, empty bodies, bodies over the stitch
limit) are raised by the helpers below and recorded as errors by step(); a
rejected draft emits no row and leaves the live count unchanged.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from whichstitch.glossary.registry import GlossaryLookup, LabelRegistry, get_registry
from whichstitch.parser.classifier import DEFAULT_MAX_STITCHES
from whichstitch.parser.expander import DEFAULT_MAX_REPEAT, StitchLimitExceeded, expand_body
from whichstitch.schemas.pattern import ParsedOperation, PatternRow, RoundDraft, StitchStep

logger = logging.getLogger(__name__)

_BACK_REFERENCE = re.compile(r"see\s+r(?:nd|ow)?\s*(\d+)\.?", re.IGNORECASE)


class RowRejected(Exception):
    """Raised when a draft cannot produce a row."""


@dataclass(frozen=True)
class FoldContext:
    """Read-only inputs shared by every step of one parse."""

    glossary: GlossaryLookup = field(default_factory=GlossaryLookup)
    registry: LabelRegistry = field(default_factory=get_registry)
    max_repeat: int = DEFAULT_MAX_REPEAT
    max_stitches: int = DEFAULT_MAX_STITCHES


@dataclass(frozen=True)
class FoldState:
    """
    State entering or leaving a fold.

    Attributes:
        live_stitches: Stitches on the needle entering the next round.
        resolved_bodies: Round number → body after back-reference substitution.
        rows: Rows emitted so far.
        errors: Accumulated row-rejecting errors.
        warnings: Accumulated warnings (may contain duplicates).
    """

    live_stitches: int = 1
    resolved_bodies: Mapping[int, str] = field(default_factory=lambda: MappingProxyType({}))
    rows: tuple[PatternRow, ...] = ()
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.live_stitches < 0:
            raise ValueError(f"live_stitches cannot be negative, got {self.live_stitches}")


@dataclass(frozen=True)
class StepOutcome:
    """
    What one draft contributes to the fold.

    Attributes:
        row: The emitted row, or None when the draft was rejected.
        resolved_body: Body to record under the draft's round number, or
            None when nothing should be recorded.
        error: Rejection message, if any.
        warnings: Warnings already prefixed with the round label.
    """

    row: PatternRow | None = None
    resolved_body: str | None = None
    error: str | None = None
    warnings: tuple[str, ...] = ()


StepFn = Callable[[RoundDraft, int, Mapping[int, str], FoldContext, int], StepOutcome]


def resolve_body(draft: RoundDraft, resolved_bodies: Mapping[int, str]) -> str:
    """
    Substitute a ``see Rnd N`` body with round N's resolved body.

    Only rounds already folded are valid targets, so chains resolve in round
    order. Raises RowRejected when the target has not been resolved.
    """
    m = _BACK_REFERENCE.fullmatch(draft.body.strip())
    if m is None:
        return draft.body
    target = int(m.group(1))
    if target not in resolved_bodies:
        raise RowRejected(
            f"{draft.label}: unresolved reference to round {target} (not parsed before it)"
        )
    return resolved_bodies[target]


def build_row(
    draft: RoundDraft,
    operations: tuple[ParsedOperation, ...],
    start_count: int,
    index: int,
) -> PatternRow:
    """Lay out the timeline for one round and compute its stitch counts."""
    sequence = tuple(StitchStep(code=op.code, count=op.units, label=op.label) for op in operations)
    expanded = tuple(
        StitchStep(code=entry.code, count=1, label=entry.label)
        for entry in sequence
        for _ in range(entry.count)
    )
    delta = sum(op.delta for op in operations)
    return PatternRow(
        id=f"row-{index}-{draft.round_number}",
        raw=draft.raw,
        row_label=draft.label,
        sequence=sequence,
        expanded=expanded,
        total_stitches=len(expanded),
        start_count=start_count,
        end_count=max(0, start_count + delta),
    )


def step(
    draft: RoundDraft,
    live_stitches: int,
    resolved_bodies: Mapping[int, str],
    context: FoldContext,
    index: int,
) -> StepOutcome:
    """Work out one draft's row (or rejection) given the rounds before it."""
    try:
        body = resolve_body(draft, resolved_bodies)
    except RowRejected as exc:
        logger.debug("Rejected %s: %s", draft.label, exc)
        return StepOutcome(error=str(exc))

    try:
        operations, warnings = expand_body(
            body,
            live_stitches,
            context.glossary,
            context.registry,
            max_repeat=context.max_repeat,
            max_stitches=context.max_stitches,
        )
    except StitchLimitExceeded as exc:
        logger.debug("Rejected %s: %s", draft.label, exc)
        return StepOutcome(resolved_body=body, error=f"{draft.label}: {exc}")

    if not operations:
        return StepOutcome(resolved_body=body, error=f"{draft.label}: no instructions parsed")

    row = build_row(draft, operations, live_stitches, index=index)
    logger.debug(
        "%s: %d stitches, %d -> %d", row.row_label, row.total_stitches, row.start_count, row.end_count
    )
    return StepOutcome(
        row=row,
        resolved_body=body,
        warnings=tuple(f"{draft.label}: {w}" for w in warnings),
    )


def propagate(
    drafts: Iterable[RoundDraft],
    initial: FoldState,
    step_fn: StepFn,
    context: FoldContext,
) -> FoldState:
    """Apply ``step_fn`` to drafts in the order given and collect the results."""
    live = initial.live_stitches
    resolved = dict(initial.resolved_bodies)
    rows = list(initial.rows)
    errors = list(initial.errors)
    warnings = list(initial.warnings)
    view = MappingProxyType(resolved)

    for draft in drafts:
        outcome = step_fn(draft, live, view, context, len(rows))
        if outcome.resolved_body is not None:
            resolved[draft.round_number] = outcome.resolved_body
        if outcome.error is not None:
            errors.append(outcome.error)
        warnings.extend(outcome.warnings)
        if outcome.row is not None:
            rows.append(outcome.row)
            live = outcome.row.end_count

    return FoldState(
        live_stitches=live,
        resolved_bodies=MappingProxyType(resolved),
        rows=tuple(rows),
        errors=tuple(errors),
        warnings=tuple(warnings),
    )

"""
Deposit Defender Leverage Scoring

Turns the evaluation context, timeline and detected issues into a
0-100 leverage score. The score is the sum of four capped factor groups:

    Group               Cap   Evaluation
    timeline             40   ordered rules, first match wins
    landlord behavior    30   bad-faith indicators plus extended silence
    tenant compliance    20   additive rules
    issue severity       20   HIGH and MEDIUM issue counts

Any HIGH issue guarantees at least 20 timeline points and 10 severity
points, so a case with a HIGH issue always scores 30 or more and can
never land in the UNCERTAIN band.

Also here: bad-faith indicator labels, win probability and the
evidence-quality assessment.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Sequence, Union

from ..models import (
    DepositReturnStatus,
    DetectedIssue,
    EvidenceAssessment,
    EvidenceItem,
    EvidenceStrength,
    ScoreBreakdown,
    Severity,
)
from ..models.money import amount_reported
from .context import EvaluationContext

logger = logging.getLogger(__name__)

TIMELINE_CAP = 40
BEHAVIOR_CAP = 30
COMPLIANCE_CAP = 20
SEVERITY_CAP = 20

BAD_FAITH_DAYS = 45
APPROACHING_DEADLINE_DAYS = 20


def round_half_up(value: Union[Decimal, int, float]) -> int:
    """Round .5 away from zero (Python's round() rounds half to even)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


# =============================================================================
# Scoring Rules
# =============================================================================

@dataclass(frozen=True)
class ScoringRule:
    """A named (predicate, points) pair."""
    name: str
    predicate: Callable[[EvaluationContext], bool]
    points: int


def first_match(rules: Sequence[ScoringRule], ctx: EvaluationContext) -> int:
    for rule in rules:
        if rule.predicate(ctx):
            return rule.points
    return 0


def sum_matching(rules: Sequence[ScoringRule], ctx: EvaluationContext) -> int:
    return sum(rule.points for rule in rules if rule.predicate(ctx))


TIMELINE_RULES: tuple[ScoringRule, ...] = (
    ScoringRule(
        "past_deadline_nothing_returned_or_itemized",
        lambda c: c.past_deadline and not c.deposit_returned and not c.itemization_provided,
        40,
    ),
    ScoringRule(
        "past_deadline_partial_without_itemization",
        lambda c: c.past_deadline and c.is_partial_return and not c.itemization_provided,
        30,
    ),
    ScoringRule(
        "past_deadline_itemized_not_fully_returned",
        lambda c: c.past_deadline and not c.is_fully_returned and c.itemization_provided,
        18,
    ),
    ScoringRule(
        "past_deadline_not_returned",
        lambda c: c.past_deadline and not c.deposit_returned,
        25,
    ),
    ScoringRule(
        "deadline_imminent_nothing_returned_or_itemized",
        lambda c: (
            c.within_deadline
            and not c.deposit_returned
            and not c.itemization_provided
            and c.days_at_least(APPROACHING_DEADLINE_DAYS)
        ),
        40,
    ),
    ScoringRule(
        "within_deadline_nothing_returned_or_itemized",
        lambda c: (
            c.within_deadline
            and not c.deposit_returned
            and not c.itemization_provided
            and c.days_at_least(1)
        ),
        20,
    ),
    ScoringRule(
        "deadline_approaching",
        lambda c: c.within_deadline and c.days_at_least(APPROACHING_DEADLINE_DAYS),
        8,
    ),
)

COMPLIANCE_RULES: tuple[ScoringRule, ...] = (
    ScoringRule("forwarding_address_provided", lambda c: c.forwarding_provided, 10),
    ScoringRule(
        "complied_but_deadline_missed",
        lambda c: c.past_deadline and c.forwarding_provided and not c.deposit_returned,
        8,
    ),
    ScoringRule(
        "complied_deadline_pending",
        lambda c: (
            c.within_deadline
            and c.forwarding_provided
            and not c.deposit_returned
            and not c.itemization_provided
        ),
        15,
    ),
    ScoringRule("lease_document_provided", lambda c: c.has_lease_document, 5),
    ScoringRule("communication_trail", lambda c: c.communication_count > 0, 5),
)


# =============================================================================
# Landlord Behavior
# =============================================================================

def bad_faith_indicators(ctx: EvaluationContext) -> list[str]:
    """Labelled landlord-behavior indicators, at most three."""
    indicators = []
    silent = not ctx.is_fully_returned and not ctx.itemization_provided

    if ctx.days_at_least(BAD_FAITH_DAYS) and silent:
        indicators.append("No refund or itemization after 45+ days")

    if (
        ctx.past_deadline
        and ctx.return_status == DepositReturnStatus.NONE
        and ctx.communication_count >= 2
    ):
        indicators.append("No response to multiple tenant follow-ups")

    if ctx.past_deadline and silent:
        indicators.append("Zero communication about deposit after deadline passed")

    return indicators


def _behavior_points(ctx: EvaluationContext, indicator_count: int) -> int:
    points = min(indicator_count * 8, 25)
    if (
        ctx.past_deadline
        and ctx.days_at_least(BAD_FAITH_DAYS)
        and not ctx.deposit_returned
        and not ctx.itemization_provided
    ):
        points += 5
    return min(points, BEHAVIOR_CAP)


def _severity_points(issues: Sequence[DetectedIssue]) -> int:
    high = sum(1 for i in issues if i.severity == Severity.HIGH)
    medium = sum(1 for i in issues if i.severity == Severity.MEDIUM)
    return min(min(high * 10, 20) + min(medium * 3, 10), SEVERITY_CAP)


# =============================================================================
# Leverage Score
# =============================================================================

@dataclass(frozen=True)
class LeverageScore:
    score: int
    breakdown: ScoreBreakdown
    bad_faith_indicators: tuple[str, ...]


def calculate_leverage_score(
    ctx: EvaluationContext,
    issues: Sequence[DetectedIssue],
) -> LeverageScore:
    """
    Score a case from 0 to 100.

    The timeline is read from ctx; issues are the detector output for
    the same context.
    """
    indicators = bad_faith_indicators(ctx)
    breakdown = ScoreBreakdown(
        timeline=min(first_match(TIMELINE_RULES, ctx), TIMELINE_CAP),
        landlord_behavior=_behavior_points(ctx, len(indicators)),
        tenant_compliance=min(sum_matching(COMPLIANCE_RULES, ctx), COMPLIANCE_CAP),
        issue_severity=_severity_points(issues),
    )
    score = clamp(round_half_up(breakdown.raw_total), 0, 100)
    logger.debug(
        "Leverage score computed",
        extra={"case_id": ctx.intake.case_id, "score": score},
    )
    return LeverageScore(
        score=score,
        breakdown=breakdown,
        bad_faith_indicators=tuple(indicators),
    )


# =============================================================================
# Win Probability
# =============================================================================

def estimate_win_probability(score: int, ctx: EvaluationContext) -> int:
    """
    Estimated chance of a favorable outcome, 5-95 percent.

    Inside the window but past day 20 with nothing returned or itemized,
    a violation is days away, so the estimate is floored at 40.
    """
    prob = Decimal(score) * Decimal("0.85")
    if ctx.forwarding_provided:
        prob *= Decimal("1.1")
    if ctx.has_lease_document:
        prob = min(prob * Decimal("1.05"), Decimal(95))
    if (
        ctx.within_deadline
        and ctx.days_at_least(APPROACHING_DEADLINE_DAYS)
        and not ctx.is_fully_returned
        and not ctx.itemization_provided
    ):
        prob = max(prob, Decimal(40))
    return clamp(round_half_up(prob), 5, 95)


# =============================================================================
# Evidence Quality
# =============================================================================

_PHOTO_MENTION = re.compile(r"photo|picture|pic|image|record|document", re.IGNORECASE)


def assess_evidence_quality(ctx: EvaluationContext) -> EvidenceAssessment:
    """Grade the tenant's documentation from what the intake shows."""
    checks = (
        ("lease_document", ctx.has_lease_document, 3, EvidenceStrength.STRONG, True),
        ("forwarding_address_proof", ctx.forwarding_provided, 3, EvidenceStrength.STRONG, True),
        ("communication_trail", ctx.communication_count > 0, 2, EvidenceStrength.MODERATE, False),
        (
            "move_out_photos",
            bool(_PHOTO_MENTION.search(ctx.tenant_notes)),
            1,
            EvidenceStrength.MODERATE,
            False,
        ),
        (
            "deposit_payment_proof",
            amount_reported(ctx.intake.deposit_amount),
            2,
            EvidenceStrength.STRONG,
            True,
        ),
    )

    points = 0
    items = []
    for name, present, weight, strength, critical in checks:
        if present:
            points += weight
        items.append(
            EvidenceItem(
                type=name,
                present=present,
                critical=critical,
                strength=strength if present else None,
            )
        )

    if points >= 9:
        overall = EvidenceStrength.STRONG
    elif points >= 6:
        overall = EvidenceStrength.MODERATE
    elif points >= 3:
        overall = EvidenceStrength.WEAK
    else:
        overall = EvidenceStrength.MINIMAL

    return EvidenceAssessment(overall_strength=overall, points=points, items=tuple(items))

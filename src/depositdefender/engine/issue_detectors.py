"""
Deposit Defender Issue Detectors

An ordered registry of independent rules. Each detector is a pair of
pure functions over the EvaluationContext: matches(ctx) decides whether
the issue is present, build(ctx) writes the finding. Detectors do not
see each other's output.

Key features:
- Every detector is evaluated; a detector that raises is logged and
  skipped without affecting the others
- Findings are ranked by rank_weight descending; ties keep declaration
  order
- All text is informational and cites the Texas Property Code section
  it relies on
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence

from ..exceptions import DetectorError
from ..models import (
    DetectedIssue,
    FactSource,
    RecommendedStep,
    Severity,
    SupportingFact,
    format_currency,
)
from .context import EvaluationContext
from .timeline_calculator import format_display_date

logger = logging.getLogger(__name__)

NORMAL_WEAR_KEYWORDS = ("wear", "tear", "carpet", "paint", "scuff", "faded", "age", "old", "normal")


# =============================================================================
# Detector Definition
# =============================================================================

@dataclass(frozen=True)
class IssueDetector:
    """
    A single compliance rule.

    build() returns the finding body; the registry stamps id, severity
    and rank_weight onto it so those live in one place.
    """
    id: str
    severity: Severity
    rank_weight: int
    matches: Callable[[EvaluationContext], bool]
    build: Callable[[EvaluationContext], "FindingBody"]


@dataclass(frozen=True)
class FindingBody:
    title: str
    rationale: str
    supporting_facts: tuple[SupportingFact, ...]
    statute_citations: tuple[str, ...]
    recommended_steps: tuple[RecommendedStep, ...]


# =============================================================================
# Text Helpers
# =============================================================================

def _days(n: int) -> str:
    return f"{n} day" if n == 1 else f"{n} days"


def _intake(fact: str) -> SupportingFact:
    return SupportingFact(fact=fact, source=FactSource.TENANT_INTAKE)


def _computed(fact: str) -> SupportingFact:
    return SupportingFact(fact=fact, source=FactSource.COMPUTED)


def _move_out_fact(ctx: EvaluationContext) -> SupportingFact:
    return _intake(f"Move-out date: {ctx.intake.move_out_date or 'not provided'}")


def _forwarding_fact(ctx: EvaluationContext) -> list[SupportingFact]:
    if not ctx.forwarding_provided:
        return []
    when = f" on {ctx.intake.forwarding_address_date}" if ctx.intake.forwarding_address_date else ""
    return [_intake(f"Forwarding address provided{when}")]


# =============================================================================
# Detector 1: deadline passed, nothing returned, nothing itemized
# =============================================================================

def _deadline_missed_full_matches(ctx: EvaluationContext) -> bool:
    return ctx.past_deadline and not ctx.deposit_returned and not ctx.itemization_provided


def _deadline_missed_full_build(ctx: EvaluationContext) -> FindingBody:
    deposit = format_currency(ctx.deposit_amount)
    days = ctx.days_since_move_out or 0
    over = ctx.days_over_deadline
    return FindingBody(
        title=f"30-Day Deadline Passed With No Refund or Itemization of the {deposit} Deposit",
        rationale=(
            f"It has been {_days(days)} since move-out and the landlord has neither returned "
            f"the {deposit} deposit nor sent a written list of deductions. Tex. Prop. Code "
            f"§ 92.103 gives a landlord 30 calendar days to do one or the other, so the deadline "
            f"was missed by {_days(over)}. Under § 92.109 a landlord who misses it is presumed "
            f"to have acted in bad faith and can lose the right to keep any part of the deposit."
        ),
        supporting_facts=tuple(
            [
                _move_out_fact(ctx),
                _computed(f"{_days(days)} elapsed, {_days(over)} past the deadline"),
                _intake(f"Security deposit: {deposit}"),
                _intake("No refund received"),
                _intake("No itemized list of deductions received"),
            ]
            + _forwarding_fact(ctx)
        ),
        statute_citations=("92.103", "92.104", "92.109"),
        recommended_steps=(
            RecommendedStep(
                action="send_written_demand",
                description=(
                    f"Mail the landlord a written demand by certified mail, return receipt "
                    f"requested. Give your name, the former address, the move-out date "
                    f"({ctx.intake.move_out_date}), the deposit amount ({deposit}) and your "
                    f"current mailing address, and ask for the full deposit or a complete "
                    f"itemization. Keep a copy and the mailing receipt."
                ),
            ),
            RecommendedStep(
                action="document_timeline",
                description=(
                    "Write down the key dates in order: move-out, when you gave your forwarding "
                    "address, each contact with the landlord, and today. This record matters if "
                    "you need to escalate."
                ),
            ),
        ),
    )


# =============================================================================
# Detector 2: partial refund without an itemization
# =============================================================================

def _partial_no_itemization_matches(ctx: EvaluationContext) -> bool:
    return ctx.past_deadline and ctx.is_partial_return and not ctx.itemization_provided


def _partial_no_itemization_build(ctx: EvaluationContext) -> FindingBody:
    deposit = format_currency(ctx.deposit_amount)
    returned = format_currency(ctx.amount_returned)
    withheld = format_currency(ctx.amount_withheld)
    days = ctx.days_since_move_out or 0
    return FindingBody(
        title=f"Partial Refund of {returned}; {withheld} Kept Without an Itemized List",
        rationale=(
            f"The landlord returned {returned} of the {deposit} deposit and kept {withheld} "
            f"without a written explanation. Tex. Prop. Code § 92.104 requires a written, "
            f"itemized list whenever any part of a deposit is kept. Without it there is no "
            f"way to check whether the deductions were proper, and under § 92.109 the missing "
            f"itemization can cost the landlord the right to keep those funds."
        ),
        supporting_facts=(
            _move_out_fact(ctx),
            _intake(f"Original deposit: {deposit}"),
            _intake(f"Amount returned: {returned}"),
            _computed(f"Amount kept without explanation: {withheld}"),
            _intake("No itemized list of deductions received"),
            _computed(f"{_days(days)} since move-out, past the 30-day deadline"),
        ),
        statute_citations=("92.104", "92.109"),
        recommended_steps=(
            RecommendedStep(
                action="request_itemization_letter",
                description=(
                    f"Ask in writing, by certified mail, for the itemized list of deductions. "
                    f"Say that you received {returned} but no written explanation for the "
                    f"{withheld} kept, and cite Tex. Prop. Code § 92.104. Keep a copy and the "
                    f"mailing receipt."
                ),
            ),
            RecommendedStep(
                action="gather_move_out_evidence",
                description=(
                    "Collect your move-out photos, the move-in condition report and any messages "
                    "about the unit's condition, so you can judge any itemization the landlord "
                    "sends later."
                ),
            ),
        ),
    )


# =============================================================================
# Detector 3: inside the window, deposit still held
# =============================================================================

def _within_window_matches(ctx: EvaluationContext) -> bool:
    return (
        ctx.within_deadline
        and ctx.days_at_least(1)
        and not ctx.deposit_returned
        and not ctx.itemization_provided
    )


def _within_window_build(ctx: EvaluationContext) -> FindingBody:
    deposit = format_currency(ctx.deposit_amount)
    days = ctx.days_since_move_out or 0
    remaining = ctx.days_until_deadline
    deadline = format_display_date(ctx.timeline.deadline_date)
    return FindingBody(
        title=f"{deposit} Deposit Still Held; {_days(remaining)} Until the Statutory Deadline",
        rationale=(
            f"The landlord has not returned the {deposit} deposit or sent a written list of "
            f"deductions. Tex. Prop. Code § 92.103 allows 30 calendar days for one or the "
            f"other, which makes the deadline {deadline}, {_days(remaining)} from now. If it "
            f"passes with nothing sent, § 92.109 presumes bad faith and the landlord can lose "
            f"the right to keep any of the deposit."
        ),
        supporting_facts=tuple(
            [
                _move_out_fact(ctx),
                _computed(f"{_days(days)} elapsed; statutory deadline {deadline}"),
                _intake(f"Security deposit: {deposit}"),
                _intake("No refund received"),
                _intake("No itemized list of deductions received"),
            ]
            + _forwarding_fact(ctx)
        ),
        statute_citations=("92.103", "92.104", "92.109"),
        recommended_steps=(
            RecommendedStep(
                action="confirm_forwarding_address",
                description=(
                    "If you have not already, send the landlord your forwarding address in "
                    "writing today, preferably by certified mail. Under § 92.107 the 30-day "
                    "clock depends on the landlord having it, and a mailing receipt removes "
                    "any doubt about the deadline."
                ),
            ),
            RecommendedStep(
                action="document_timeline",
                description=(
                    f"Write down the key dates now: move-out, when you gave your forwarding "
                    f"address, each contact with the landlord, and the deadline ({deadline}). "
                    f"If the deadline passes with no refund or itemization, this record "
                    f"supports a written demand or a small claims filing."
                ),
            ),
        ),
    )


# =============================================================================
# Detector 4: forwarding address not given
# =============================================================================

def _no_forwarding_matches(ctx: EvaluationContext) -> bool:
    return not ctx.forwarding_provided and not ctx.deposit_returned


def _no_forwarding_build(ctx: EvaluationContext) -> FindingBody:
    deposit = format_currency(ctx.deposit_amount)
    return FindingBody(
        title="No Forwarding Address Given; the 30-Day Clock May Not Be Running",
        rationale=(
            "Under Tex. Prop. Code § 92.107 the landlord's duty to refund or itemize is tied "
            "to receiving the tenant's forwarding address in writing. Until that happens the "
            "30-day deadline may not have started. Sending the address now starts the clock "
            "and leaves a paper trail."
        ),
        supporting_facts=(
            _move_out_fact(ctx),
            _intake(f"Security deposit: {deposit}"),
            _intake("Forwarding address not yet given to the landlord in writing"),
        ),
        statute_citations=("92.107", "92.103"),
        recommended_steps=(
            RecommendedStep(
                action="send_forwarding_address_now",
                description=(
                    f"Send your forwarding address today by certified mail with return "
                    f"receipt. Include your full name, the former address, the move-out date "
                    f"({ctx.intake.move_out_date}) and your new mailing address. The receipt "
                    f"shows when it was sent and delivered."
                ),
            ),
            RecommendedStep(
                action="note_30_day_start",
                description=(
                    "The 30 days run from the landlord's receipt of your forwarding address. "
                    "Note the delivery date on the receipt and count 30 days from it. If no "
                    "refund or itemization arrives by then, a written demand is appropriate."
                ),
            ),
        ),
    )


# =============================================================================
# Detector 5: notes suggest a normal wear and tear dispute
# =============================================================================

def _normal_wear_matches(ctx: EvaluationContext) -> bool:
    if ctx.is_fully_returned:
        return False
    notes = ctx.notes_lower
    return any(keyword in notes for keyword in NORMAL_WEAR_KEYWORDS)


def _normal_wear_build(ctx: EvaluationContext) -> FindingBody:
    status_fact = (
        "Deposit was partially returned" if ctx.is_partial_return else "Deposit was not returned"
    )
    return FindingBody(
        title="Possible Normal Wear and Tear Dispute",
        rationale=(
            "Your notes mention wear, carpet, paint or similar items. Tex. Prop. Code "
            "§ 92.104(a) bars deductions for normal wear and tear, meaning deterioration from "
            "ordinary, reasonable use. Faded paint, carpet worn along walking paths, light "
            "scuffs and small nail holes usually fall in that category, so charges for them "
            "may be open to challenge."
        ),
        supporting_facts=(
            _intake("Your notes mention wear, carpet, paint or similar items"),
            _intake(status_fact),
        ),
        statute_citations=("92.104",),
        recommended_steps=(
            RecommendedStep(
                action="compare_photos",
                description=(
                    "Put your move-in photos or condition report next to your move-out photos. "
                    "Changes that come from everyday living over the lease term are usually "
                    "normal wear, not damage. Keep a note of the comparison."
                ),
            ),
            RecommendedStep(
                action="research_normal_wear",
                description=(
                    "Texas tenant resources separate normal wear from damage. Small nail holes, "
                    "worn carpet paths and minor scuffs are usually normal wear. Large holes, "
                    "burns, deliberate damage and heavy filth may be chargeable. Use this when "
                    "reading any itemization you receive."
                ),
            ),
        ),
    )


# =============================================================================
# Registry
# =============================================================================

DETECTORS: tuple[IssueDetector, ...] = (
    IssueDetector(
        id="deadline_missed_full_deposit",
        severity=Severity.HIGH,
        rank_weight=100,
        matches=_deadline_missed_full_matches,
        build=_deadline_missed_full_build,
    ),
    IssueDetector(
        id="deadline_missed_no_itemization_only",
        severity=Severity.HIGH,
        rank_weight=90,
        matches=_partial_no_itemization_matches,
        build=_partial_no_itemization_build,
    ),
    IssueDetector(
        id="within_30_days_deposit_withheld",
        severity=Severity.HIGH,
        rank_weight=95,
        matches=_within_window_matches,
        build=_within_window_build,
    ),
    IssueDetector(
        id="no_forwarding_address",
        severity=Severity.MEDIUM,
        rank_weight=55,
        matches=_no_forwarding_matches,
        build=_no_forwarding_build,
    ),
    IssueDetector(
        id="normal_wear_concern",
        severity=Severity.MEDIUM,
        rank_weight=70,
        matches=_normal_wear_matches,
        build=_normal_wear_build,
    ),
)


def run_detector(detector: IssueDetector, ctx: EvaluationContext) -> Optional[DetectedIssue]:
    """
    Evaluate one detector. Returns None when it does not match.

    Raises:
        DetectorError: If the detector's predicate or builder raises
    """
    try:
        if not detector.matches(ctx):
            return None
        body = detector.build(ctx)
    except Exception as e:
        raise DetectorError(
            message=f"Detector {detector.id} failed: {e}",
            details={"detector_id": detector.id, "error_type": type(e).__name__},
            case_id=ctx.intake.case_id,
        ) from e
    return DetectedIssue(
        id=detector.id,
        severity=detector.severity,
        rank_weight=detector.rank_weight,
        title=body.title,
        rationale=body.rationale,
        supporting_facts=body.supporting_facts,
        statute_citations=body.statute_citations,
        recommended_steps=body.recommended_steps,
    )


def detect_issues(
    ctx: EvaluationContext,
    detectors: Iterable[IssueDetector] = DETECTORS,
) -> list[DetectedIssue]:
    """
    Run every detector and return findings ranked by rank_weight.

    A detector that raises is logged with its id and skipped.
    """
    found: list[DetectedIssue] = []
    for detector in detectors:
        try:
            issue = run_detector(detector, ctx)
        except DetectorError:
            logger.exception(
                "Issue detector failed",
                extra={"detector_id": detector.id, "case_id": ctx.intake.case_id},
            )
            continue
        if issue is not None:
            found.append(issue)

    found.sort(key=lambda i: -i.rank_weight)
    logger.debug(
        "Detected %d issues",
        len(found),
        extra={"case_id": ctx.intake.case_id, "issue_ids": [i.id for i in found]},
    )
    return found


def has_high_severity(issues: Sequence[DetectedIssue]) -> bool:
    return any(i.is_high for i in issues)

"""
Deposit Defender Recovery Estimator

Projects best / likely / worst recovery amounts from the deposit figures
and the leverage score. Multipliers, probabilities and the confidence
note come from the recovery band table; only the statutory penalty rule
lives here.

The projection is capped at the total deposit still owed plus the fixed
§ 92.109(a) penalty. Treble damages and attorney's fees require a court
finding and are not estimated.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from ..models import (
    DepositReturnStatus,
    JurisdictionRules,
    ProbabilityDistribution,
    RecoveryBandEntry,
    RecoveryEstimate,
)
from ..models.money import ZERO, parse_amount, to_cents
from .band_tables import lookup_recovery_band

ZERO_CENTS = to_cents(ZERO)

NO_DEPOSIT_NOTE = "No deposit amount provided."

PENALTY_BASIS = (
    "Tex. Prop. Code § 92.109(a): a $100 penalty may apply when the landlord "
    "misses the statutory deadline"
)

RECOVERY_DISCLAIMER = (
    "These figures are informational estimates. Actual recovery depends on the "
    "landlord's response, any court proceedings, and the specific facts. This is "
    "not legal advice."
)


def estimate_recovery(
    deposit_amount: Any,
    pet_deposit_amount: Any,
    score: int,
    days_since_move_out: Optional[int],
    past_deadline: Optional[bool],
    return_status: DepositReturnStatus,
    amount_returned: Any,
    recovery_bands: tuple[RecoveryBandEntry, ...],
    rules: Optional[JurisdictionRules] = None,
) -> RecoveryEstimate:
    """
    Estimate the recovery range for a case.

    Monetary inputs may be raw intake strings or Decimal; anything
    non-numeric counts as zero. days_since_move_out and return_status
    are carried for callers and logging; the arithmetic depends only on
    amounts, score and past_deadline.

    Raises:
        BandLookupError: If no recovery band covers the score
    """
    rules = rules or JurisdictionRules(code="TX", name="Texas")

    deposit = parse_amount(deposit_amount)
    pet = parse_amount(pet_deposit_amount)
    returned = parse_amount(amount_returned)
    total = deposit + pet
    owed = max(ZERO, total - returned)

    if total <= ZERO:
        return RecoveryEstimate(
            deposit_amount=ZERO_CENTS,
            pet_deposit_amount=ZERO_CENTS,
            total_deposit=ZERO_CENTS,
            amount_already_returned=ZERO_CENTS,
            amount_still_owed=ZERO_CENTS,
            best_case=ZERO_CENTS,
            likely_case=ZERO_CENTS,
            worst_case=ZERO_CENTS,
            statutory_penalty=ZERO_CENTS,
            probability_distribution=ProbabilityDistribution(0, 0, 100),
            confidence_note=NO_DEPOSIT_NOTE,
            disclaimer=RECOVERY_DISCLAIMER,
        )

    is_past = past_deadline is True
    penalty = (
        rules.statutory_penalty
        if is_past and score >= rules.penalty_score_threshold
        else ZERO
    )

    band = lookup_recovery_band(score, recovery_bands)

    likely = owed * band.likely_mult
    if band.likely_adds_penalty and is_past:
        likely += penalty

    return RecoveryEstimate(
        deposit_amount=to_cents(deposit),
        pet_deposit_amount=to_cents(pet),
        total_deposit=to_cents(total),
        amount_already_returned=to_cents(returned),
        amount_still_owed=to_cents(owed),
        best_case=to_cents(owed + penalty),
        likely_case=to_cents(likely),
        worst_case=to_cents(owed * band.worst_mult),
        statutory_penalty=to_cents(penalty),
        probability_distribution=ProbabilityDistribution(
            full_recovery=band.prob_full,
            partial_recovery=band.prob_partial,
            no_recovery=band.prob_none,
        ),
        confidence_note=band.confidence_note,
        statutory_penalty_basis=PENALTY_BASIS if penalty > ZERO else None,
        disclaimer=RECOVERY_DISCLAIMER,
    )

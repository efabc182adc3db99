"""
Deposit Defender Strategy Assembler

Picks the recommended action for a leverage score and attaches the
action plan. Action and urgency come from the score band table; all
text comes from the action's content block in the reference pack. This
module holds no thresholds and no copy.
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from ..exceptions import ReportAssemblyError
from ..models import (
    RecommendedAction,
    ReferenceData,
    StrategyRecommendation,
)
from .band_tables import lookup_score_band

logger = logging.getLogger(__name__)


def determine_strategy(
    score: int,
    reference: ReferenceData,
    deposit_amount: Optional[Decimal] = None,
) -> StrategyRecommendation:
    """
    Build the strategy recommendation for a score.

    deposit_amount is accepted for callers that have it; the plan text
    does not vary with it.

    Raises:
        BandLookupError: If no score band covers the score
        ReportAssemblyError: If the band's action has no content block
    """
    band = lookup_score_band(score, reference.score_bands)
    content = reference.get_action_content(band.action)
    if content is None:
        raise ReportAssemblyError(
            message=f"No content block for action {band.action.value}",
            details={"action": band.action.value, "score": score},
        )

    return StrategyRecommendation(
        recommended_action=band.action,
        urgency=band.urgency,
        action_label=content.label,
        rationale=content.rationale,
        success_rate_note=content.success_rate_note,
        timeline=content.timeline,
        cost_estimate=content.cost_estimate,
        next_steps=content.next_steps,
        if_no_response=content.if_no_response,
        escalation_path=content.escalation_path,
    )


def format_action_label(action: RecommendedAction, reference: ReferenceData) -> str:
    """Human-readable label for an action, falling back to its code."""
    content = reference.get_action_content(action)
    return content.label if content else action.value

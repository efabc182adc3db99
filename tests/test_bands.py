"""
Tests for band table lookups and the strategy assembler.

Validates:
- Threshold boundaries of the score band table
- Grade A above 90
- Grade, position and recovery multipliers never decrease as score rises
- Strategy content comes from the reference pack
"""
from dataclasses import replace
from decimal import Decimal

import pytest

from depositdefender.engine import (
    determine_strategy,
    format_action_label,
    leverage_grade,
    lookup_recovery_band,
    lookup_score_band,
    strategic_position,
)
from depositdefender.exceptions import BandLookupError, ReportAssemblyError
from depositdefender.models import Grade, RecommendedAction, StrategicPosition, Urgency

POSITION_ORDER = [
    StrategicPosition.UNCERTAIN,
    StrategicPosition.WEAK,
    StrategicPosition.MODERATE,
    StrategicPosition.STRONG,
]

GRADE_ORDER = [Grade.F, Grade.D, Grade.C, Grade.B, Grade.A]


class TestScoreBands:

    @pytest.mark.parametrize("score,grade,position,action", [
        (100, Grade.A, StrategicPosition.STRONG, RecommendedAction.SEND_DEMAND_LETTER),
        (90, Grade.A, StrategicPosition.STRONG, RecommendedAction.SEND_DEMAND_LETTER),
        (89, Grade.B, StrategicPosition.STRONG, RecommendedAction.SEND_DEMAND_LETTER),
        (75, Grade.B, StrategicPosition.STRONG, RecommendedAction.SEND_DEMAND_LETTER),
        (74, Grade.C, StrategicPosition.MODERATE, RecommendedAction.REQUEST_ITEMIZATION_OR_NEGOTIATE),
        (50, Grade.C, StrategicPosition.MODERATE, RecommendedAction.REQUEST_ITEMIZATION_OR_NEGOTIATE),
        (49, Grade.D, StrategicPosition.WEAK, RecommendedAction.GATHER_EVIDENCE_THEN_EVALUATE),
        (25, Grade.D, StrategicPosition.WEAK, RecommendedAction.GATHER_EVIDENCE_THEN_EVALUATE),
        (24, Grade.F, StrategicPosition.UNCERTAIN, RecommendedAction.REVIEW_SITUATION),
        (0, Grade.F, StrategicPosition.UNCERTAIN, RecommendedAction.REVIEW_SITUATION),
    ])
    def test_boundaries(self, reference, score, grade, position, action):
        assert leverage_grade(score, reference.score_bands) == grade
        assert strategic_position(score, reference.score_bands) == position
        assert lookup_score_band(score, reference.score_bands).action == action

    def test_position_monotonic(self, reference):
        ranks = [
            POSITION_ORDER.index(strategic_position(s, reference.score_bands))
            for s in range(0, 101)
        ]
        assert ranks == sorted(ranks)

    def test_grade_monotonic(self, reference):
        ranks = [
            GRADE_ORDER.index(leverage_grade(s, reference.score_bands))
            for s in range(0, 101)
        ]
        assert ranks == sorted(ranks)

    def test_negative_score_has_no_band(self, reference):
        with pytest.raises(BandLookupError) as exc_info:
            lookup_score_band(-1, reference.score_bands)
        assert exc_info.value.details == {"score": -1, "table": "score_bands"}


class TestRecoveryBands:

    @pytest.mark.parametrize("score,likely,worst,full", [
        (100, "1.00", "0.75", 70),
        (80, "1.00", "0.75", 70),
        (79, "0.80", "0.50", 50),
        (65, "0.80", "0.50", 50),
        (64, "0.80", "0.30", 30),
        (50, "0.80", "0.30", 30),
        (49, "0.50", "0.00", 15),
        (24, "0.25", "0.00", 5),
    ])
    def test_boundaries(self, reference, score, likely, worst, full):
        band = lookup_recovery_band(score, reference.recovery_bands)
        assert band.likely_mult == Decimal(likely)
        assert band.worst_mult == Decimal(worst)
        assert band.prob_full == full

    def test_probabilities_close(self, reference):
        for band in reference.recovery_bands:
            assert band.prob_full + band.prob_partial + band.prob_none == 100

    def test_multipliers_monotonic(self, reference):
        bands = [lookup_recovery_band(s, reference.recovery_bands) for s in range(0, 101)]
        likely = [b.likely_mult for b in bands]
        worst = [b.worst_mult for b in bands]
        assert likely == sorted(likely)
        assert worst == sorted(worst)

    def test_only_top_band_adds_penalty(self, reference):
        assert [b.likely_adds_penalty for b in reference.recovery_bands] == [
            True, False, False, False, False,
        ]


class TestStrategy:

    def test_strong_case(self, reference):
        strategy = determine_strategy(89, reference)
        assert strategy.recommended_action == RecommendedAction.SEND_DEMAND_LETTER
        assert strategy.urgency == Urgency.HIGH
        assert strategy.action_label == "Send Demand Letter"
        assert [s.step for s in strategy.next_steps] == list(range(1, len(strategy.next_steps) + 1))

    def test_uncertain_case(self, reference):
        strategy = determine_strategy(10, reference)
        assert strategy.recommended_action == RecommendedAction.REVIEW_SITUATION
        assert strategy.urgency == Urgency.LOW

    def test_to_dict_uses_enum_values(self, reference):
        data = determine_strategy(60, reference).to_dict()
        assert data["recommended_action"] == "REQUEST_ITEMIZATION_OR_NEGOTIATE"
        assert data["urgency"] == "MEDIUM"

    def test_missing_content_block(self, reference):
        stripped = replace(reference, actions=())
        with pytest.raises(ReportAssemblyError):
            determine_strategy(89, stripped)

    def test_action_label(self, reference):
        assert format_action_label(RecommendedAction.REVIEW_SITUATION, reference) == "Review Situation"
        stripped = replace(reference, actions=())
        assert format_action_label(RecommendedAction.REVIEW_SITUATION, stripped) == "REVIEW_SITUATION"

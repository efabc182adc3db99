"""
Tests for the recovery estimator.

Validates:
- Amount still owed and band multipliers
- Statutory penalty gating (past deadline and score >= 60)
- Zero-deposit short circuit
- Amounts are never negative
"""
from decimal import Decimal

import pytest

from depositdefender.engine import estimate_recovery
from depositdefender.engine.recovery_estimator import NO_DEPOSIT_NOTE, PENALTY_BASIS
from depositdefender.models import DepositReturnStatus


@pytest.fixture
def estimate(reference):
    def _estimate(deposit="1500", score=89, past=True, returned=None, pet=None, days=45):
        return estimate_recovery(
            deposit_amount=deposit,
            pet_deposit_amount=pet,
            score=score,
            days_since_move_out=days,
            past_deadline=past,
            return_status=DepositReturnStatus.NONE,
            amount_returned=returned,
            recovery_bands=reference.recovery_bands,
            rules=reference.jurisdiction,
        )
    return _estimate


class TestAmounts:

    def test_strong_case_past_deadline(self, estimate):
        r = estimate()
        assert r.amount_still_owed == Decimal("1500.00")
        assert r.statutory_penalty == Decimal("100.00")
        assert r.best_case == Decimal("1600.00")
        assert r.likely_case == Decimal("1600.00")
        assert r.worst_case == Decimal("1125.00")
        assert r.statutory_penalty_basis == PENALTY_BASIS

    def test_partial_refund(self, estimate):
        r = estimate(deposit="1000", returned="400", score=66, days=60)
        assert r.amount_still_owed == Decimal("600.00")
        assert r.best_case == Decimal("700.00")
        assert r.likely_case == Decimal("480.00")
        assert r.worst_case == Decimal("300.00")

    def test_pet_deposit_added(self, estimate):
        r = estimate(deposit="1000", pet="$250")
        assert r.total_deposit == Decimal("1250.00")
        assert r.amount_still_owed == Decimal("1250.00")

    def test_over_return_is_not_negative(self, estimate):
        r = estimate(deposit="1000", returned="1200", score=10, past=False)
        assert r.amount_still_owed == Decimal("0.00")
        assert r.worst_case >= 0 and r.likely_case >= 0 and r.best_case >= 0

    def test_cents_preserved(self, estimate):
        r = estimate(deposit="999.99", score=70, past=False)
        assert r.likely_case == Decimal("799.99")
        assert r.worst_case == Decimal("500.00")


class TestPenalty:

    def test_no_penalty_inside_window(self, estimate):
        r = estimate(past=False)
        assert r.statutory_penalty == Decimal("0.00")
        assert r.best_case == Decimal("1500.00")
        assert r.likely_case == Decimal("1500.00")
        assert r.statutory_penalty_basis is None

    def test_no_penalty_below_threshold(self, estimate):
        r = estimate(score=59)
        assert r.statutory_penalty == Decimal("0.00")
        assert r.best_case == Decimal("1500.00")

    def test_penalty_at_threshold(self, estimate):
        r = estimate(score=60)
        assert r.statutory_penalty == Decimal("100.00")
        assert r.best_case == Decimal("1600.00")
        # the 50-64 band does not add the penalty to the likely case
        assert r.likely_case == Decimal("1200.00")

    def test_unknown_timeline_gets_no_penalty(self, estimate):
        assert estimate(past=None).statutory_penalty == Decimal("0.00")


class TestZeroDeposit:

    @pytest.mark.parametrize("deposit", [None, "", "0", "n/a"])
    def test_short_circuit(self, estimate, deposit):
        r = estimate(deposit=deposit)
        assert r.is_empty
        assert r.best_case == r.likely_case == r.worst_case == Decimal("0.00")
        assert r.statutory_penalty == Decimal("0.00")
        pd = r.probability_distribution
        assert (pd.full_recovery, pd.partial_recovery, pd.no_recovery) == (0, 0, 100)
        assert r.confidence_note == NO_DEPOSIT_NOTE


class TestSerialization:

    def test_display_and_exact_amounts(self, estimate):
        data = estimate().to_dict()
        assert data["amounts"]["best_case"] == "1600.00"
        assert data["display"]["best_case"] == "$1,600"
        assert data["probability_distribution"] == {
            "full_recovery": 70,
            "partial_recovery": 25,
            "no_recovery": 5,
        }
        assert data["disclaimer"]

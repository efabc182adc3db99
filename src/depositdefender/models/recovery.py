"""
Deposit Defender Recovery Estimate Model
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from .money import ZERO, format_currency


@dataclass(frozen=True)
class ProbabilityDistribution:
    """Outcome probabilities in whole percent. Always sums to 100."""
    full_recovery: int
    partial_recovery: int
    no_recovery: int

    @property
    def total(self) -> int:
        return self.full_recovery + self.partial_recovery + self.no_recovery

    def to_dict(self) -> dict[str, int]:
        return {
            "full_recovery": self.full_recovery,
            "partial_recovery": self.partial_recovery,
            "no_recovery": self.no_recovery,
        }


@dataclass(frozen=True)
class RecoveryEstimate:
    """
    Best / likely / worst dollar projections for a case.

    All amounts are Decimal quantized to cents. to_dict() carries both
    the exact amounts and a display form ("$1,500").
    """
    deposit_amount: Decimal
    pet_deposit_amount: Decimal
    total_deposit: Decimal
    amount_already_returned: Decimal
    amount_still_owed: Decimal
    best_case: Decimal
    likely_case: Decimal
    worst_case: Decimal
    statutory_penalty: Decimal
    probability_distribution: ProbabilityDistribution
    confidence_note: str
    statutory_penalty_basis: Optional[str] = None
    disclaimer: str = ""

    @property
    def is_empty(self) -> bool:
        return self.total_deposit <= ZERO

    def to_dict(self) -> dict[str, Any]:
        amounts = {
            "deposit_amount": self.deposit_amount,
            "pet_deposit_amount": self.pet_deposit_amount,
            "total_deposit": self.total_deposit,
            "amount_already_returned": self.amount_already_returned,
            "amount_still_owed": self.amount_still_owed,
            "best_case": self.best_case,
            "likely_case": self.likely_case,
            "worst_case": self.worst_case,
            "statutory_penalty": self.statutory_penalty,
        }
        return {
            "amounts": {k: str(v) for k, v in amounts.items()},
            "display": {k: format_currency(v) for k, v in amounts.items()},
            "probability_distribution": self.probability_distribution.to_dict(),
            "confidence_note": self.confidence_note,
            "statutory_penalty_basis": self.statutory_penalty_basis,
            "disclaimer": self.disclaimer,
        }

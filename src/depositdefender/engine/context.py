"""
Deposit Defender Evaluation Context

Normalizes an IntakeRecord and its Timeline into the canonical booleans
and scalars every detector and scoring rule reads. This is the only
place raw intake values are interpreted: "unknown" collapses to False,
monetary strings become Decimal, and a "full" return whose reported
amount is below the deposit is treated as a partial return.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..models import (
    DepositReturnStatus,
    IntakeRecord,
    Timeline,
)
from ..models.money import amount_reported, parse_amount


@dataclass(frozen=True)
class EvaluationContext:
    """
    Canonical view of one case.

    Attributes:
        intake: The source record (read-only)
        timeline: Computed timeline
        return_status: Normalized deposit return status
        deposit_returned: Any refund received (partial or full)
        is_fully_returned: Full refund received
        is_partial_return: Partial refund received
        itemization_provided: Explicit "yes" only
        forwarding_provided: Explicit "yes" only
        has_lease_document: Raw lease text is present
        deposit_amount / pet_deposit_amount / amount_returned: Parsed amounts
        communication_count: Number of distinct channels used
        tenant_notes: Free text as entered
    """
    intake: IntakeRecord
    timeline: Timeline
    return_status: DepositReturnStatus
    deposit_returned: bool
    is_fully_returned: bool
    is_partial_return: bool
    itemization_provided: bool
    forwarding_provided: bool
    has_lease_document: bool
    deposit_amount: Decimal
    pet_deposit_amount: Decimal
    amount_returned: Decimal
    communication_count: int
    tenant_notes: str
    deadline_days: int = 30

    @classmethod
    def build(
        cls,
        intake: IntakeRecord,
        timeline: Timeline,
        deadline_days: int = 30,
    ) -> EvaluationContext:
        deposit = parse_amount(intake.deposit_amount)
        returned = parse_amount(intake.amount_returned)

        status = intake.deposit_return_status
        if (
            status == DepositReturnStatus.FULL
            and amount_reported(intake.deposit_amount)
            and amount_reported(intake.amount_returned)
            and returned < deposit
        ):
            status = DepositReturnStatus.PARTIAL

        return cls(
            intake=intake,
            timeline=timeline,
            return_status=status,
            deposit_returned=status in (DepositReturnStatus.PARTIAL, DepositReturnStatus.FULL),
            is_fully_returned=status == DepositReturnStatus.FULL,
            is_partial_return=status == DepositReturnStatus.PARTIAL,
            itemization_provided=intake.itemization_received.is_yes,
            forwarding_provided=intake.forwarding_address_provided.is_yes,
            has_lease_document=intake.has_lease_text,
            deposit_amount=deposit,
            pet_deposit_amount=parse_amount(intake.pet_deposit_amount),
            amount_returned=returned,
            communication_count=intake.communication_count,
            tenant_notes=intake.tenant_notes or "",
            deadline_days=deadline_days,
        )

    # -------------------------------------------------------------------------
    # Timeline shortcuts (unknown timelines never satisfy a date-gated rule)
    # -------------------------------------------------------------------------

    @property
    def past_deadline(self) -> bool:
        return self.timeline.is_past_deadline

    @property
    def within_deadline(self) -> bool:
        return self.timeline.is_within_deadline

    @property
    def days_since_move_out(self) -> Optional[int]:
        return self.timeline.days_since_move_out

    def days_at_least(self, days: int) -> bool:
        return self.timeline.days_at_least(days)

    @property
    def days_over_deadline(self) -> int:
        return max(0, (self.days_since_move_out or 0) - self.deadline_days)

    @property
    def days_until_deadline(self) -> int:
        return max(0, self.deadline_days - (self.days_since_move_out or 0))

    @property
    def notes_lower(self) -> str:
        return self.tenant_notes.lower()

    @property
    def amount_withheld(self) -> Decimal:
        return max(Decimal("0"), self.deposit_amount - self.amount_returned)

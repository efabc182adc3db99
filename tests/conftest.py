"""
Pytest configuration and fixtures for Deposit Defender tests.

Provides helper factories for intakes and evaluation contexts, all
pinned to a fixed analysis date so day counts are exact.
"""
from datetime import date, timedelta
from typing import Optional

import pytest

from depositdefender.engine import EvaluationContext, FixedClock, TimelineCalculator
from depositdefender.models import (
    CommunicationMethod,
    DepositReturnStatus,
    IntakeRecord,
    TriState,
)
from depositdefender.packs import load_reference_data

ANALYSIS_DATE = date(2024, 3, 15)


# =============================================================================
# Factory Helpers
# =============================================================================

def days_ago(days: int, today: date = ANALYSIS_DATE) -> str:
    """ISO move-out date the given number of days before the analysis date."""
    return (today - timedelta(days=days)).isoformat()


def make_intake(
    days: Optional[int] = 45,
    deposit: Optional[str] = "1500",
    status: DepositReturnStatus = DepositReturnStatus.NONE,
    returned: Optional[str] = None,
    itemization: TriState = TriState.NO,
    forwarding: TriState = TriState.YES,
    methods: tuple = (),
    notes: str = "",
    lease_text: Optional[str] = None,
    case_id: str = "DD-TEST-001",
    **overrides,
) -> IntakeRecord:
    """Create an IntakeRecord; days is the move-out age in days (None = no date)."""
    fields = dict(
        case_id=case_id,
        move_out_date=days_ago(days) if days is not None else None,
        deposit_amount=deposit,
        deposit_return_status=status,
        amount_returned=returned,
        itemization_received=itemization,
        forwarding_address_provided=forwarding,
        communication_methods=frozenset(methods),
        tenant_notes=notes,
        lease_text=lease_text,
    )
    fields.update(overrides)
    return IntakeRecord(**fields)


def make_context(intake: Optional[IntakeRecord] = None, **intake_kwargs) -> EvaluationContext:
    """Build an EvaluationContext at the fixed analysis date."""
    intake = intake or make_intake(**intake_kwargs)
    calculator = TimelineCalculator(clock=FixedClock(ANALYSIS_DATE))
    return EvaluationContext.build(intake, calculator.calculate(intake.move_out_date))


def make_payload(
    move_out_date: str = "2024-01-30",
    deposit_amount: str = "1500",
    deposit_returned: str = "no",
    amount_returned: str = "",
    itemized: str = "no",
    forwarding: str = "yes",
    notes: str = "",
    case_id: str = "DD-2024-0042",
) -> dict:
    """Nested intake form payload as the web form submits it."""
    return {
        "case_id": case_id,
        "jurisdiction": "TX",
        "tenant_information": {"full_name": "Jordan Reyes"},
        "landlord_information": {"landlord_name": "Oak Hollow Apartments"},
        "property_information": {"property_address": "1200 Elm St, Austin, TX"},
        "move_out_information": {
            "move_out_date": move_out_date,
            "forwarding_address_provided": forwarding,
            "forwarding_address_date": move_out_date,
        },
        "security_deposit_information": {
            "deposit_amount": deposit_amount,
            "deposit_returned": deposit_returned,
            "amount_returned": amount_returned,
        },
        "post_move_out_communications": {
            "itemized_deductions_received": itemized,
            "communication_methods_used": ["email"],
        },
        "additional_notes": {"tenant_notes": notes},
    }


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def clock():
    return FixedClock(ANALYSIS_DATE)


@pytest.fixture(scope="session")
def reference():
    return load_reference_data()


@pytest.fixture
def clean_violation_intake():
    """45 days out, nothing returned or itemized, forwarding address given."""
    return make_intake(days=45)


@pytest.fixture
def email_and_text():
    return (CommunicationMethod.EMAIL, CommunicationMethod.TEXT)

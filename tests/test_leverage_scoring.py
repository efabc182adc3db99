"""
Tests for leverage scoring.

Validates:
- Timeline rules are first-match-wins
- Each factor group respects its cap
- Score is bounded to 0-100
- Bad-faith indicators, win probability and evidence grading
"""
from decimal import Decimal

import pytest

from depositdefender.engine import (
    TIMELINE_RULES,
    assess_evidence_quality,
    bad_faith_indicators,
    calculate_leverage_score,
    detect_issues,
    estimate_win_probability,
    round_half_up,
)
from depositdefender.engine.leverage_scoring import first_match
from depositdefender.models import (
    CommunicationMethod,
    DepositReturnStatus,
    DetectedIssue,
    EvidenceStrength,
    Severity,
    TriState,
)
from tests.conftest import make_context, make_intake


def score_case(**kwargs):
    ctx = make_context(**kwargs)
    return calculate_leverage_score(ctx, detect_issues(ctx))


def issue(severity, n=0):
    return DetectedIssue(id=f"i{n}", severity=severity, rank_weight=n, title="t", rationale="r")


class TestTimelineRules:

    @pytest.mark.parametrize("kwargs,points", [
        (dict(days=45), 40),
        (dict(days=45, status=DepositReturnStatus.PARTIAL, returned="400"), 30),
        (dict(days=45, status=DepositReturnStatus.PARTIAL, returned="400",
              itemization=TriState.YES), 18),
        (dict(days=45, itemization=TriState.YES), 18),
        (dict(days=45, status=DepositReturnStatus.FULL), 0),
        (dict(days=22), 40),
        (dict(days=20), 40),
        (dict(days=19), 20),
        (dict(days=1), 20),
        (dict(days=0), 0),
        (dict(days=25, status=DepositReturnStatus.PARTIAL, returned="400"), 8),
        (dict(days=None), 0),
    ])
    def test_first_match(self, kwargs, points):
        assert first_match(TIMELINE_RULES, make_context(**kwargs)) == points


class TestBreakdown:

    def test_clean_violation(self):
        result = score_case(days=45)
        b = result.breakdown
        assert (b.timeline, b.landlord_behavior, b.tenant_compliance, b.issue_severity) == (40, 21, 18, 10)
        assert result.score == 89

    def test_partial_refund(self):
        result = score_case(days=60, deposit="1000", status=DepositReturnStatus.PARTIAL, returned="400")
        b = result.breakdown
        assert (b.timeline, b.landlord_behavior, b.tenant_compliance, b.issue_severity) == (30, 16, 10, 10)
        assert result.score == 66

    def test_approaching_deadline(self):
        result = score_case(days=22)
        b = result.breakdown
        assert (b.timeline, b.landlord_behavior, b.tenant_compliance, b.issue_severity) == (40, 0, 20, 10)
        assert result.score == 70

    def test_full_compliance(self):
        result = score_case(days=10, status=DepositReturnStatus.FULL, returned="1500")
        assert result.score == 10
        assert result.bad_faith_indicators == ()


class TestCaps:

    def test_compliance_capped_at_twenty(self, email_and_text):
        # 10 + 8 + 5 + 5 = 28 before the cap
        result = score_case(days=45, methods=email_and_text, lease_text="Lease agreement")
        assert result.breakdown.tenant_compliance == 20

    def test_behavior_capped(self, email_and_text):
        result = score_case(days=45, methods=email_and_text)
        assert len(result.bad_faith_indicators) == 3
        assert result.breakdown.landlord_behavior == 29
        assert result.score == 99

    def test_severity_capped_at_twenty(self):
        ctx = make_context(days=45)
        issues = [issue(Severity.HIGH, n) for n in range(3)] + [issue(Severity.MEDIUM, n) for n in range(4)]
        assert calculate_leverage_score(ctx, issues).breakdown.issue_severity == 20

    def test_total_clamped_to_one_hundred(self, email_and_text):
        result = score_case(
            days=45,
            methods=email_and_text,
            lease_text="Lease agreement",
            notes="faded paint",
        )
        assert result.breakdown.raw_total == 102
        assert result.score == 100


class TestBadFaithIndicators:

    def test_none_inside_window(self):
        assert bad_faith_indicators(make_context(days=22)) == []

    def test_past_deadline_silence(self):
        assert bad_faith_indicators(make_context(days=35)) == [
            "Zero communication about deposit after deadline passed",
        ]

    def test_follow_ups_ignored(self, email_and_text):
        indicators = bad_faith_indicators(make_context(days=35, methods=email_and_text))
        assert "No response to multiple tenant follow-ups" in indicators

    def test_follow_ups_on_unlisted_channels(self):
        intake = make_intake(
            days=35,
            methods=(CommunicationMethod.OTHER,),
            communication_channels=frozenset({"letter", "fax"}),
        )
        indicators = bad_faith_indicators(make_context(intake=intake))
        assert "No response to multiple tenant follow-ups" in indicators

    def test_itemization_clears_silence(self):
        assert bad_faith_indicators(make_context(days=60, itemization=TriState.YES)) == []

    def test_unknown_timeline(self):
        assert bad_faith_indicators(make_context(days=None)) == []


class TestWinProbability:

    def test_clean_violation(self):
        assert estimate_win_probability(89, make_context(days=45)) == 83

    def test_capped_at_ninety_five(self):
        ctx = make_context(days=45, lease_text="Lease agreement")
        assert estimate_win_probability(100, ctx) == 95

    def test_floor_at_five(self):
        ctx = make_context(days=5, status=DepositReturnStatus.FULL, forwarding=TriState.NO)
        assert estimate_win_probability(0, ctx) == 5

    def test_approaching_deadline_floor(self):
        ctx = make_context(days=22, forwarding=TriState.NO)
        assert estimate_win_probability(20, ctx) == 40

    def test_no_floor_past_deadline(self):
        ctx = make_context(days=45, forwarding=TriState.NO)
        assert estimate_win_probability(20, ctx) == 17


class TestRounding:

    @pytest.mark.parametrize("value,expected", [
        (Decimal("2.5"), 3),
        (Decimal("3.5"), 4),
        (0.5, 1),
        (Decimal("65.45"), 65),
        (7, 7),
    ])
    def test_half_up(self, value, expected):
        assert round_half_up(value) == expected


class TestEvidenceQuality:

    def test_clean_violation_is_weak(self):
        evidence = assess_evidence_quality(make_context(days=45))
        assert evidence.points == 5
        assert evidence.overall_strength == EvidenceStrength.WEAK

    def test_full_documentation_is_strong(self):
        ctx = make_context(
            days=45,
            lease_text="Lease agreement",
            methods=(CommunicationMethod.EMAIL,),
            notes="I took photos of every room",
        )
        evidence = assess_evidence_quality(ctx)
        assert evidence.points == 11
        assert evidence.overall_strength == EvidenceStrength.STRONG

    def test_moderate(self):
        evidence = assess_evidence_quality(make_context(days=45, notes="have pictures"))
        assert evidence.points == 6
        assert evidence.overall_strength == EvidenceStrength.MODERATE

    def test_nothing_is_minimal(self):
        evidence = assess_evidence_quality(make_context(deposit=None, forwarding=TriState.NO))
        assert evidence.points == 0
        assert evidence.overall_strength == EvidenceStrength.MINIMAL
        assert all(item.strength is None for item in evidence.items)

"""
Tests for report assembly, hashing and shape validation.

Validates:
- Same intake + same clock -> byte-identical report and hash
- Leverage points, procedural steps and statutes are derived from findings
- Compliance checklist semantics
- Shape validation is advisory
"""
import logging
from datetime import date
from decimal import Decimal

import pytest

from depositdefender.canon import canonical_json, content_hash
from depositdefender.engine import (
    CaseAnalyzer,
    FixedClock,
    applicable_statutes,
    build_compliance_checklist,
    derive_procedural_steps,
    detect_issues,
    validate_report,
)
from depositdefender.models import NO_ISSUES_POINT_ID, DepositReturnStatus, TriState
from tests.conftest import ANALYSIS_DATE, make_context, make_intake


@pytest.fixture
def analyzer(reference, clock):
    return CaseAnalyzer(reference=reference, clock=clock)


class TestDeterminism:

    def test_same_inputs_same_report(self, reference):
        intake = make_intake(days=45, notes="carpet stains")
        first = CaseAnalyzer(reference, FixedClock(ANALYSIS_DATE)).analyze(intake)
        second = CaseAnalyzer(reference, FixedClock(ANALYSIS_DATE)).analyze(intake)
        assert canonical_json(first.to_dict()) == canonical_json(second.to_dict())
        assert first.report.report_hash == second.report.report_hash

    def test_hash_matches_body(self, analyzer):
        report = analyzer.analyze(make_intake()).report
        data = report.to_dict()
        assert data["report_hash"] == report.report_hash
        assert content_hash(report.to_dict(include_hash=False)) == report.report_hash
        assert len(report.report_hash) == 64

    def test_different_day_different_hash(self, reference):
        intake = make_intake(days=45)
        a = CaseAnalyzer(reference, FixedClock(ANALYSIS_DATE)).analyze(intake)
        b = CaseAnalyzer(reference, FixedClock(date(2024, 3, 16))).analyze(intake)
        assert a.report.report_hash != b.report.report_hash

    def test_metadata(self, analyzer, reference):
        data = analyzer.analyze(make_intake()).report.to_dict()
        meta = data["report_metadata"]
        assert meta["case_id"] == "DD-TEST-001"
        assert meta["analysis_date"] == "2024-03-15"
        assert meta["reference_data_hash"] == reference.content_hash
        assert meta["jurisdiction"] == "TX"


class TestGuidance:

    def test_leverage_points_carry_resolved_citations(self, analyzer):
        points = analyzer.analyze(make_intake(days=45)).report.leverage_points
        assert [p.rank for p in points] == [1]
        assert points[0].point_id == "deadline_missed_full_deposit"
        assert [c.citation for c in points[0].statute_citations] == [
            "Tex. Prop. Code § 92.103",
            "Tex. Prop. Code § 92.104",
            "Tex. Prop. Code § 92.109",
        ]

    def test_placeholder_when_nothing_fires(self, analyzer):
        intake = make_intake(days=10, status=DepositReturnStatus.FULL, returned="1500")
        points = analyzer.analyze(intake).report.leverage_points
        assert len(points) == 1
        assert points[0].point_id == NO_ISSUES_POINT_ID

    def test_procedural_steps_numbered_and_deduplicated(self):
        # deadline_missed_full_deposit and no_forwarding_address fire
        issues = detect_issues(make_context(days=45, forwarding=TriState.NO))
        steps = derive_procedural_steps(issues)
        assert [s.step_number for s in steps] == list(range(1, len(steps) + 1))
        assert [s.title for s in steps] == [
            "Gather Your Documents",
            "Send a Written Demand Letter",
            "Document Your Timeline",
            "Send Your Forwarding Address",
            "Mark the 30-Day Start Date",
            "Learn About Your Options",
        ]

    def test_no_options_step_without_high_issue(self):
        issues = detect_issues(make_context(days=10, status=DepositReturnStatus.PARTIAL,
                                            returned="500", notes="worn carpet"))
        titles = [s.title for s in derive_procedural_steps(issues)]
        assert "Learn About Your Options" not in titles
        assert titles[0] == "Gather Your Documents"

    def test_statutes_always_cited_first(self, reference):
        issues = detect_issues(make_context(days=45, forwarding=TriState.NO))
        ids = [s.id for s in applicable_statutes(issues, reference)]
        assert ids == ["92.101", "92.103", "92.104", "92.109", "92.107"]

    def test_statutes_without_issues(self, reference):
        assert [s.id for s in applicable_statutes([], reference)] == ["92.101", "92.103"]


class TestComplianceChecklist:

    def test_nothing_returned(self):
        checklist = build_compliance_checklist(make_context(days=45))
        assert checklist.to_dict() == {
            "deposit_returned": False,
            "itemization_provided": False,
            "refund_within_30_days": False,
        }

    def test_full_refund_on_time(self):
        checklist = build_compliance_checklist(
            make_context(days=10, status=DepositReturnStatus.FULL, returned="1500")
        )
        assert checklist.deposit_returned
        assert checklist.refund_within_30_days

    def test_full_refund_counted_late(self):
        checklist = build_compliance_checklist(make_context(days=40, status=DepositReturnStatus.FULL))
        assert checklist.deposit_returned
        assert not checklist.refund_within_30_days

    def test_partial_counts_as_returned(self):
        checklist = build_compliance_checklist(
            make_context(days=10, status=DepositReturnStatus.PARTIAL, returned="200")
        )
        assert checklist.deposit_returned
        assert not checklist.refund_within_30_days

    def test_unknown_timeline_is_not_on_time(self):
        checklist = build_compliance_checklist(make_context(days=None, status=DepositReturnStatus.FULL))
        assert not checklist.refund_within_30_days


class TestValidation:

    def test_assembled_report_is_valid(self, analyzer):
        result = analyzer.analyze(make_intake())
        assert result.validation.valid
        assert result.validation.errors == ()

    def test_empty_report(self):
        validation = validate_report({})
        assert not validation.valid
        assert "Missing report_metadata" in validation.errors
        assert "leverage_points must be an array" in validation.errors
        assert "Missing disclaimers.primary" in validation.errors

    def test_not_an_object(self):
        assert validate_report(None).errors == ("Report is null or not an object",)

    def test_failures_are_logged_not_raised(self, analyzer, caplog):
        data = analyzer.analyze(make_intake()).report.to_dict()
        data["procedural_steps"] = "none"
        with caplog.at_level(logging.WARNING):
            validation = validate_report(data)
        assert validation.errors == ("procedural_steps must be an array",)
        assert any(getattr(r, "case_id", None) == "DD-TEST-001" for r in caplog.records)


class TestAnalyzer:

    def test_accepts_mapping(self, analyzer):
        result = analyzer.analyze({"move_out_date": "2024-01-30", "deposit_amount": "1500"})
        assert result.report.timeline.days_since_move_out == 45

    def test_jurisdiction_mismatch_is_logged(self, analyzer, caplog):
        with caplog.at_level(logging.WARNING):
            analyzer.analyze(make_intake(jurisdiction="CA"))
        assert any("does not match" in r.getMessage() for r in caplog.records)

    def test_recovery_wired_from_context(self, analyzer):
        intake = make_intake(days=60, deposit="1000", status=DepositReturnStatus.FULL, returned="400")
        recovery = analyzer.analyze(intake).report.recovery_estimate
        assert recovery.amount_still_owed == Decimal("600.00")

    def test_damage_defense_always_has_burden_of_proof(self, analyzer):
        defense = analyzer.analyze(make_intake(notes="")).report.damage_defense
        assert [d.claim_type for d in defense.defenses] == ["burden_of_proof"]
        assert not defense.potential_claims_detected

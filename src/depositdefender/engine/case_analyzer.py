"""
Deposit Defender Case Analyzer

The engine's entry point. Runs the pipeline for one intake:

    intake -> timeline -> context -> issues -> score
           -> {grade/position/action, recovery band}
           -> {strategy, recovery estimate} -> report -> validation

Key features:
- Pure and synchronous; the clock and reference data are injected
- Same intake + same clock + same reference data -> identical report
- Shape validation is advisory and returned with the report
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Union

from ..models import (
    CaseAnalysisReport,
    IntakeRecord,
    ReferenceData,
    ReportValidation,
)
from ..packs import load_reference_data
from .context import EvaluationContext
from .damage_defense import analyze_damage_defenses
from .issue_detectors import DETECTORS, IssueDetector, detect_issues
from .leverage_scoring import (
    assess_evidence_quality,
    calculate_leverage_score,
    estimate_win_probability,
)
from .recovery_estimator import estimate_recovery
from .report_assembler import ReportInputs, assemble_report
from .report_validator import validate_report
from .strategy_assembler import determine_strategy
from .timeline_calculator import Clock, SystemClock, TimelineCalculator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """A report and its advisory validation result."""
    report: CaseAnalysisReport
    validation: ReportValidation

    def to_dict(self) -> dict[str, Any]:
        return {
            "report": self.report.to_dict(),
            "validation": self.validation.to_dict(),
        }


class CaseAnalyzer:
    """
    Runs the case strength pipeline.

    Usage:
        analyzer = CaseAnalyzer(clock=FixedClock(date(2024, 3, 15)))
        result = analyzer.analyze(IntakeRecord.from_dict(payload))
        result.report.case_strength.leverage_score
    """

    def __init__(
        self,
        reference: Optional[ReferenceData] = None,
        clock: Optional[Clock] = None,
        detectors: Iterable[IssueDetector] = DETECTORS,
    ):
        self.reference = reference or load_reference_data()
        self.clock = clock or SystemClock()
        self.detectors = tuple(detectors)
        self.timeline_calculator = TimelineCalculator(
            clock=self.clock,
            deadline_days=self.reference.jurisdiction.deadline_days,
        )

    def analyze(self, intake: Union[IntakeRecord, Mapping[str, Any]]) -> AnalysisResult:
        """
        Analyze one case.

        Raises:
            IntakeError: If a mapping intake is not structurally usable
        """
        started = time.perf_counter()
        if not isinstance(intake, IntakeRecord):
            intake = IntakeRecord.from_dict(intake)

        if intake.jurisdiction.upper() != self.reference.jurisdiction.code:
            logger.warning(
                "Intake jurisdiction %s does not match reference pack %s",
                intake.jurisdiction,
                self.reference.jurisdiction.code,
                extra={"case_id": intake.case_id},
            )

        timeline = self.timeline_calculator.calculate(intake.move_out_date)
        ctx = EvaluationContext.build(
            intake,
            timeline,
            deadline_days=self.reference.jurisdiction.deadline_days,
        )

        issues = detect_issues(ctx, self.detectors)
        leverage = calculate_leverage_score(ctx, issues)
        score = leverage.score

        recovery = estimate_recovery(
            deposit_amount=ctx.deposit_amount,
            pet_deposit_amount=ctx.pet_deposit_amount,
            score=score,
            days_since_move_out=timeline.days_since_move_out,
            past_deadline=timeline.past_deadline,
            return_status=ctx.return_status,
            amount_returned=ctx.amount_returned,
            recovery_bands=self.reference.recovery_bands,
            rules=self.reference.jurisdiction,
        )

        inputs = ReportInputs(
            ctx=ctx,
            issues=issues,
            leverage=leverage,
            win_probability=estimate_win_probability(score, ctx),
            evidence=assess_evidence_quality(ctx),
            recovery=recovery,
            strategy=determine_strategy(score, self.reference, ctx.deposit_amount),
            damage_defense=analyze_damage_defenses(ctx.tenant_notes, ctx.past_deadline),
        )
        report = assemble_report(inputs, self.reference, self.clock)
        report_dict = report.to_dict()
        validation = validate_report(report_dict)

        logger.info(
            "Case analyzed",
            extra={
                "case_id": intake.case_id,
                "score": score,
                "position": report.case_strength.strategic_position.value,
                "issue_ids": [i.id for i in issues],
                "report_hash": report_dict["report_hash"],
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
        return AnalysisResult(report=report, validation=validation)


def analyze_case(
    intake: Mapping[str, Any],
    clock: Optional[Clock] = None,
    lease_text: Optional[str] = None,
    reference: Optional[ReferenceData] = None,
) -> AnalysisResult:
    """Analyze an intake payload with the default reference pack."""
    record = IntakeRecord.from_dict(intake, lease_text=lease_text)
    return CaseAnalyzer(reference=reference, clock=clock).analyze(record)

"""
Deposit Defender Report Assembler

Composes the outputs of every engine stage into the frozen
CaseAnalysisReport. Nothing is computed here that another stage owns;
the assembler only builds the compliance checklist and metadata and
wires the rest together.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..config import ENGINE_VERSION
from ..models import (
    CaseAnalysisReport,
    CaseStrength,
    ComplianceChecklist,
    DamageDefenseAnalysis,
    DetectedIssue,
    EvidenceAssessment,
    RecoveryEstimate,
    ReferenceData,
    ReportMetadata,
    StrategyRecommendation,
)
from ..models.money import ZERO
from .band_tables import leverage_grade, strategic_position
from .context import EvaluationContext
from .guidance import applicable_statutes, build_leverage_points, derive_procedural_steps
from .leverage_scoring import LeverageScore
from .timeline_calculator import Clock


def build_compliance_checklist(ctx: EvaluationContext) -> ComplianceChecklist:
    """Landlord obligations as three yes/no answers."""
    days = ctx.days_since_move_out
    return ComplianceChecklist(
        deposit_returned=ctx.deposit_returned or ctx.amount_returned > ZERO,
        itemization_provided=ctx.itemization_provided,
        refund_within_30_days=(
            ctx.is_fully_returned and days is not None and days <= ctx.deadline_days
        ),
    )


@dataclass(frozen=True)
class ReportInputs:
    """Stage outputs gathered by the analyzer for one case."""
    ctx: EvaluationContext
    issues: Sequence[DetectedIssue]
    leverage: LeverageScore
    win_probability: int
    evidence: EvidenceAssessment
    recovery: RecoveryEstimate
    strategy: StrategyRecommendation
    damage_defense: DamageDefenseAnalysis


def assemble_report(
    inputs: ReportInputs,
    reference: ReferenceData,
    clock: Clock,
) -> CaseAnalysisReport:
    """Build the immutable report from stage outputs."""
    ctx = inputs.ctx
    score = inputs.leverage.score

    metadata = ReportMetadata(
        case_id=ctx.intake.case_id,
        jurisdiction=ctx.intake.jurisdiction or reference.jurisdiction.code,
        generated_at=clock.now(),
        analysis_date=clock.today(),
        engine_version=ENGINE_VERSION,
        reference_data_hash=reference.content_hash,
    )

    case_strength = CaseStrength(
        leverage_score=score,
        leverage_grade=leverage_grade(score, reference.score_bands),
        strategic_position=strategic_position(score, reference.score_bands),
        win_probability=inputs.win_probability,
        score_breakdown=inputs.leverage.breakdown,
        bad_faith_indicators=inputs.leverage.bad_faith_indicators,
        evidence=inputs.evidence,
    )

    return CaseAnalysisReport(
        metadata=metadata,
        timeline=ctx.timeline,
        compliance_checklist=build_compliance_checklist(ctx),
        leverage_points=build_leverage_points(inputs.issues, reference),
        case_strength=case_strength,
        recovery_estimate=inputs.recovery,
        strategy=inputs.strategy,
        procedural_steps=derive_procedural_steps(inputs.issues),
        statutory_references=applicable_statutes(inputs.issues, reference),
        damage_defense=inputs.damage_defense,
        disclaimers=reference.disclaimers,
    )

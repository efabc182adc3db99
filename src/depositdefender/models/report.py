"""
Deposit Defender Report Models

The CaseAnalysisReport is the engine's single output. It is frozen and
fully determined by (intake, clock, reference data): running the same
inputs twice yields byte-identical canonical JSON and the same hash.

Key features:
- Ranked leverage points with resolved statute citations
- Case strength panel (score, grade, position, win probability,
  per-group score breakdown, bad-faith indicators, evidence quality)
- Recovery estimate and strategy action plan
- Procedural step list and damage-defense talking points
- Advisory ReportValidation returned alongside, never raised
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from ..canon import content_hash
from .enums import (
    DefenseStrength,
    EvidenceStrength,
    Grade,
    Severity,
    StrategicPosition,
)
from .issue import DetectedIssue, RecommendedStep, SupportingFact
from .recovery import RecoveryEstimate
from .reference import StatuteReference
from .strategy import StrategyRecommendation
from .timeline import Timeline


# =============================================================================
# Compliance
# =============================================================================

@dataclass(frozen=True)
class ComplianceChecklist:
    """Yes/no view of the landlord's statutory obligations."""
    deposit_returned: bool
    itemization_provided: bool
    refund_within_30_days: bool

    def to_dict(self) -> dict[str, bool]:
        return {
            "deposit_returned": self.deposit_returned,
            "itemization_provided": self.itemization_provided,
            "refund_within_30_days": self.refund_within_30_days,
        }


# =============================================================================
# Leverage Points
# =============================================================================

@dataclass(frozen=True)
class CitedStatute:
    """A statute id resolved against the reference table for display."""
    rule_id: str
    citation: str
    title: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"rule_id": self.rule_id, "citation": self.citation, "title": self.title}


NO_ISSUES_POINT_ID = "no_issues_detected"


@dataclass(frozen=True)
class LeveragePoint:
    """A ranked detected issue as presented in the report."""
    rank: int
    point_id: str
    severity: Severity
    title: str
    rationale: str
    supporting_facts: tuple[SupportingFact, ...] = field(default_factory=tuple)
    statute_citations: tuple[CitedStatute, ...] = field(default_factory=tuple)
    recommended_steps: tuple[RecommendedStep, ...] = field(default_factory=tuple)

    @classmethod
    def from_issue(
        cls,
        rank: int,
        issue: DetectedIssue,
        citations: tuple[CitedStatute, ...],
    ) -> LeveragePoint:
        return cls(
            rank=rank,
            point_id=issue.id,
            severity=issue.severity,
            title=issue.title,
            rationale=issue.rationale,
            supporting_facts=issue.supporting_facts,
            statute_citations=citations,
            recommended_steps=issue.recommended_steps,
        )

    @classmethod
    def no_issues(cls) -> LeveragePoint:
        """Placeholder shown when no detector fired."""
        return cls(
            rank=1,
            point_id=NO_ISSUES_POINT_ID,
            severity=Severity.LOW,
            title="No Specific Issues Identified",
            rationale=(
                "The information provided does not point to a specific compliance "
                "problem. The deposit may already be back, the 30-day window may "
                "still be open, or more facts are needed to evaluate the case."
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "rank": self.rank,
            "point_id": self.point_id,
            "severity": self.severity.value,
            "title": self.title,
            "rationale": self.rationale,
            "supporting_facts": [f.to_dict() for f in self.supporting_facts],
            "statute_citations": [c.to_dict() for c in self.statute_citations],
            "recommended_steps": [s.to_dict() for s in self.recommended_steps],
        }


# =============================================================================
# Case Strength
# =============================================================================

@dataclass(frozen=True)
class ScoreBreakdown:
    """Points contributed by each capped factor group."""
    timeline: int
    landlord_behavior: int
    tenant_compliance: int
    issue_severity: int

    @property
    def raw_total(self) -> int:
        return self.timeline + self.landlord_behavior + self.tenant_compliance + self.issue_severity

    def to_dict(self) -> dict[str, int]:
        return {
            "timeline": self.timeline,
            "landlord_behavior": self.landlord_behavior,
            "tenant_compliance": self.tenant_compliance,
            "issue_severity": self.issue_severity,
            "raw_total": self.raw_total,
        }


@dataclass(frozen=True)
class EvidenceItem:
    """One kind of documentation the tenant has or lacks."""
    type: str
    present: bool
    critical: bool
    strength: Optional[EvidenceStrength] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "present": self.present,
            "strength": self.strength.value if self.strength else None,
            "critical": self.critical,
        }


@dataclass(frozen=True)
class EvidenceAssessment:
    overall_strength: EvidenceStrength
    points: int
    items: tuple[EvidenceItem, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "overall_strength": self.overall_strength.value,
            "points": self.points,
            "items": [i.to_dict() for i in self.items],
        }


@dataclass(frozen=True)
class CaseStrength:
    """Score-derived verdict shown at the top of the report."""
    leverage_score: int
    leverage_grade: Grade
    strategic_position: StrategicPosition
    win_probability: int
    score_breakdown: ScoreBreakdown
    bad_faith_indicators: tuple[str, ...]
    evidence: EvidenceAssessment

    def to_dict(self) -> dict[str, Any]:
        return {
            "leverage_score": self.leverage_score,
            "leverage_grade": self.leverage_grade.value,
            "strategic_position": self.strategic_position.value,
            "win_probability": self.win_probability,
            "score_breakdown": self.score_breakdown.to_dict(),
            "bad_faith_indicators": list(self.bad_faith_indicators),
            "evidence_quality": self.evidence.overall_strength.value,
            "evidence_items": [i.to_dict() for i in self.evidence.items],
        }


# =============================================================================
# Procedural Steps
# =============================================================================

@dataclass(frozen=True)
class Resource:
    title: str
    url: str
    description: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"title": self.title, "url": self.url, "description": self.description}


@dataclass(frozen=True)
class ProceduralStep:
    step_number: int
    title: str
    description: str
    category: str
    checklist: tuple[str, ...] = field(default_factory=tuple)
    resources: tuple[Resource, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "step_number": self.step_number,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "checklist": list(self.checklist),
            "resources": [r.to_dict() for r in self.resources],
        }


# =============================================================================
# Damage Defense
# =============================================================================

@dataclass(frozen=True)
class DefensePoint:
    """A talking point against one kind of landlord deduction."""
    claim_type: str
    title: str
    defense_strength: DefenseStrength
    statute: str
    key_point: str
    what_to_ask_landlord: tuple[str, ...] = field(default_factory=tuple)
    evidence_helpful: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "claim_type": self.claim_type,
            "title": self.title,
            "defense_strength": self.defense_strength.value,
            "statute": self.statute,
            "key_point": self.key_point,
            "what_to_ask_landlord": list(self.what_to_ask_landlord),
            "evidence_helpful": list(self.evidence_helpful),
        }


@dataclass(frozen=True)
class DamageDefenseAnalysis:
    potential_claims_detected: bool
    overall_defense_strength: DefenseStrength
    defenses: tuple[DefensePoint, ...]
    strategic_note: str
    disclaimer: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "potential_claims_detected": self.potential_claims_detected,
            "total_defenses": len(self.defenses),
            "overall_defense_strength": self.overall_defense_strength.value,
            "defenses": [d.to_dict() for d in self.defenses],
            "strategic_note": self.strategic_note,
            "disclaimer": self.disclaimer,
        }


# =============================================================================
# Report
# =============================================================================

@dataclass(frozen=True)
class ReportMetadata:
    case_id: Optional[str]
    jurisdiction: str
    generated_at: datetime
    analysis_date: date
    engine_version: str
    reference_data_hash: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "case_id": self.case_id,
            "jurisdiction": self.jurisdiction,
            "generated_at": self.generated_at.isoformat(),
            "analysis_date": self.analysis_date.isoformat(),
            "engine_version": self.engine_version,
            "reference_data_hash": self.reference_data_hash,
        }


@dataclass(frozen=True)
class CaseAnalysisReport:
    """
    Complete case analysis.

    to_dict() is the wire form used by the CLI and the HTTP service;
    report_hash is the SHA-256 of its canonical JSON (without the hash).
    """
    metadata: ReportMetadata
    timeline: Timeline
    compliance_checklist: ComplianceChecklist
    leverage_points: tuple[LeveragePoint, ...]
    case_strength: CaseStrength
    recovery_estimate: RecoveryEstimate
    strategy: StrategyRecommendation
    procedural_steps: tuple[ProceduralStep, ...]
    statutory_references: tuple[StatuteReference, ...]
    damage_defense: DamageDefenseAnalysis
    disclaimers: tuple[tuple[str, str], ...]

    @property
    def report_hash(self) -> str:
        return content_hash(self._body())

    def _body(self) -> dict[str, Any]:
        return {
            "report_metadata": self.metadata.to_dict(),
            "timeline": self.timeline.to_dict(),
            "compliance_checklist": self.compliance_checklist.to_dict(),
            "leverage_points": [p.to_dict() for p in self.leverage_points],
            "case_strength": self.case_strength.to_dict(),
            "recovery_estimate": self.recovery_estimate.to_dict(),
            "strategy": self.strategy.to_dict(),
            "procedural_steps": [s.to_dict() for s in self.procedural_steps],
            "statutory_references": [s.to_dict() for s in self.statutory_references],
            "damage_defense": self.damage_defense.to_dict(),
            "disclaimers": dict(self.disclaimers),
        }

    def to_dict(self, include_hash: bool = True) -> dict[str, Any]:
        body = self._body()
        if include_hash:
            body["report_hash"] = content_hash(body)
        return body


@dataclass(frozen=True)
class ReportValidation:
    """Advisory shape check of a report dict."""
    valid: bool
    errors: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {"valid": self.valid, "errors": list(self.errors)}

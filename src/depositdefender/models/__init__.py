"""
Deposit Defender Models

All domain models for the case strength engine.

    from depositdefender.models import (
        # Intake
        IntakeRecord, TriState, DepositReturnStatus,
        # Findings
        DetectedIssue, SupportingFact, RecommendedStep,
        # Reference data
        ReferenceData, ScoreBandEntry, RecoveryBandEntry,
        # Output
        CaseAnalysisReport, ReportValidation,
    )
"""
from __future__ import annotations

# =============================================================================
# Enums
# =============================================================================
from .enums import (
    CommunicationMethod,
    DefenseStrength,
    DepositReturnStatus,
    EvidenceStrength,
    FactSource,
    Grade,
    RecommendedAction,
    Severity,
    StrategicPosition,
    TriState,
    Urgency,
)

# =============================================================================
# Intake / Timeline / Money
# =============================================================================
from .intake import IntakeRecord
from .money import format_currency, parse_amount
from .timeline import Timeline

# =============================================================================
# Findings
# =============================================================================
from .issue import DetectedIssue, RecommendedStep, SupportingFact

# =============================================================================
# Reference Data
# =============================================================================
from .reference import (
    ActionContent,
    ActionStep,
    JurisdictionRules,
    RecoveryBandEntry,
    ReferenceData,
    ScoreBandEntry,
    StatuteReference,
)

# =============================================================================
# Output
# =============================================================================
from .recovery import ProbabilityDistribution, RecoveryEstimate
from .report import (
    NO_ISSUES_POINT_ID,
    CaseAnalysisReport,
    CaseStrength,
    CitedStatute,
    ComplianceChecklist,
    DamageDefenseAnalysis,
    DefensePoint,
    EvidenceAssessment,
    EvidenceItem,
    LeveragePoint,
    ProceduralStep,
    ReportMetadata,
    ReportValidation,
    Resource,
    ScoreBreakdown,
)
from .strategy import StrategyRecommendation

__all__ = [
    # Enums
    "CommunicationMethod",
    "DefenseStrength",
    "DepositReturnStatus",
    "EvidenceStrength",
    "FactSource",
    "Grade",
    "RecommendedAction",
    "Severity",
    "StrategicPosition",
    "TriState",
    "Urgency",
    # Intake
    "IntakeRecord",
    "Timeline",
    "format_currency",
    "parse_amount",
    # Findings
    "DetectedIssue",
    "RecommendedStep",
    "SupportingFact",
    # Reference data
    "ActionContent",
    "ActionStep",
    "JurisdictionRules",
    "RecoveryBandEntry",
    "ReferenceData",
    "ScoreBandEntry",
    "StatuteReference",
    # Output
    "NO_ISSUES_POINT_ID",
    "CaseAnalysisReport",
    "CaseStrength",
    "CitedStatute",
    "ComplianceChecklist",
    "DamageDefenseAnalysis",
    "DefensePoint",
    "EvidenceAssessment",
    "EvidenceItem",
    "LeveragePoint",
    "ProbabilityDistribution",
    "ProceduralStep",
    "RecoveryEstimate",
    "ReportMetadata",
    "ReportValidation",
    "Resource",
    "ScoreBreakdown",
    "StrategyRecommendation",
]

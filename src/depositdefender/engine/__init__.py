"""
Deposit Defender Engine

Services for case strength analysis.

Services:
- TimelineCalculator: Elapsed days and deadline status
- EvaluationContext: Canonical view of an intake
- detect_issues: Ordered issue detector registry
- calculate_leverage_score: Four capped factor groups -> 0-100
- Band lookups: grade, position, action, recovery multipliers
- determine_strategy / estimate_recovery: Action plan and dollar range
- analyze_damage_defenses: Talking points from tenant notes
- CaseAnalyzer: The full pipeline

Usage:
    from depositdefender.engine import CaseAnalyzer, FixedClock

    analyzer = CaseAnalyzer(clock=FixedClock(date(2024, 3, 15)))
    result = analyzer.analyze(intake)
"""
from __future__ import annotations

from .band_tables import (
    leverage_grade,
    lookup_recovery_band,
    lookup_score_band,
    strategic_position,
)
from .case_analyzer import AnalysisResult, CaseAnalyzer, analyze_case
from .context import EvaluationContext
from .damage_defense import analyze_damage_defenses
from .guidance import (
    applicable_statutes,
    build_leverage_points,
    derive_procedural_steps,
)
from .issue_detectors import (
    DETECTORS,
    IssueDetector,
    detect_issues,
    has_high_severity,
)
from .leverage_scoring import (
    COMPLIANCE_RULES,
    TIMELINE_RULES,
    LeverageScore,
    ScoringRule,
    assess_evidence_quality,
    bad_faith_indicators,
    calculate_leverage_score,
    estimate_win_probability,
    round_half_up,
)
from .recovery_estimator import estimate_recovery
from .report_assembler import assemble_report, build_compliance_checklist
from .report_validator import validate_report
from .strategy_assembler import determine_strategy, format_action_label
from .timeline_calculator import (
    Clock,
    FixedClock,
    SystemClock,
    TimelineCalculator,
    calculate_timeline,
    format_display_date,
    parse_intake_date,
)

__all__ = [
    # Timeline
    "Clock",
    "FixedClock",
    "SystemClock",
    "TimelineCalculator",
    "calculate_timeline",
    "format_display_date",
    "parse_intake_date",
    # Context
    "EvaluationContext",
    # Detection
    "DETECTORS",
    "IssueDetector",
    "detect_issues",
    "has_high_severity",
    # Scoring
    "COMPLIANCE_RULES",
    "TIMELINE_RULES",
    "LeverageScore",
    "ScoringRule",
    "assess_evidence_quality",
    "bad_faith_indicators",
    "calculate_leverage_score",
    "estimate_win_probability",
    "round_half_up",
    # Bands
    "leverage_grade",
    "lookup_recovery_band",
    "lookup_score_band",
    "strategic_position",
    # Strategy / recovery
    "determine_strategy",
    "format_action_label",
    "estimate_recovery",
    # Presentation
    "analyze_damage_defenses",
    "applicable_statutes",
    "build_leverage_points",
    "derive_procedural_steps",
    "assemble_report",
    "build_compliance_checklist",
    "validate_report",
    # Pipeline
    "AnalysisResult",
    "CaseAnalyzer",
    "analyze_case",
]

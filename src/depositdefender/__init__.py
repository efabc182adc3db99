"""
Deposit Defender: Case Strength Decision Engine

Scores a tenant's security-deposit dispute against Texas Property Code
chapter 92 and assembles a deterministic case analysis report.

Core Principle:
    Same intake + same clock + same reference data = identical report.

Usage:
    from datetime import date
    from depositdefender import analyze_case, FixedClock

    result = analyze_case(intake_dict, clock=FixedClock(date(2024, 3, 15)))
    print(result.report.case_strength.leverage_score)
"""
from __future__ import annotations

from .config import ENGINE_VERSION
from .engine import (
    AnalysisResult,
    CaseAnalyzer,
    FixedClock,
    SystemClock,
    analyze_case,
)
from .exceptions import (
    BandLookupError,
    DepositDefenderError,
    DetectorError,
    IntakeError,
    ReferenceDataLoadError,
    ReferenceDataValidationError,
    ReportAssemblyError,
)
from .models import CaseAnalysisReport, IntakeRecord, ReferenceData
from .packs import load_reference_data, load_reference_pack

__version__ = ENGINE_VERSION

__all__ = [
    "__version__",
    # Pipeline
    "AnalysisResult",
    "CaseAnalyzer",
    "analyze_case",
    "FixedClock",
    "SystemClock",
    # Models
    "CaseAnalysisReport",
    "IntakeRecord",
    "ReferenceData",
    # Reference data
    "load_reference_data",
    "load_reference_pack",
    # Exceptions
    "DepositDefenderError",
    "IntakeError",
    "ReferenceDataLoadError",
    "ReferenceDataValidationError",
    "BandLookupError",
    "DetectorError",
    "ReportAssemblyError",
]

"""
Deposit Defender Exception Hierarchy

Domain-specific exceptions for the case strength engine.
All exceptions include error codes for tracking and logging.

Exception codes follow the pattern: DD_<CATEGORY>_<SPECIFIC>
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class DepositDefenderError(Exception):
    """
    Base exception for all Deposit Defender errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (DD_*)
        details: Additional context about the error
        case_id: Associated case ID if applicable
    """
    message: str
    code: str = "DD_INTERNAL_ERROR"
    details: dict[str, Any] = field(default_factory=dict)
    case_id: Optional[str] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.case_id:
            parts.append(f"(case: {self.case_id})")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Serialize exception for logging/API responses."""
        result: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.case_id:
            result["case_id"] = self.case_id
        return result


# =============================================================================
# Intake Errors
# =============================================================================

@dataclass
class IntakeError(DepositDefenderError):
    """Intake record is structurally unusable."""
    code: str = "DD_INVALID_INTAKE"


# =============================================================================
# Reference Data Errors
# =============================================================================

@dataclass
class ReferenceDataLoadError(DepositDefenderError):
    """Failed to read the reference data pack from disk."""
    code: str = "DD_REFERENCE_LOAD_ERROR"


@dataclass
class ReferenceDataValidationError(DepositDefenderError):
    """Reference data pack failed schema or integrity validation."""
    code: str = "DD_REFERENCE_VALIDATION_ERROR"


@dataclass
class BandLookupError(DepositDefenderError):
    """No band entry covers the requested score."""
    code: str = "DD_BAND_LOOKUP_ERROR"


# =============================================================================
# Engine Errors
# =============================================================================

@dataclass
class DetectorError(DepositDefenderError):
    """An issue detector raised while evaluating a case."""
    code: str = "DD_DETECTOR_ERROR"


@dataclass
class ReportAssemblyError(DepositDefenderError):
    """Case analysis report could not be assembled."""
    code: str = "DD_REPORT_ASSEMBLY_ERROR"

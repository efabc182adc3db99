"""
Deposit Defender Enumerations

All enumeration types used throughout the engine.

All enums inherit from (str, Enum) for JSON serialization compatibility.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Optional


# =============================================================================
# Intake Tri-State Fields
# =============================================================================

class TriState(str, Enum):
    """A yes/no/unknown intake answer."""
    YES = "yes"
    NO = "no"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw: Any) -> TriState:
        """
        Normalize raw intake values.

        Booleans map directly; anything unrecognized is UNKNOWN.
        """
        if raw is True:
            return cls.YES
        if raw is False:
            return cls.NO
        if isinstance(raw, str):
            value = raw.strip().lower()
            if value in ("yes", "y", "true"):
                return cls.YES
            if value in ("no", "n", "false"):
                return cls.NO
        return cls.UNKNOWN

    @property
    def is_yes(self) -> bool:
        """Only an explicit yes counts; UNKNOWN is never a positive signal."""
        return self is TriState.YES


class DepositReturnStatus(str, Enum):
    """How much of the deposit the landlord has returned."""
    NONE = "none"
    PARTIAL = "partial"
    FULL = "full"

    @classmethod
    def parse(cls, raw: Any) -> DepositReturnStatus:
        """Accepts none|partial|full and the intake form's no|partial|yes."""
        if raw is True:
            return cls.FULL
        if isinstance(raw, str):
            value = raw.strip().lower()
            if value in ("full", "yes"):
                return cls.FULL
            if value == "partial":
                return cls.PARTIAL
        return cls.NONE


class CommunicationMethod(str, Enum):
    """Channels the tenant used to contact the landlord after move-out."""
    EMAIL = "email"
    MAIL = "mail"
    TEXT = "text"
    PHONE = "phone"
    CERTIFIED_MAIL = "certified mail"
    IN_PERSON = "in person"
    OTHER = "other"

    @classmethod
    def parse(cls, raw: Any) -> Optional[CommunicationMethod]:
        if not isinstance(raw, str):
            return None
        value = raw.strip().lower().replace("_", " ")
        if not value:
            return None
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


# =============================================================================
# Issue Detection
# =============================================================================

class Severity(str, Enum):
    """Severity of a detected compliance issue."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class FactSource(str, Enum):
    """Where a supporting fact came from."""
    TENANT_INTAKE = "tenant_intake"
    COMPUTED = "computed"


# =============================================================================
# Score Bands
# =============================================================================

class Grade(str, Enum):
    """Letter grade for the leverage score."""
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class StrategicPosition(str, Enum):
    """Coarse strength bucket derived from the leverage score."""
    STRONG = "STRONG"
    MODERATE = "MODERATE"
    WEAK = "WEAK"
    UNCERTAIN = "UNCERTAIN"


class RecommendedAction(str, Enum):
    """Action selected by the score band table."""
    SEND_DEMAND_LETTER = "SEND_DEMAND_LETTER"
    REQUEST_ITEMIZATION_OR_NEGOTIATE = "REQUEST_ITEMIZATION_OR_NEGOTIATE"
    GATHER_EVIDENCE_THEN_EVALUATE = "GATHER_EVIDENCE_THEN_EVALUATE"
    REVIEW_SITUATION = "REVIEW_SITUATION"


class Urgency(str, Enum):
    """How soon the tenant should act."""
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


# =============================================================================
# Supplementary Assessments
# =============================================================================

class EvidenceStrength(str, Enum):
    """Overall quality of the tenant's documentation."""
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"
    MINIMAL = "minimal"


class DefenseStrength(str, Enum):
    """Strength of a damage-claim defense point."""
    STRONG = "STRONG"
    MODERATE = "MODERATE"
    LIMITED = "LIMITED"

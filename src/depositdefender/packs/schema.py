"""
Deposit Defender Reference Pack Schemas

Pydantic models for validating the reference data pack YAML.

These schemas define the structure of the static tables the engine runs
on: jurisdiction constants, score bands, recovery bands, statutes and
per-action content blocks. They map to the domain models in
depositdefender.models.reference.

Schema versioning:
- schema_version field tracks breaking changes
- Loaders check major version compatibility
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0.0"


# =============================================================================
# Enums as Literals (for YAML validation)
# =============================================================================

GradeValue = Literal["A", "B", "C", "D", "F"]

PositionValue = Literal["STRONG", "MODERATE", "WEAK", "UNCERTAIN"]

ActionValue = Literal[
    "SEND_DEMAND_LETTER",
    "REQUEST_ITEMIZATION_OR_NEGOTIATE",
    "GATHER_EVIDENCE_THEN_EVALUATE",
    "REVIEW_SITUATION",
]

UrgencyValue = Literal["HIGH", "MEDIUM", "LOW"]


# =============================================================================
# Jurisdiction
# =============================================================================

class JurisdictionSchema(BaseModel):
    """Statutory constants for the encoded regime."""
    code: str = Field(..., description="Jurisdiction code (e.g., 'TX')")
    name: str = Field(..., description="Display name of the statutory regime")
    deadline_days: int = Field(30, ge=1, description="Refund/itemization deadline")
    statutory_penalty: Decimal = Field(Decimal("100"), ge=0, description="Fixed statutory penalty")
    penalty_score_threshold: int = Field(60, ge=0, le=100)
    always_cited_statutes: list[str] = Field(default_factory=list)

    @field_validator("code")
    @classmethod
    def validate_code(cls, v: str) -> str:
        return v.upper()


# =============================================================================
# Band Tables
# =============================================================================

class ScoreBandSchema(BaseModel):
    """Schema for a score band row."""
    min_score: int = Field(..., ge=0, le=100)
    grade: GradeValue
    position: PositionValue
    action: ActionValue
    urgency: UrgencyValue


class RecoveryBandSchema(BaseModel):
    """Schema for a recovery band row."""
    min_score: int = Field(..., ge=0, le=100)
    likely_mult: Decimal = Field(..., ge=0, le=1)
    likely_adds_penalty: bool = False
    worst_mult: Decimal = Field(..., ge=0, le=1)
    prob_full: int = Field(..., ge=0, le=100)
    prob_partial: int = Field(..., ge=0, le=100)
    prob_none: int = Field(..., ge=0, le=100)
    confidence_note: str

    @model_validator(mode="after")
    def validate_probabilities(self) -> "RecoveryBandSchema":
        total = self.prob_full + self.prob_partial + self.prob_none
        if total != 100:
            raise ValueError(
                f"Recovery band at {self.min_score} has probabilities summing to {total}, expected 100"
            )
        if self.worst_mult > self.likely_mult:
            raise ValueError(
                f"Recovery band at {self.min_score} has worst_mult above likely_mult"
            )
        return self


# =============================================================================
# Statutes
# =============================================================================

class StatuteSchema(BaseModel):
    """Schema for a statute reference."""
    id: str = Field(..., description="Section number (e.g., '92.103')")
    citation: str = Field(..., description="Full citation")
    title: str
    summary: str
    url: Optional[str] = None


# =============================================================================
# Action Content
# =============================================================================

class ActionStepSchema(BaseModel):
    """Schema for a numbered step in an action plan."""
    step: int = Field(..., ge=1)
    action: str
    deadline: str
    notes: str = ""


class ActionContentSchema(BaseModel):
    """Schema for the static content attached to a recommended action."""
    action: ActionValue
    label: str
    rationale: str
    success_rate_note: str
    timeline: str
    cost_estimate: str
    next_steps: list[ActionStepSchema] = Field(default_factory=list)
    if_no_response: str = ""
    escalation_path: dict[str, str] = Field(default_factory=dict)

    @field_validator("next_steps")
    @classmethod
    def validate_step_numbers(cls, v: list[ActionStepSchema]) -> list[ActionStepSchema]:
        numbers = [s.step for s in v]
        if numbers != list(range(1, len(numbers) + 1)):
            raise ValueError(f"next_steps must be numbered 1..n in order, got {numbers}")
        return v


# =============================================================================
# Reference Pack
# =============================================================================

def _check_descending(rows: list[Any], table: str) -> None:
    scores = [r.min_score for r in rows]
    if not scores:
        raise ValueError(f"{table} must not be empty")
    for higher, lower in zip(scores, scores[1:]):
        if lower >= higher:
            raise ValueError(f"{table} must be strictly descending by min_score, got {scores}")
    if scores[-1] != 0:
        raise ValueError(f"{table} must end with a min_score of 0, got {scores[-1]}")


class ReferencePackSchema(BaseModel):
    """
    Complete reference data pack.

    A pack is a single YAML file holding every static table the engine
    consults. Band tables are ordered highest to lowest.
    """
    schema_version: str = Field(SCHEMA_VERSION)
    pack_id: str
    version: str
    jurisdiction: JurisdictionSchema

    score_bands: list[ScoreBandSchema]
    recovery_bands: list[RecoveryBandSchema]
    statutes: list[StatuteSchema] = Field(default_factory=list)
    actions: list[ActionContentSchema] = Field(default_factory=list)
    disclaimers: dict[str, str] = Field(default_factory=dict)

    @field_validator("score_bands")
    @classmethod
    def validate_score_bands(cls, v: list[ScoreBandSchema]) -> list[ScoreBandSchema]:
        _check_descending(v, "score_bands")
        return v

    @field_validator("recovery_bands")
    @classmethod
    def validate_recovery_bands(cls, v: list[RecoveryBandSchema]) -> list[RecoveryBandSchema]:
        _check_descending(v, "recovery_bands")
        return v

    @field_validator("disclaimers")
    @classmethod
    def validate_disclaimers(cls, v: dict[str, str]) -> dict[str, str]:
        if not v.get("primary"):
            raise ValueError("disclaimers.primary is required")
        return v

    model_config = {
        "extra": "forbid",
    }


# =============================================================================
# Validation Helpers
# =============================================================================

def validate_reference_pack(data: dict[str, Any]) -> ReferencePackSchema:
    """
    Validate a reference pack dictionary against the schema.

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return ReferencePackSchema.model_validate(data)


def check_schema_version(data: dict[str, Any]) -> bool:
    """True when the pack's major schema version matches ours."""
    pack_version = str(data.get("schema_version", SCHEMA_VERSION))
    return pack_version.split(".")[0] == SCHEMA_VERSION.split(".")[0]

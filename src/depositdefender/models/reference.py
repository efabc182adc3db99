"""
Deposit Defender Reference Data Models

Immutable domain models for the static configuration the engine runs on:
band tables, statute references and per-action content blocks. They are
produced by depositdefender.packs.loader from the YAML reference pack
and injected into the engine; nothing mutates them after load.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional

from .enums import Grade, RecommendedAction, StrategicPosition, Urgency


# =============================================================================
# Band Tables
# =============================================================================

@dataclass(frozen=True)
class ScoreBandEntry:
    """One row of the score band table."""
    min_score: int
    grade: Grade
    position: StrategicPosition
    action: RecommendedAction
    urgency: Urgency

    def to_dict(self) -> dict[str, Any]:
        return {
            "min_score": self.min_score,
            "grade": self.grade.value,
            "position": self.position.value,
            "action": self.action.value,
            "urgency": self.urgency.value,
        }


@dataclass(frozen=True)
class RecoveryBandEntry:
    """
    One row of the recovery band table.

    Attributes:
        min_score: Lowest leverage score this row covers
        likely_mult: Fraction of the owed amount in the likely case
        likely_adds_penalty: Whether the statutory penalty is added to the
            likely case when the deadline has passed
        worst_mult: Fraction of the owed amount in the worst case
        prob_full / prob_partial / prob_none: Outcome probabilities (sum 100)
        confidence_note: Plain-language note shown with the estimate
    """
    min_score: int
    likely_mult: Decimal
    likely_adds_penalty: bool
    worst_mult: Decimal
    prob_full: int
    prob_partial: int
    prob_none: int
    confidence_note: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "min_score": self.min_score,
            "likely_mult": str(self.likely_mult),
            "likely_adds_penalty": self.likely_adds_penalty,
            "worst_mult": str(self.worst_mult),
            "prob_full": self.prob_full,
            "prob_partial": self.prob_partial,
            "prob_none": self.prob_none,
            "confidence_note": self.confidence_note,
        }


# =============================================================================
# Statutes
# =============================================================================

@dataclass(frozen=True)
class StatuteReference:
    """A Texas Property Code section the engine can cite."""
    id: str
    citation: str
    title: str
    summary: str
    url: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "citation": self.citation,
            "title": self.title,
            "summary": self.summary,
            "url": self.url,
        }


# =============================================================================
# Action Content
# =============================================================================

@dataclass(frozen=True)
class ActionStep:
    """A numbered step in an action plan."""
    step: int
    action: str
    deadline: str
    notes: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "step": self.step,
            "action": self.action,
            "deadline": self.deadline,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class ActionContent:
    """Static content block attached to a recommended action."""
    action: RecommendedAction
    label: str
    rationale: str
    success_rate_note: str
    timeline: str
    cost_estimate: str
    next_steps: tuple[ActionStep, ...] = field(default_factory=tuple)
    if_no_response: str = ""
    escalation_path: tuple[tuple[str, str], ...] = field(default_factory=tuple)

    def escalation_dict(self) -> dict[str, str]:
        return dict(self.escalation_path)


# =============================================================================
# Reference Data Bundle
# =============================================================================

@dataclass(frozen=True)
class JurisdictionRules:
    """Statutory constants for the encoded regime."""
    code: str
    name: str
    deadline_days: int = 30
    statutory_penalty: Decimal = Decimal("100")
    penalty_score_threshold: int = 60
    always_cited_statutes: tuple[str, ...] = ("92.101", "92.103")


@dataclass(frozen=True)
class ReferenceData:
    """
    Everything static the engine needs, loaded once per process.

    Band tables are ordered by min_score descending and end at 0;
    the loader guarantees this.
    """
    pack_id: str
    version: str
    jurisdiction: JurisdictionRules
    score_bands: tuple[ScoreBandEntry, ...]
    recovery_bands: tuple[RecoveryBandEntry, ...]
    statutes: tuple[StatuteReference, ...]
    actions: tuple[ActionContent, ...]
    disclaimers: tuple[tuple[str, str], ...] = field(default_factory=tuple)
    content_hash: str = ""

    def get_statute(self, statute_id: str) -> Optional[StatuteReference]:
        for statute in self.statutes:
            if statute.id == statute_id:
                return statute
        return None

    def get_action_content(self, action: RecommendedAction) -> Optional[ActionContent]:
        for content in self.actions:
            if content.action == action:
                return content
        return None

    def disclaimer_dict(self) -> dict[str, str]:
        return dict(self.disclaimers)

"""
Deposit Defender Issue Models

Findings emitted by the issue detector registry.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .enums import FactSource, Severity


@dataclass(frozen=True)
class SupportingFact:
    """A fact quoted from intake or computed from it. Never invented."""
    fact: str
    source: FactSource = FactSource.TENANT_INTAKE

    def to_dict(self) -> dict[str, Any]:
        return {"fact": self.fact, "source": self.source.value}


@dataclass(frozen=True)
class RecommendedStep:
    """A concrete step attached to a finding."""
    action: str
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {"action": self.action, "description": self.description}


@dataclass(frozen=True)
class DetectedIssue:
    """
    A compliance issue found in the case.

    Attributes:
        id: Detector id (e.g., "deadline_missed_full_deposit")
        severity: HIGH / MEDIUM / LOW
        rank_weight: Ordering key for the ranked leverage-point list
        title: One-line headline
        rationale: Plain-language explanation with the deadline math
        supporting_facts: Facts drawn from the case
        statute_citations: Statute ids (e.g., "92.103")
        recommended_steps: Concrete next steps
    """
    id: str
    severity: Severity
    rank_weight: int
    title: str
    rationale: str
    supporting_facts: tuple[SupportingFact, ...] = field(default_factory=tuple)
    statute_citations: tuple[str, ...] = field(default_factory=tuple)
    recommended_steps: tuple[RecommendedStep, ...] = field(default_factory=tuple)

    @property
    def is_high(self) -> bool:
        return self.severity == Severity.HIGH

    def to_dict(self) -> dict[str, Any]:
        return {
            "issue_id": self.id,
            "severity": self.severity.value,
            "rank_weight": self.rank_weight,
            "title": self.title,
            "rationale": self.rationale,
            "supporting_facts": [f.to_dict() for f in self.supporting_facts],
            "statute_citations": list(self.statute_citations),
            "recommended_steps": [s.to_dict() for s in self.recommended_steps],
        }

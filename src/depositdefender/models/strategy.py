"""
Deposit Defender Strategy Model
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .enums import RecommendedAction, Urgency
from .reference import ActionStep


@dataclass(frozen=True)
class StrategyRecommendation:
    """
    The action plan for a case.

    recommended_action and urgency come from the score band; everything
    else is the static content block for that action.
    """
    recommended_action: RecommendedAction
    urgency: Urgency
    action_label: str
    rationale: str
    success_rate_note: str
    timeline: str
    cost_estimate: str
    next_steps: tuple[ActionStep, ...] = field(default_factory=tuple)
    if_no_response: str = ""
    escalation_path: tuple[tuple[str, str], ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "recommended_action": self.recommended_action.value,
            "urgency": self.urgency.value,
            "action_label": self.action_label,
            "rationale": self.rationale,
            "success_rate_note": self.success_rate_note,
            "timeline": self.timeline,
            "cost_estimate": self.cost_estimate,
            "next_steps": [s.to_dict() for s in self.next_steps],
            "if_no_response": self.if_no_response,
            "escalation_path": dict(self.escalation_path),
        }

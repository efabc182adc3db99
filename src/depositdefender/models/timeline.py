"""
Deposit Defender Timeline Model
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional


@dataclass(frozen=True)
class Timeline:
    """
    Elapsed time since move-out relative to the statutory deadline.

    Both derived fields are None when the move-out date is missing or
    unparsable ("timeline unknown"). Consumers must not treat None as 0.
    """
    move_out_date: Optional[str]
    days_since_move_out: Optional[int]
    past_deadline: Optional[bool]
    move_out_parsed: Optional[date] = None
    deadline_date: Optional[date] = None

    @property
    def is_known(self) -> bool:
        return self.days_since_move_out is not None

    @property
    def is_past_deadline(self) -> bool:
        return self.past_deadline is True

    @property
    def is_within_deadline(self) -> bool:
        """Known to be inside the window; unknown timelines are neither."""
        return self.past_deadline is False

    def days_at_least(self, days: int) -> bool:
        return self.days_since_move_out is not None and self.days_since_move_out >= days

    def to_dict(self) -> dict[str, Any]:
        return {
            "move_out_date": self.move_out_date,
            "days_since_move_out": self.days_since_move_out,
            "past_deadline": self.past_deadline,
            "deadline_date": self.deadline_date.isoformat() if self.deadline_date else None,
        }

"""
Deposit Defender Timeline Calculator

Computes elapsed calendar days since move-out and whether the statutory
refund deadline has passed.

Key features:
- Injected clock (SystemClock in production, FixedClock in tests)
- Civil "today" taken in the service timezone (DD_TIMEZONE)
- Unparsable or missing move-out dates yield an unknown timeline,
  never an exception
- Statutory deadline date (move-out + 30 days) for display
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional, Protocol
from zoneinfo import ZoneInfo

from ..config import DD_TIMEZONE
from ..models import Timeline

logger = logging.getLogger(__name__)

DEFAULT_DEADLINE_DAYS = 30


# =============================================================================
# Clocks
# =============================================================================

class Clock(Protocol):
    """Source of the current time. The engine never reads the wall clock directly."""

    def today(self) -> date:
        """Civil date in the service timezone."""
        ...

    def now(self) -> datetime:
        """Timezone-aware timestamp used for report metadata."""
        ...


class SystemClock:
    """Wall clock in a fixed civil timezone."""

    def __init__(self, tz_name: str = DD_TIMEZONE):
        self.tz: tzinfo = ZoneInfo(tz_name)

    def today(self) -> date:
        return datetime.now(self.tz).date()

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


@dataclass(frozen=True)
class FixedClock:
    """
    Clock pinned to a given day.

    now() is midnight of that day in the service timezone, so reports
    built with a FixedClock are fully reproducible.
    """
    fixed_today: date
    tz_name: str = DD_TIMEZONE

    def today(self) -> date:
        return self.fixed_today

    def now(self) -> datetime:
        return datetime.combine(self.fixed_today, time(0), tzinfo=ZoneInfo(self.tz_name))


# =============================================================================
# Date Parsing / Display
# =============================================================================

def parse_intake_date(raw: Optional[str], tz_name: str = DD_TIMEZONE) -> Optional[date]:
    """
    Parse an intake date string.

    Accepts YYYY-MM-DD and ISO 8601 datetimes. Aware datetimes are
    converted to the service timezone before taking the date. Anything
    else returns None.
    """
    if not raw or not isinstance(raw, str):
        return None
    text = raw.strip()
    if len(text) == 10:
        try:
            return date.fromisoformat(text)
        except ValueError:
            return None
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(ZoneInfo(tz_name))
    return parsed.date()


def format_display_date(d: Optional[date]) -> str:
    """Render a date as "Mar 3, 2024"; unknown dates render as "unknown"."""
    if d is None:
        return "unknown"
    return f"{d:%b} {d.day}, {d.year}"


# =============================================================================
# Timeline Calculator
# =============================================================================

@dataclass
class TimelineCalculator:
    """
    Calculates the deposit timeline against the statutory deadline.

    Usage:
        calculator = TimelineCalculator(clock=FixedClock(date(2024, 3, 15)))
        timeline = calculator.calculate("2024-01-15")
        timeline.days_since_move_out   # 60
        timeline.past_deadline         # True
    """
    clock: Clock
    deadline_days: int = DEFAULT_DEADLINE_DAYS
    tz_name: str = DD_TIMEZONE

    def calculate(self, move_out_raw: Optional[str]) -> Timeline:
        """Build the timeline for a raw move-out date string."""
        move_out = parse_intake_date(move_out_raw, self.tz_name)
        if move_out is None:
            if move_out_raw:
                logger.warning("Unparsable move-out date %r; timeline unknown", move_out_raw)
            return Timeline(
                move_out_date=move_out_raw,
                days_since_move_out=None,
                past_deadline=None,
            )

        days = (self.clock.today() - move_out).days
        return Timeline(
            move_out_date=move_out_raw,
            days_since_move_out=days,
            past_deadline=days > self.deadline_days,
            move_out_parsed=move_out,
            deadline_date=self.deadline_date(move_out),
        )

    def deadline_date(self, move_out: date) -> date:
        """Statutory refund deadline: move-out plus the deadline window."""
        return move_out + timedelta(days=self.deadline_days)

    def days_remaining(self, timeline: Timeline) -> Optional[int]:
        if timeline.days_since_move_out is None:
            return None
        return max(0, self.deadline_days - timeline.days_since_move_out)


def calculate_timeline(
    move_out_raw: Optional[str],
    clock: Optional[Clock] = None,
) -> Timeline:
    """Convenience wrapper using the system clock by default."""
    return TimelineCalculator(clock=clock or SystemClock()).calculate(move_out_raw)

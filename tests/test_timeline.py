"""
Tests for the timeline calculator.

Validates:
- Day counts against a fixed clock
- Deadline boundary (day 30 inside, day 31 past)
- Unparsable and missing dates yield an unknown timeline
- ISO datetimes are converted to the service timezone
"""
from datetime import date, datetime, timezone

import pytest

from depositdefender.engine import (
    FixedClock,
    TimelineCalculator,
    calculate_timeline,
    format_display_date,
    parse_intake_date,
)
from tests.conftest import ANALYSIS_DATE, days_ago


@pytest.fixture
def calculator():
    return TimelineCalculator(clock=FixedClock(ANALYSIS_DATE))


class TestDayCounts:

    def test_sixty_days_across_leap_february(self, calculator):
        timeline = calculator.calculate("2024-01-15")
        assert timeline.days_since_move_out == 60
        assert timeline.past_deadline is True

    def test_move_out_today(self, calculator):
        timeline = calculator.calculate(ANALYSIS_DATE.isoformat())
        assert timeline.days_since_move_out == 0
        assert timeline.past_deadline is False

    def test_day_thirty_is_within_deadline(self, calculator):
        timeline = calculator.calculate(days_ago(30))
        assert timeline.days_since_move_out == 30
        assert timeline.past_deadline is False
        assert timeline.is_within_deadline

    def test_day_thirty_one_is_past_deadline(self, calculator):
        timeline = calculator.calculate(days_ago(31))
        assert timeline.past_deadline is True
        assert timeline.is_past_deadline

    def test_deadline_date_is_move_out_plus_thirty(self, calculator):
        timeline = calculator.calculate("2024-02-22")
        assert timeline.deadline_date == date(2024, 3, 23)
        assert timeline.to_dict()["deadline_date"] == "2024-03-23"

    def test_days_remaining(self, calculator):
        assert calculator.days_remaining(calculator.calculate(days_ago(22))) == 8
        assert calculator.days_remaining(calculator.calculate(days_ago(40))) == 0


class TestUnknownTimeline:

    @pytest.mark.parametrize("raw", [None, "", "not a date", "13/45/2024", "2024-02-30"])
    def test_unparsable_dates_are_unknown(self, calculator, raw):
        timeline = calculator.calculate(raw)
        assert timeline.days_since_move_out is None
        assert timeline.past_deadline is None
        assert not timeline.is_known
        assert not timeline.is_past_deadline
        assert not timeline.is_within_deadline

    def test_unknown_timeline_keeps_raw_value(self, calculator):
        assert calculator.calculate("last spring").move_out_date == "last spring"

    def test_unknown_timeline_never_satisfies_day_threshold(self, calculator):
        assert not calculator.calculate("garbage").days_at_least(0)


class TestDateParsing:

    def test_plain_date(self):
        assert parse_intake_date("2024-01-15") == date(2024, 1, 15)

    def test_utc_datetime_converted_to_central_time(self):
        # 03:00 UTC on Jan 16 is still Jan 15 in Texas
        assert parse_intake_date("2024-01-16T03:00:00Z", "America/Chicago") == date(2024, 1, 15)

    def test_naive_datetime_keeps_its_date(self):
        assert parse_intake_date("2024-01-16T03:00:00") == date(2024, 1, 16)

    def test_non_string_is_none(self):
        assert parse_intake_date(20240115) is None


class TestClocks:

    def test_fixed_clock_now_is_local_midnight(self):
        clock = FixedClock(ANALYSIS_DATE, tz_name="America/Chicago")
        now = clock.now()
        assert now.date() == ANALYSIS_DATE
        assert now.utcoffset() is not None
        assert now.astimezone(timezone.utc) == datetime(2024, 3, 15, 5, 0, tzinfo=timezone.utc)

    def test_calculate_timeline_wrapper(self):
        timeline = calculate_timeline("2024-03-01", clock=FixedClock(ANALYSIS_DATE))
        assert timeline.days_since_move_out == 14


class TestDisplayDate:

    def test_format(self):
        assert format_display_date(date(2024, 3, 3)) == "Mar 3, 2024"

    def test_unknown(self):
        assert format_display_date(None) == "unknown"

"""
Tests for the rolling time-window resolver.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from fitlog.core.time_window import (
    LOOKAHEAD, bucket_start, bucket_unit, offset_for, offset_range,
    relative_label, resolve_window, start_of_day
)
from fitlog.models import DateWindow, OffsetRange, TimePeriod

END_OF_DAY = timedelta(hours=23, minutes=59, seconds=59, milliseconds=999)


class TestResolveWindow:
    """Tests for resolve_window."""

    def test_today(self, now):
        window = resolve_window(TimePeriod.DAY, 0, now)
        assert window.start == datetime(2026, 3, 15)
        assert window.end == datetime(2026, 3, 15) + END_OF_DAY

    def test_yesterday(self, now):
        window = resolve_window(TimePeriod.DAY, -1, now)
        assert window.start == datetime(2026, 3, 14)
        assert window.end == datetime(2026, 3, 14, 23, 59, 59, 999000)

    def test_this_week_spans_seven_days(self, now):
        window = resolve_window(TimePeriod.WEEK, 0, now)
        assert window.start == datetime(2026, 3, 9)
        assert window.end == datetime(2026, 3, 15) + END_OF_DAY
        assert (window.end.date() - window.start.date()).days + 1 == 7

    def test_last_week(self, now):
        window = resolve_window(TimePeriod.WEEK, -1, now)
        assert window.start == datetime(2026, 3, 2)
        assert window.end == datetime(2026, 3, 8) + END_OF_DAY

    def test_this_month_spans_thirty_days(self, now):
        window = resolve_window(TimePeriod.MONTH, 0, now)
        assert window.start == datetime(2026, 2, 14)
        assert (window.end.date() - window.start.date()).days + 1 == 30

    def test_future_offset(self, now):
        window = resolve_window(TimePeriod.DAY, 2, now)
        assert window.start == datetime(2026, 3, 17)

    @pytest.mark.parametrize("period", list(TimePeriod))
    def test_consecutive_windows_do_not_overlap(self, period, now):
        current = resolve_window(period, 0, now)
        previous = resolve_window(period, -1, now)
        assert previous.end < current.start
        assert current.start - previous.end == timedelta(milliseconds=1)

    def test_keeps_timezone(self):
        aware = datetime(2026, 3, 15, 8, 0, tzinfo=timezone.utc)
        window = resolve_window(TimePeriod.DAY, 0, aware)
        assert window.start.utcoffset() == timedelta(0)
        assert window.start == datetime(2026, 3, 15, tzinfo=timezone.utc)

    def test_window_bounds_inclusive(self, now):
        window = resolve_window(TimePeriod.DAY, 0, now)
        assert window.contains(window.start)
        assert window.contains(window.end)
        assert not window.contains(window.end + timedelta(milliseconds=1))


class TestRelativeLabel:
    """Tests for relative_label."""

    @pytest.mark.parametrize("period,offset,expected", [
        (TimePeriod.DAY, 0, "today"),
        (TimePeriod.DAY, -1, "yesterday"),
        (TimePeriod.WEEK, 0, "this week"),
        (TimePeriod.WEEK, -1, "last week"),
        (TimePeriod.MONTH, 0, "this month"),
        (TimePeriod.MONTH, -1, "last month"),
        (TimePeriod.DAY, -3, "3 days ago"),
        (TimePeriod.MONTH, -2, "2 months ago"),
        (TimePeriod.DAY, 1, "in 1 day"),
        (TimePeriod.WEEK, 2, "in 2 weeks"),
        (TimePeriod.MONTH, 1, "in 1 month"),
    ])
    def test_labels(self, period, offset, expected):
        assert relative_label(period, offset) == expected


class TestOffsets:
    """Tests for offset_for and offset_range."""

    def test_offset_for_today(self, now):
        assert offset_for(TimePeriod.DAY, now, now) == 0
        assert offset_for(TimePeriod.WEEK, date(2026, 3, 9), now) == 0

    def test_offset_for_previous_week(self, now):
        assert offset_for(TimePeriod.WEEK, date(2026, 3, 8), now) == -1
        assert offset_for(TimePeriod.WEEK, date(2026, 3, 2), now) == -1
        assert offset_for(TimePeriod.WEEK, date(2026, 3, 1), now) == -2

    def test_offset_for_lands_in_resolved_window(self, now):
        moment = datetime(2026, 1, 1, 12, 0)
        offset = offset_for(TimePeriod.MONTH, moment, now)
        assert offset == -2
        assert resolve_window(TimePeriod.MONTH, offset, now).contains(moment)

    def test_range_without_records(self, now):
        assert offset_range(TimePeriod.DAY, None, now) == OffsetRange(lower=0, upper=3)
        assert offset_range(TimePeriod.WEEK, None, now) == OffsetRange(lower=0, upper=4)
        assert offset_range(TimePeriod.MONTH, None, now) == OffsetRange(lower=0, upper=3)

    def test_range_reaches_earliest_record(self, now):
        bounds = offset_range(TimePeriod.DAY, date(2026, 3, 10), now)
        assert bounds.lower == -5
        assert bounds.upper == LOOKAHEAD[TimePeriod.DAY]

    def test_range_with_future_record(self, now):
        assert offset_range(TimePeriod.DAY, date(2026, 3, 20), now).lower == 0

    def test_clamp(self):
        bounds = OffsetRange(lower=-5, upper=3)
        assert bounds.clamp(-9) == -5
        assert bounds.clamp(7) == 3
        assert bounds.clamp(-2) == -2


class TestBuckets:
    """Tests for chart bucketing helpers."""

    def test_bucket_unit(self):
        assert bucket_unit(TimePeriod.DAY) == "hour"
        assert bucket_unit(TimePeriod.WEEK) == "day"
        assert bucket_unit(TimePeriod.MONTH) == "day"

    def test_bucket_start(self):
        moment = datetime(2026, 3, 15, 14, 42, 7, 123)
        assert bucket_start(moment, "hour") == datetime(2026, 3, 15, 14)
        assert bucket_start(moment, "day") == datetime(2026, 3, 15)

    def test_bucket_start_unknown_unit(self, now):
        with pytest.raises(ValueError):
            bucket_start(now, "minute")

    def test_start_of_day(self, now):
        assert start_of_day(now) == datetime(2026, 3, 15)

    def test_date_window_model(self):
        window = DateWindow(start=datetime(2026, 3, 1), end=datetime(2026, 3, 2))
        assert window.contains(datetime(2026, 3, 1, 12))

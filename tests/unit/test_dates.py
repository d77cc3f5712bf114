"""Unit tests for date and clock formatting helpers."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from chat_transcript.dates import (
    current_time,
    date_key,
    format_abbrev_date,
    format_long_date,
    format_relative,
    format_short_date,
    format_time,
    format_timestamp_style,
    format_weekday_date,
    local_date,
)

# 2024-01-05 15:04:05 UTC, a Friday.
UNIX = 1704467045
MOMENT = datetime(2024, 1, 5, 15, 4, 5, tzinfo=timezone.utc)


class TestCalendarDates:
    """Date keys and locale-independent date strings."""

    def test_date_key(self) -> None:
        assert date_key(MOMENT, timezone.utc) == "2024-01-05"

    def test_local_date_shifts_with_zone(self, new_york) -> None:
        late = datetime(2024, 1, 6, 2, 0, tzinfo=timezone.utc)

        assert local_date(late, new_york) == date(2024, 1, 5)

    def test_long_date(self) -> None:
        assert format_long_date(date(2024, 1, 5)) == "January 5, 2024"

    def test_abbrev_date(self) -> None:
        assert format_abbrev_date(date(2024, 9, 30)) == "Sep 30, 2024"

    def test_short_date(self) -> None:
        assert format_short_date(date(2024, 1, 5)) == "01/05/2024"

    def test_weekday_date(self) -> None:
        assert format_weekday_date(date(2024, 1, 5)) == "Friday, January 5, 2024"


class TestClockTimes:
    """12-hour clock formatting."""

    def test_afternoon(self) -> None:
        assert format_time(MOMENT) == "3:04 PM"

    def test_with_seconds(self) -> None:
        assert format_time(MOMENT, seconds=True) == "3:04:05 PM"

    def test_midnight_is_twelve_am(self) -> None:
        assert format_time(datetime(2024, 1, 5, 0, 7)) == "12:07 AM"

    def test_noon_is_twelve_pm(self) -> None:
        assert format_time(datetime(2024, 1, 5, 12, 0)) == "12:00 PM"


class TestRelative:
    """Coarse relative times."""

    def test_just_now(self) -> None:
        assert format_relative(MOMENT, MOMENT + timedelta(seconds=30)) == "just now"

    def test_minutes_ago(self) -> None:
        assert format_relative(MOMENT, MOMENT + timedelta(minutes=5)) == "5 minutes ago"

    def test_hours_from_now(self) -> None:
        assert format_relative(MOMENT, MOMENT - timedelta(hours=3)) == "3 hours from now"

    def test_days_ago(self) -> None:
        assert format_relative(MOMENT, MOMENT + timedelta(days=2, hours=1)) == "2 days ago"

    def test_naive_now_against_aware_moment(self) -> None:
        """A naive reference time is read as local time instead of raising."""
        naive_now = (MOMENT + timedelta(days=3)).astimezone().replace(tzinfo=None)

        assert format_relative(MOMENT, naive_now) == "3 days ago"


class TestCurrentTime:
    """The wall clock is always timezone-aware."""

    def test_in_zone(self, new_york) -> None:
        assert current_time(new_york).tzinfo is new_york

    def test_local_default_is_aware(self) -> None:
        assert current_time().utcoffset() is not None


class TestTimestampStyles:
    """``<t:unix:style>`` rendering in UTC."""

    @pytest.mark.parametrize(
        ("style", "expected"),
        [
            ("t", "3:04 PM"),
            ("T", "3:04:05 PM"),
            ("d", "01/05/2024"),
            ("D", "January 5, 2024"),
            ("f", "January 5, 2024 3:04 PM"),
            ("F", "Friday, January 5, 2024 3:04 PM"),
        ],
    )
    def test_absolute_styles(self, style: str, expected: str) -> None:
        assert format_timestamp_style(UNIX, style, MOMENT, timezone.utc) == expected

    def test_relative_style(self) -> None:
        now = MOMENT + timedelta(hours=2)

        assert format_timestamp_style(UNIX, "R", now, timezone.utc) == "2 hours ago"

    def test_unknown_style_renders_like_f(self) -> None:
        assert format_timestamp_style(UNIX, "x", MOMENT, timezone.utc) == (
            "January 5, 2024 3:04 PM"
        )

    def test_display_zone_applies(self, new_york) -> None:
        assert format_timestamp_style(UNIX, "t", MOMENT, new_york) == "10:04 AM"

    def test_out_of_range_raises(self) -> None:
        with pytest.raises((OverflowError, ValueError, OSError)):
            format_timestamp_style(10**20, "f", MOMENT, timezone.utc)

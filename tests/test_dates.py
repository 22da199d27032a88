"""Tests for core date/time display logic."""

import logging
from datetime import date, datetime, timedelta, timezone

import pytest

from practical.core.dates import (
    DateFormat,
    TimeFormat,
    coerce_date_format,
    coerce_time_format,
    date_format_options,
    format_date,
    format_datetime,
    format_relative_date,
    format_time,
    format_utc_for_user,
    local_to_utc,
    minutes_to_time,
    parse_display_date,
    time_format_options,
    time_to_minutes,
    to_date,
    to_iso_utc,
    utc_to_local,
)

ALL_PATTERNS = [f.value for f in DateFormat]


class TestFormatDate:
    @pytest.mark.parametrize(
        "pattern,expected",
        [
            ("MM/dd/yyyy", "12/25/2024"),
            ("dd/MM/yyyy", "25/12/2024"),
            ("yyyy-MM-dd", "2024-12-25"),
            ("MMM dd, yyyy", "Dec 25, 2024"),
        ],
    )
    def test_patterns(self, pattern, expected):
        assert format_date(date(2024, 12, 25), pattern) == expected

    def test_zero_padding(self):
        d = date(2024, 3, 5)
        assert format_date(d, "MM/dd/yyyy") == "03/05/2024"
        assert format_date(d, "dd/MM/yyyy") == "05/03/2024"
        assert format_date(d, "MMM dd, yyyy") == "Mar 05, 2024"

    def test_accepts_enum(self):
        assert format_date(date(2024, 12, 25), DateFormat.ISO) == "2024-12-25"

    def test_iso_string_input(self):
        assert format_date("2024-12-25", "dd/MM/yyyy") == "25/12/2024"
        assert format_date("2024-12-25T14:30:00Z", "MM/dd/yyyy") == "12/25/2024"

    def test_datetime_input(self):
        assert format_date(datetime(2024, 12, 25, 23, 59), "yyyy-MM-dd") == "2024-12-25"

    def test_unparseable_returned_unchanged(self):
        assert format_date("next tuesday", "MM/dd/yyyy") == "next tuesday"

    def test_non_string_unparseable_stringified(self):
        assert format_date(42, "MM/dd/yyyy") == "42"

    def test_empty_input(self):
        assert format_date(None) == ""
        assert format_date("") == ""

    def test_unknown_pattern_falls_back_to_us(self):
        assert format_date(date(2024, 12, 25), "yyyy.MM.dd") == "12/25/2024"


class TestParseDisplayDate:
    @pytest.mark.parametrize(
        "text,pattern",
        [
            ("12/25/2024", "MM/dd/yyyy"),
            ("25/12/2024", "dd/MM/yyyy"),
            ("2024-12-25", "yyyy-MM-dd"),
            ("Dec 25, 2024", "MMM dd, yyyy"),
        ],
    )
    def test_patterns(self, text, pattern):
        assert parse_display_date(text, pattern) == date(2024, 12, 25)

    @pytest.mark.parametrize(
        "text,pattern",
        [
            ("٢٠٢٤-١٢-٢٥", "yyyy-MM-dd"),
            ("١٢/٢٥/٢٠٢٤", "MM/dd/yyyy"),
        ],
    )
    def test_non_ascii_digits_rejected(self, text, pattern):
        assert parse_display_date(text, pattern) is None

    @pytest.mark.parametrize("pattern", ALL_PATTERNS)
    def test_round_trip_1900_to_2100(self, pattern):
        d = date(1900, 1, 1)
        end = date(2100, 12, 31)
        while d <= end:
            assert parse_display_date(format_date(d, pattern), pattern) == d
            d += timedelta(days=17)
        assert parse_display_date(format_date(end, pattern), pattern) == end

    @pytest.mark.parametrize("pattern", ALL_PATTERNS)
    def test_round_trip_leap_day(self, pattern):
        d = date(2000, 2, 29)
        assert parse_display_date(format_date(d, pattern), pattern) == d

    @pytest.mark.parametrize(
        "text,pattern",
        [
            ("", "MM/dd/yyyy"),
            ("   ", "dd/MM/yyyy"),
            ("31/04/2024", "dd/MM/yyyy"),
            ("04/31/2024", "MM/dd/yyyy"),
            ("2024-02-30", "yyyy-MM-dd"),
            ("29/02/2023", "dd/MM/yyyy"),
            ("13/13/2024", "MM/dd/yyyy"),
            ("Foo 12, 2024", "MMM dd, yyyy"),
            ("12/25/24", "MM/dd/yyyy"),
            ("garbage", "yyyy-MM-dd"),
        ],
    )
    def test_rejects_invalid(self, text, pattern):
        assert parse_display_date(text, pattern) is None

    def test_only_the_given_pattern(self):
        assert parse_display_date("2024-12-25", "MM/dd/yyyy") is None
        assert parse_display_date("Dec 25, 2024", "dd/MM/yyyy") is None

    def test_day_month_order_follows_pattern(self):
        assert parse_display_date("03/04/2024", "MM/dd/yyyy") == date(2024, 3, 4)
        assert parse_display_date("03/04/2024", "dd/MM/yyyy") == date(2024, 4, 3)

    def test_lenient_digits_and_case(self):
        assert parse_display_date("1/5/2024", "MM/dd/yyyy") == date(2024, 1, 5)
        assert parse_display_date(" dec 5, 2024 ", "MMM dd, yyyy") == date(2024, 12, 5)

    def test_leap_day_accepted(self):
        assert parse_display_date("29/02/2024", "dd/MM/yyyy") == date(2024, 2, 29)

    def test_non_string(self):
        assert parse_display_date(None, "MM/dd/yyyy") is None


class TestFormatTime:
    @pytest.mark.parametrize(
        "text,pattern,expected",
        [
            ("00:00", "12h", "12:00 AM"),
            ("00:05", "12h", "12:05 AM"),
            ("09:15", "12h", "9:15 AM"),
            ("12:00", "12h", "12:00 PM"),
            ("12:30", "12h", "12:30 PM"),
            ("13:05", "12h", "1:05 PM"),
            ("23:59", "12h", "11:59 PM"),
            ("23:59", "24h", "23:59"),
            ("9:05", "24h", "09:05"),
            ("00:00", "24h", "00:00"),
        ],
    )
    def test_formats(self, text, pattern, expected):
        assert format_time(text, pattern) == expected

    @pytest.mark.parametrize("text", ["25:00", "12:60", "noon", "12:5", "1230"])
    def test_malformed_unchanged(self, text):
        assert format_time(text, "12h") == text

    def test_empty(self):
        assert format_time("", "12h") == ""
        assert format_time(None, "24h") == ""

    def test_unknown_pattern_uses_12h(self):
        assert format_time("14:30", "military") == "2:30 PM"


class TestFormatDatetime:
    def test_default_separator(self):
        dt = datetime(2024, 12, 25, 14, 30)
        assert format_datetime(dt, "dd/MM/yyyy", "24h") == "25/12/2024 at 14:30"

    def test_custom_separator(self):
        dt = datetime(2024, 12, 25, 9, 5)
        assert format_datetime(dt, "yyyy-MM-dd", "12h", separator=", ") == "2024-12-25, 9:05 AM"

    def test_invalid(self):
        assert format_datetime("whenever") == "whenever"
        assert format_datetime(None) == ""


class TestFormatRelativeDate:
    @pytest.fixture
    def today(self):
        return date(2025, 1, 15)  # Wednesday

    def test_today_tomorrow_yesterday(self, today):
        assert format_relative_date(date(2025, 1, 15), today) == "Today"
        assert format_relative_date("2025-01-16", today) == "Tomorrow"
        assert format_relative_date(date(2025, 1, 14), today) == "Yesterday"

    def test_weekday_within_week(self, today):
        assert format_relative_date(date(2025, 1, 18), today) == "Sat"

    def test_far_dates_formatted(self, today):
        assert format_relative_date(date(2025, 1, 30), today, "dd/MM/yyyy") == "30/01/2025"
        assert format_relative_date(date(2024, 12, 25), today) == "12/25/2024"

    def test_unparseable(self, today):
        assert format_relative_date("later", today) == "later"


class TestTimezoneConversion:
    def test_local_to_utc_whole_hour_offset(self):
        result = local_to_utc("2024-12-25T09:00", "America/New_York")
        assert result == datetime(2024, 12, 25, 14, 0, tzinfo=timezone.utc)

    def test_local_to_utc_half_hour_offset(self):
        result = local_to_utc("2024-06-01T10:00", "Asia/Kolkata")
        assert result == datetime(2024, 6, 1, 4, 30, tzinfo=timezone.utc)

    def test_local_to_utc_respects_dst(self):
        result = local_to_utc(datetime(2024, 7, 4, 12, 0), "America/New_York")
        assert result == datetime(2024, 7, 4, 16, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "zone",
        ["America/New_York", "Asia/Kolkata", "Asia/Kathmandu", "Australia/Adelaide", "UTC"],
    )
    @pytest.mark.parametrize(
        "local",
        [
            datetime(2024, 1, 15, 8, 30),
            datetime(2024, 7, 4, 23, 45),
            datetime(1999, 12, 31, 23, 59, 59),
        ],
    )
    def test_round_trip(self, zone, local):
        assert utc_to_local(local_to_utc(local, zone), zone) == local

    def test_utc_to_local(self):
        result = utc_to_local("2024-12-25T14:30:00Z", "Asia/Kolkata")
        assert result == datetime(2024, 12, 25, 20, 0)

    def test_naive_input_treated_as_utc(self):
        assert utc_to_local("2024-12-25T14:30:00", "America/New_York") == datetime(2024, 12, 25, 9, 30)

    def test_aware_input_converted_directly(self):
        result = local_to_utc("2024-12-25T09:00:00+02:00", "America/New_York")
        assert result == datetime(2024, 12, 25, 7, 0, tzinfo=timezone.utc)

    def test_unknown_zone_falls_back_to_utc(self, caplog):
        with caplog.at_level(logging.WARNING):
            result = local_to_utc("2024-12-25T09:00", "Not/AZone")
        assert result == datetime(2024, 12, 25, 9, 0, tzinfo=timezone.utc)
        assert "Not/AZone" in caplog.text

    def test_unknown_zone_round_trip(self):
        local = datetime(2024, 12, 25, 9, 0)
        assert utc_to_local(local_to_utc(local, "Mars/Olympus"), "Mars/Olympus") == local

    def test_unparseable_is_none(self):
        assert local_to_utc("tomorrow-ish", "UTC") is None
        assert utc_to_local("", "UTC") is None

    def test_out_of_range_conversion_is_none(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert local_to_utc("0001-01-01T00:00", "Asia/Tokyo") is None
            assert utc_to_local("9999-12-31T23:00:00", "Asia/Tokyo") is None
        assert "Cannot convert" in caplog.text

    def test_format_utc_for_user_out_of_range_returns_input(self):
        assert format_utc_for_user("9999-12-31T23:00:00", "Asia/Tokyo") == "9999-12-31T23:00:00"

    def test_to_iso_utc(self):
        dt = datetime(2024, 12, 25, 9, 30, tzinfo=timezone(timedelta(hours=-5)))
        assert to_iso_utc(dt) == "2024-12-25T14:30:00Z"

    def test_format_utc_for_user(self):
        result = format_utc_for_user("2024-12-25T14:30:00Z", "America/New_York", "yyyy-MM-dd", "12h")
        assert result == "2024-12-25 at 9:30 AM"

    def test_format_utc_for_user_crosses_midnight(self):
        result = format_utc_for_user("2024-12-25T20:00:00Z", "Asia/Kolkata", "dd/MM/yyyy", "24h")
        assert result == "26/12/2024 at 01:30"


class TestHelpers:
    def test_to_date(self):
        assert to_date("2024-12-25T23:00:00Z") == date(2024, 12, 25)
        assert to_date("nope") is None

    def test_coerce_formats(self):
        assert coerce_date_format("dd/MM/yyyy") is DateFormat.EUROPEAN
        assert coerce_date_format(None) is DateFormat.US
        assert coerce_time_format("24h") is TimeFormat.TWENTY_FOUR_HOUR
        assert coerce_time_format("bogus") is TimeFormat.TWELVE_HOUR

    def test_minutes(self):
        assert time_to_minutes("14:30") == 870
        assert time_to_minutes("bad") == 0
        assert minutes_to_time(870) == "14:30"
        assert minutes_to_time(5) == "00:05"

    def test_format_options(self):
        dates_ = date_format_options()
        assert [o["value"] for o in dates_] == ALL_PATTERNS
        assert dates_[3]["example"] == "Dec 25, 2024"
        times = time_format_options()
        assert [o["example"] for o in times] == ["2:30 PM", "14:30"]

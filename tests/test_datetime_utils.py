from datetime import date, datetime, timezone

from attendease.common.datetime_utils import (
    format_date_key,
    format_long_date,
    format_short_date,
    format_time,
    month_label,
    parse_iso_date,
    parse_timestamp,
)


def test_format_time_twelve_hour_clock():
    assert format_time(datetime(2024, 3, 5, 15, 5)) == "03:05 PM"
    assert format_time(datetime(2024, 3, 5, 0, 7)) == "12:07 AM"
    assert format_time(datetime(2024, 3, 5, 12, 0)) == "12:00 PM"


def test_date_formats():
    assert format_long_date(date(2024, 9, 21)) == "Saturday, September 21, 2024"
    assert format_short_date(date(2024, 3, 5)) == "03/05/2024"
    assert format_date_key(2024, 2, 5) == "2024-03-05"
    assert month_label(2024, 11) == "December 2024"


def test_parse_variants():
    assert parse_iso_date("2024-03-05T00:00:00.000Z") == date(2024, 3, 5)
    assert parse_timestamp("2024-03-05 09:00:00") == datetime(2024, 3, 5, 9, 0)
    assert parse_timestamp("2024-03-05T09:00:00.250") == datetime(2024, 3, 5, 9, 0, 0, 250000)


def test_aware_timestamps_become_local_naive():
    parsed = parse_timestamp("2024-03-05T09:00:00Z")
    expected = datetime(2024, 3, 5, 9, 0, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
    assert parsed == expected
    assert parsed.tzinfo is None

from __future__ import annotations

from datetime import date, datetime

from ..core.constants import DATE_KEY_FORMAT, MONTH_NAMES, WEEKDAY_NAMES


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value[:10], DATE_KEY_FORMAT).date()


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601-like timestamp into a naive local datetime.

    Accepts both ``2024-03-05T09:00:00`` and ``2024-03-05 09:00:00``, with
    optional fractional seconds and a ``Z``/``+hh:mm`` suffix. Offset-aware
    values are converted to local time so every parsed value compares
    against every other one.
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def parse_optional_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    return parse_timestamp(value)


def format_date_key(year: int, month_index: int, day: int) -> str:
    """Calendar key for a day; ``month_index`` is zero-based."""
    return f"{int(year):04d}-{int(month_index) + 1:02d}-{int(day):02d}"


def format_time(value: datetime) -> str:
    """12-hour clock with padded hour, e.g. ``03:05 PM``."""
    hours = value.hour % 12 or 12
    suffix = "PM" if value.hour >= 12 else "AM"
    return f"{hours:02d}:{value.minute:02d} {suffix}"


def format_long_date(value: date) -> str:
    """``Saturday, September 21, 2024``."""
    return f"{WEEKDAY_NAMES[value.weekday()]}, {MONTH_NAMES[value.month - 1]} {value.day}, {value.year}"


def format_short_date(value: date) -> str:
    return f"{value.month:02d}/{value.day:02d}/{value.year:04d}"


def month_label(year: int, month_index: int) -> str:
    return f"{MONTH_NAMES[month_index]} {year}"


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()

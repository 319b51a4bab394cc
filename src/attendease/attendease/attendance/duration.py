from __future__ import annotations

from datetime import datetime
from typing import Optional

from .model import WorkedDuration

UNAVAILABLE = "N/A"


def compute_duration(clock_in: Optional[datetime], clock_out: Optional[datetime]) -> Optional[WorkedDuration]:
    """Worked time between a clock-in and clock-out, truncated to whole minutes.

    Returns None (unavailable) when either timestamp is missing or the
    clock-out precedes the clock-in. Sessions crossing midnight need no
    special case; the timestamps are trusted as given.
    """

    if clock_in is None or clock_out is None or clock_out < clock_in:
        return None
    total_minutes = int((clock_out - clock_in).total_seconds() // 60)
    return WorkedDuration(hours=total_minutes // 60, minutes=total_minutes % 60)


def format_duration(duration: Optional[WorkedDuration]) -> str:
    if duration is None:
        return UNAVAILABLE
    return f"{duration.hours}h {duration.minutes}m"

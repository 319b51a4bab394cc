from __future__ import annotations

from typing import Optional

from ..common.datetime_utils import format_long_date, format_time, month_label
from ..core.constants import WEEKDAY_HEADERS
from ..core.enums import AttendanceStatus
from .calendar import CalendarService, DayLookup, Loading, NotFound
from .duration import UNAVAILABLE, compute_duration, format_duration
from .model import AttendanceRecord, ClockedIn, Completed, SessionState


class AttendanceService:
    """Read-side helpers turning session and calendar data into view dicts."""

    def __init__(self, calendar: CalendarService):
        self._calendar = calendar

    def month_view(self) -> dict:
        cal = self._calendar
        return {
            "year": cal.year,
            "month_index": cal.month_index,
            "label": month_label(cal.year, cal.month_index),
            "weekdays": list(WEEKDAY_HEADERS),
            "cells": cal.grid(),
            "selected_day": cal.selected_day,
            "recorded_days": sorted(cal.index.records) if cal.index else [],
        }

    def day_view(self, day: int) -> dict:
        return self.describe(self._calendar.select_day(day))

    def describe(self, lookup: DayLookup) -> dict:
        if isinstance(lookup, Loading):
            return {"state": "loading"}
        if isinstance(lookup, NotFound):
            return {"state": "not_found", "date": lookup.date_key, "message": "No attendance records found."}
        return {"state": "found", **self._to_ui(lookup)}

    def _to_ui(self, r: AttendanceRecord) -> dict:
        label = {
            AttendanceStatus.ON_TIME: "On time",
            AttendanceStatus.LATE: "Late",
            AttendanceStatus.ABSENT: "Absent",
        }.get(r.status, "-")

        return {
            "id": r.attendance_id,
            "date": r.attendance_date.isoformat(),
            "date_label": format_long_date(r.attendance_date),
            "check_in": format_time(r.clock_in) if r.clock_in else UNAVAILABLE,
            "check_out": format_time(r.clock_out) if r.clock_out else UNAVAILABLE,
            "status": getattr(r.status, "value", r.status),
            "status_label": label,
            "working_hours": format_duration(compute_duration(r.clock_in, r.clock_out)),
        }


def session_view(state: SessionState) -> dict:
    """Session state plus which actions the UI should enable."""

    if isinstance(state, ClockedIn):
        return {
            "state": "clocked_in",
            "attendance_id": state.attendance_id,
            "clock_in": format_time(state.clock_in_at),
            "can_clock_in": False,
            "can_clock_out": True,
        }
    if isinstance(state, Completed):
        clock_in: Optional[str] = format_time(state.clock_in_at) if state.clock_in_at else None
        return {
            "state": "completed",
            "attendance_id": state.attendance_id,
            "clock_in": clock_in,
            "clock_out": format_time(state.clock_out_at),
            "working_hours": format_duration(compute_duration(state.clock_in_at, state.clock_out_at)),
            "can_clock_in": False,
            "can_clock_out": False,
        }
    return {"state": "not_clocked_in", "can_clock_in": True, "can_clock_out": False}

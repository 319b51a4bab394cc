from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

import structlog

from ..common.datetime_utils import parse_iso_date, parse_optional_timestamp
from ..core.enums import AttendanceStatus, LogKind

log = structlog.get_logger(__name__)


def _parse_status(raw: object) -> Optional[Union[AttendanceStatus, str]]:
    if not raw:
        return None
    try:
        return AttendanceStatus(raw)
    except ValueError:
        log.warning("attendance.unknown_status", status=raw)
        return str(raw)


@dataclass(frozen=True)
class AttendanceRecord:
    """One user's attendance for one calendar date, as kept by the server."""

    attendance_id: str
    user_id: Optional[str]
    attendance_date: date
    clock_in: Optional[datetime]
    clock_out: Optional[datetime]
    # Unknown server values are kept as the raw string.
    status: Optional[Union[AttendanceStatus, str]]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_completed(self) -> bool:
        return self.clock_in is not None and self.clock_out is not None

    @classmethod
    def from_api(cls, payload: dict) -> "AttendanceRecord":
        clock_in = parse_optional_timestamp(payload.get("clock_in"))
        raw_date = payload.get("attendance_date")
        if raw_date:
            attendance_date = parse_iso_date(str(raw_date))
        elif clock_in is not None:
            attendance_date = clock_in.date()
        else:
            raise ValueError(f"Attendance record {payload.get('id')!r} has no attendance_date")

        raw_status = payload.get("status")
        user_id = payload.get("user_id")
        return cls(
            attendance_id=str(payload["id"]),
            user_id=str(user_id) if user_id is not None else None,
            attendance_date=attendance_date,
            clock_in=clock_in,
            clock_out=parse_optional_timestamp(payload.get("clock_out")),
            status=_parse_status(raw_status),
            created_at=parse_optional_timestamp(payload.get("created_at")),
            updated_at=parse_optional_timestamp(payload.get("updated_at")),
        )


@dataclass(frozen=True)
class NotClockedIn:
    """No record for today, or a record with neither timestamp."""


@dataclass(frozen=True)
class ClockedIn:
    attendance_id: str
    clock_in_at: datetime


@dataclass(frozen=True)
class Completed:
    attendance_id: str
    clock_out_at: datetime
    clock_in_at: Optional[datetime] = None


# Exactly one variant describes today's session.
SessionState = Union[NotClockedIn, ClockedIn, Completed]

NOT_CLOCKED_IN = NotClockedIn()


def session_rank(state: SessionState) -> int:
    """Position in the NotClockedIn -> ClockedIn -> Completed lifecycle."""
    if isinstance(state, Completed):
        return 2
    if isinstance(state, ClockedIn):
        return 1
    return 0


@dataclass(frozen=True)
class WorkedDuration:
    hours: int
    minutes: int

    @property
    def total_minutes(self) -> int:
        return self.hours * 60 + self.minutes


@dataclass(frozen=True)
class LogEntry:
    """Display-oriented clock event, regenerated on every fetch."""

    id: str
    kind: LogKind
    date: str
    time: str
    at: datetime

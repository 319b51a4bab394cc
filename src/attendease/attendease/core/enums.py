from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Server-computed status of an attendance day."""

    ON_TIME = "on_time"
    LATE = "late"
    ABSENT = "absent"


class LogKind(str, Enum):
    CLOCK_IN = "clockIn"
    CLOCK_OUT = "clockOut"


class LeaveStatus(str, Enum):
    """Approval state of a leave request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

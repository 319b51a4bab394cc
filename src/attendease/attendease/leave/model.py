from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import parse_iso_date, parse_optional_timestamp
from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveType:
    leave_type_id: str
    name: str


@dataclass(frozen=True)
class LeaveRequest:
    request_id: str
    leave_type: str
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus
    created_at: Optional[datetime] = None

    @classmethod
    def from_api(cls, payload: dict) -> "LeaveRequest":
        leave_type = payload.get("leave_type")
        if isinstance(leave_type, dict):
            leave_type = leave_type.get("name")
        return cls(
            request_id=str(payload["id"]),
            leave_type=str(leave_type or ""),
            start_date=parse_iso_date(str(payload["start_date"])),
            end_date=parse_iso_date(str(payload["end_date"])),
            reason=str(payload.get("reason") or ""),
            status=LeaveStatus(payload.get("status") or LeaveStatus.PENDING.value),
            created_at=parse_optional_timestamp(payload.get("created_at")),
        )

from __future__ import annotations

from datetime import date
from typing import Sequence

import structlog

from ..common.datetime_utils import format_short_date
from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_LEAVE_REASON_LENGTH
from ..core.exceptions import ValidationError
from ..users.service import AuthSession
from .model import LeaveRequest
from .repository import LeaveRepository

log = structlog.get_logger(__name__)


def calculate_days(start: date, end: date) -> int:
    """Inclusive number of days covered by a leave."""
    return abs((end - start).days) + 1


class LeaveService:
    def __init__(self, leaves: LeaveRepository, auth: AuthSession):
        self._leaves = leaves
        self._auth = auth

    async def list_requests(self) -> Sequence[LeaveRequest]:
        return await self._leaves.list_requests(self._auth.require())

    async def submit(self, *, leave_type: str, start_date: date, end_date: date, reason: str) -> None:
        if not (leave_type or "").strip():
            raise ValidationError("Please select a leave type")
        if start_date > end_date:
            raise ValidationError("End date cannot be before start date")
        reason = require_non_empty(reason, "a reason for your leave")
        require_min_length(reason, "Reason", MIN_LEAVE_REASON_LENGTH)

        auth = self._auth.require()
        types = await self._leaves.list_types(auth)
        match = next((t for t in types if t.name == leave_type.strip()), None)
        if match is None:
            log.warning("leave.unknown_type", leave_type=leave_type)

        await self._leaves.create_request(
            auth,
            leave_type_id=match.leave_type_id if match else None,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
        )
        log.info("leave.submitted", leave_type=leave_type, days=calculate_days(start_date, end_date))

    @staticmethod
    def to_ui(r: LeaveRequest) -> dict:
        return {
            "id": r.request_id,
            "leave_type": r.leave_type,
            "start_date": format_short_date(r.start_date),
            "end_date": format_short_date(r.end_date),
            "days": calculate_days(r.start_date, r.end_date),
            "reason": r.reason,
            "status": r.status.value,
        }

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..users.model import AuthContext
from .model import LeaveRequest, LeaveType


class LeaveRepository(Protocol):
    async def list_requests(self, auth: AuthContext) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    async def list_types(self, auth: AuthContext) -> Sequence[LeaveType]:
        raise NotImplementedError

    async def create_request(
        self,
        auth: AuthContext,
        *,
        leave_type_id: Optional[str],
        start_date: date,
        end_date: date,
        reason: str,
    ) -> None:
        raise NotImplementedError

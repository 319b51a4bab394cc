from __future__ import annotations

from datetime import date
from typing import Any, Optional, Sequence

from ..core.constants import DATE_KEY_FORMAT
from ..core.exceptions import NetworkFailure
from ..http.connection import ApiConnection
from ..http.http_base import api_request, unwrap_data
from ..users.model import AuthContext
from .model import LeaveRequest, LeaveType
from .repository import LeaveRepository


def _rows(body: Any) -> list[dict]:
    rows = unwrap_data(body)
    if rows is None:
        return []
    if not isinstance(rows, list):
        raise NetworkFailure("Unexpected leave payload")
    return rows


class HttpLeaveRepository(LeaveRepository):
    def __init__(self, conn: ApiConnection):
        self._conn = conn

    async def list_requests(self, auth: AuthContext) -> Sequence[LeaveRequest]:
        res = await api_request(self._conn, "GET", "/leave_request", token=auth.token)
        try:
            return [LeaveRequest.from_api(r) for r in _rows(res.body)]
        except (KeyError, TypeError, ValueError) as e:
            raise NetworkFailure("Could not decode leave requests") from e

    async def list_types(self, auth: AuthContext) -> Sequence[LeaveType]:
        res = await api_request(self._conn, "GET", "/leave_type", token=auth.token)
        try:
            return [LeaveType(leave_type_id=str(r["id"]), name=str(r["name"])) for r in _rows(res.body)]
        except (KeyError, TypeError, ValueError) as e:
            raise NetworkFailure("Could not decode leave types") from e

    async def create_request(
        self,
        auth: AuthContext,
        *,
        leave_type_id: Optional[str],
        start_date: date,
        end_date: date,
        reason: str,
    ) -> None:
        await api_request(
            self._conn,
            "POST",
            "/leave_request",
            token=auth.token,
            json={
                "leave_type_id": leave_type_id,
                "start_date": start_date.strftime(DATE_KEY_FORMAT),
                "end_date": end_date.strftime(DATE_KEY_FORMAT),
                "reason": reason,
            },
        )

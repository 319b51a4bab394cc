from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.exceptions import NetworkFailure
from ..http.connection import ApiConnection
from ..http.http_base import api_request, unwrap_data
from ..users.model import AuthContext
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _to_records(body: Any) -> list[AttendanceRecord]:
    rows = unwrap_data(body)
    if rows is None:
        return []
    if not isinstance(rows, list):
        raise NetworkFailure("Unexpected attendance payload")
    try:
        return [AttendanceRecord.from_api(r) for r in rows]
    except (KeyError, TypeError, ValueError) as e:
        raise NetworkFailure("Could not decode attendance records") from e


class HttpAttendanceRepository(AttendanceRepository):
    def __init__(self, conn: ApiConnection):
        self._conn = conn

    async def get_current(self, auth: AuthContext) -> Optional[dict]:
        res = await api_request(self._conn, "GET", "/attendance/current", token=auth.token, allow_statuses=(404,))
        if res.status == 404:
            return None
        payload = unwrap_data(res.body)
        if payload is None:
            return None
        if not isinstance(payload, dict):
            raise NetworkFailure("Unexpected current-session payload")
        return payload

    async def clock_in(self, auth: AuthContext) -> dict:
        res = await api_request(self._conn, "POST", "/clock_in", token=auth.token)
        payload = unwrap_data(res.body)
        if not isinstance(payload, dict) or payload.get("attendance_id") is None:
            raise NetworkFailure("Clock-in response did not include an attendance id")
        return payload

    async def clock_out(self, auth: AuthContext, attendance_id: str) -> None:
        await api_request(self._conn, "POST", f"/clock_out/{attendance_id}", token=auth.token)

    async def get_month(self, auth: AuthContext, *, year: int, month: int) -> Sequence[AttendanceRecord]:
        res = await api_request(self._conn, "GET", f"/attendance/month/{int(year)}-{int(month)}", token=auth.token)
        return _to_records(res.body)

    async def list_all(self, auth: AuthContext) -> Sequence[AttendanceRecord]:
        res = await api_request(self._conn, "GET", "/attendance", token=auth.token)
        return _to_records(res.body)

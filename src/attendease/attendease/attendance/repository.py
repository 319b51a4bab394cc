from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..users.model import AuthContext
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    async def get_current(self, auth: AuthContext) -> Optional[dict]:
        """Raw ``/attendance/current`` payload, or None when the server has no record."""

        raise NotImplementedError

    async def clock_in(self, auth: AuthContext) -> dict:
        raise NotImplementedError

    async def clock_out(self, auth: AuthContext, attendance_id: str) -> None:
        raise NotImplementedError

    async def get_month(self, auth: AuthContext, *, year: int, month: int) -> Sequence[AttendanceRecord]:
        """Records for ``month`` (1-12) of ``year``."""

        raise NotImplementedError

    async def list_all(self, auth: AuthContext) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

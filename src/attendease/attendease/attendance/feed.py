from __future__ import annotations

from datetime import datetime
from typing import Iterable, Sequence

import structlog

from ..common.datetime_utils import format_long_date, format_time
from ..core.enums import LogKind
from ..users.service import AuthSession
from .model import AttendanceRecord, LogEntry
from .repository import AttendanceRepository

log = structlog.get_logger(__name__)


def _entry(record: AttendanceRecord, kind: LogKind, at: datetime) -> LogEntry:
    return LogEntry(
        id=f"{record.attendance_id}-{kind.value}",
        kind=kind,
        date=format_long_date(at.date()),
        time=format_time(at),
        at=at,
    )


def build_feed(records: Iterable[AttendanceRecord]) -> list[LogEntry]:
    """Flatten records into clock events, clock-out before clock-in per record.

    Input order is preserved; missing timestamps produce no entry.
    """

    entries: list[LogEntry] = []
    for r in records:
        if r.clock_out is not None:
            entries.append(_entry(r, LogKind.CLOCK_OUT, r.clock_out))
        if r.clock_in is not None:
            entries.append(_entry(r, LogKind.CLOCK_IN, r.clock_in))
    return entries


def most_recent_first(records: Iterable[AttendanceRecord]) -> list[AttendanceRecord]:
    return sorted(
        records,
        key=lambda r: (r.attendance_date, r.clock_in or datetime.min),
        reverse=True,
    )


class LogFeedService:
    def __init__(self, attendance: AttendanceRepository, auth: AuthSession):
        self._attendance = attendance
        self._auth = auth

    async def load_feed(self) -> Sequence[LogEntry]:
        records = await self._attendance.list_all(self._auth.require())
        feed = build_feed(most_recent_first(records))
        log.debug("feed.loaded", records=len(records), entries=len(feed))
        return feed

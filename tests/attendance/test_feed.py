from __future__ import annotations

import asyncio

from attendease.attendance.feed import LogFeedService, build_feed, most_recent_first
from attendease.attendance.model import AttendanceRecord
from attendease.core.enums import LogKind


def _record(attendance_id, day, clock_in=None, clock_out=None):
    return AttendanceRecord.from_api(
        {"id": attendance_id, "attendance_date": day, "clock_in": clock_in, "clock_out": clock_out, "status": "late"}
    )


def test_feed_emits_clock_out_before_clock_in_per_record():
    feed = build_feed(
        [
            _record(2, "2024-03-06", "2024-03-06T09:10:00", "2024-03-06T17:00:00"),
            _record(1, "2024-03-05", "2024-03-05T08:50:00", "2024-03-05T16:30:00"),
        ]
    )

    assert [e.id for e in feed] == ["2-clockOut", "2-clockIn", "1-clockOut", "1-clockIn"]
    assert feed[0].kind == LogKind.CLOCK_OUT
    assert feed[0].time == "05:00 PM"
    assert feed[1].date == "Wednesday, March 6, 2024"


def test_feed_omits_missing_timestamps():
    feed = build_feed([_record(3, "2024-03-07", "2024-03-07T09:00:00"), _record(4, "2024-03-08")])
    assert [(e.id, e.kind) for e in feed] == [("3-clockIn", LogKind.CLOCK_IN)]


def test_most_recent_first_orders_by_date():
    records = [_record(1, "2024-03-05", "2024-03-05T09:00:00"), _record(2, "2024-03-07"), _record(3, "2024-03-06")]
    assert [r.attendance_id for r in most_recent_first(records)] == ["2", "3", "1"]


class InMemoryAttendance:
    def __init__(self, records):
        self._records = records
        self.tokens = []

    async def list_all(self, auth):
        self.tokens.append(auth.token)
        return self._records


def test_feed_service_sorts_before_flattening(auth_session):
    repo = InMemoryAttendance(
        [
            _record(1, "2024-03-05", "2024-03-05T09:00:00", "2024-03-05T17:00:00"),
            _record(2, "2024-03-06", "2024-03-06T09:00:00"),
        ]
    )
    feed = asyncio.run(LogFeedService(repo, auth_session).load_feed())

    assert [e.id for e in feed] == ["2-clockIn", "1-clockOut", "1-clockIn"]
    assert repo.tokens == ["t0k3n"]

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import MAXYEAR, MINYEAR, date, datetime
from typing import Callable, Iterable, Mapping, Optional, Union

import structlog

from ..common.datetime_utils import format_date_key, now_local
from ..core.exceptions import DomainError, ValidationError
from ..users.service import AuthSession
from .model import AttendanceRecord
from .repository import AttendanceRepository

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class NotFound:
    """No attendance recorded for the date. A normal result, not an error."""

    date_key: str


@dataclass(frozen=True)
class Loading:
    """The displayed month's index has not arrived yet."""

    year: int
    month_index: int


DayLookup = Union[AttendanceRecord, NotFound, Loading]


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month_index: int) -> int:
    if month_index == 1:
        return 29 if is_leap_year(year) else 28
    return 30 if month_index in (3, 5, 8, 10) else 31


def _check_year(year: int) -> int:
    year = int(year)
    if not MINYEAR <= year <= MAXYEAR:
        raise ValidationError(f"Year must be between {MINYEAR} and {MAXYEAR}, got {year}")
    return year


def _check_month(month_index: int) -> int:
    month_index = int(month_index)
    if not 0 <= month_index <= 11:
        raise ValidationError(f"Month index must be between 0 and 11, got {month_index}")
    return month_index


def generate_month_grid(year: int, month_index: int) -> list[Optional[int]]:
    """Calendar cells for a month: blanks (None) up to the first weekday, then days.

    Weeks start on Sunday, so the number of leading blanks is the Sunday-based
    weekday index of the 1st.
    """

    year, month_index = _check_year(year), _check_month(month_index)
    leading = (date(year, month_index + 1, 1).weekday() + 1) % 7
    cells: list[Optional[int]] = [None] * leading
    cells.extend(range(1, days_in_month(year, month_index) + 1))
    return cells


def shift_month(year: int, month_index: int, delta: int) -> tuple[int, int]:
    """Move ``delta`` months, rolling over year boundaries."""
    years, month_index = divmod(_check_month(month_index) + int(delta), 12)
    return year + years, month_index


@dataclass(frozen=True)
class CalendarIndex:
    """Records of one displayed month keyed by ``YYYY-MM-DD``."""

    year: int
    month_index: int
    records: Mapping[str, AttendanceRecord] = field(default_factory=dict)

    @classmethod
    def build(cls, year: int, month_index: int, records: Iterable[AttendanceRecord]) -> "CalendarIndex":
        by_key: dict[str, AttendanceRecord] = {}
        for r in records:
            d = r.attendance_date
            if (d.year, d.month - 1) != (year, month_index):
                log.debug("calendar.record_outside_month", attendance_id=r.attendance_id, date=d.isoformat())
                continue
            key = format_date_key(d.year, d.month - 1, d.day)
            if key in by_key:
                log.warning("calendar.duplicate_date", date=key, kept=r.attendance_id, dropped=by_key[key].attendance_id)
            by_key[key] = r
        return cls(year=year, month_index=month_index, records=by_key)

    def __len__(self) -> int:
        return len(self.records)

    def __contains__(self, key: object) -> bool:
        return key in self.records


def resolve_day(index: CalendarIndex, year: int, month_index: int, day: int) -> Union[AttendanceRecord, NotFound]:
    year, month_index = _check_year(year), _check_month(month_index)
    if not 1 <= int(day) <= days_in_month(year, month_index):
        raise ValidationError(f"Day {day} is outside {year}-{month_index + 1:02d}")
    key = format_date_key(year, month_index, day)
    record = index.records.get(key)
    if record is None:
        return NotFound(date_key=key)
    return record


class CalendarService:
    """Displayed month, its index and the selected day.

    The displayed month only changes when a load for it succeeds, so the
    shown index always matches it. Every load bumps a generation number; a
    response that comes back after a newer load was issued is dropped so it
    cannot overwrite newer data. A failed load keeps the previous month and
    index, and the failure is reported again by ``select_day`` until a load
    succeeds.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        auth: AuthSession,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._auth = auth
        today = clock().date()
        self._year = today.year
        self._month_index = today.month - 1
        self._selected_day = today.day
        # Month of the newest issued load; navigation steps from here.
        self._requested = (self._year, self._month_index)
        self._index: Optional[CalendarIndex] = None
        self._failure: Optional[DomainError] = None
        self._generation = 0

    @property
    def year(self) -> int:
        return self._year

    @property
    def month_index(self) -> int:
        return self._month_index

    @property
    def selected_day(self) -> int:
        return self._selected_day

    @property
    def index(self) -> Optional[CalendarIndex]:
        return self._index

    def grid(self) -> list[Optional[int]]:
        return generate_month_grid(self._year, self._month_index)

    async def load_month(self, year: int, month_index: int) -> CalendarIndex:
        """Fetch and index a month, making it the displayed one on success.

        Returns the freshly built index even when it arrived too late to be
        installed; ``index`` always holds the newest installed one.
        """

        year, month_index = _check_year(year), _check_month(month_index)
        auth = self._auth.require()
        self._requested = (year, month_index)
        self._failure = None
        self._generation += 1
        generation = self._generation

        try:
            records = await self._attendance.get_month(auth, year=year, month=month_index + 1)
        except DomainError as e:
            log.warning("calendar.load_failed", year=year, month=month_index + 1, kept_previous=self._index is not None)
            if generation == self._generation:
                self._requested = (self._year, self._month_index)
                self._failure = e
            raise

        index = CalendarIndex.build(year, month_index, records)
        if generation != self._generation:
            log.info("calendar.stale_response_discarded", year=year, month=month_index + 1)
            return index

        if (year, month_index) != (self._year, self._month_index):
            self._selected_day = min(self._selected_day, days_in_month(year, month_index))
        self._year, self._month_index = year, month_index
        self._index = index
        log.debug("calendar.loaded", year=year, month=month_index + 1, records=len(index))
        return index

    async def refresh(self) -> CalendarIndex:
        return await self.load_month(*self._requested)

    async def navigate(self, direction: int) -> CalendarIndex:
        year, month_index = shift_month(*self._requested, direction)
        return await self.load_month(year, month_index)

    def select_day(self, day: int) -> DayLookup:
        """Resolve a day of the displayed month.

        Returns ``Loading`` only while the first load is outstanding; once a
        load has failed with nothing to show, that failure is raised instead.
        """

        day = int(day)
        if not 1 <= day <= days_in_month(self._year, self._month_index):
            raise ValidationError(f"Day {day} is outside {self._year}-{self._month_index + 1:02d}")
        self._selected_day = day
        index = self._index
        if index is None:
            if self._failure is not None:
                raise self._failure
            return Loading(year=self._year, month_index=self._month_index)
        return resolve_day(index, self._year, self._month_index, day)

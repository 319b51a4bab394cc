from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Optional

import structlog

from ..common.datetime_utils import now_local, parse_iso_date, parse_optional_timestamp, parse_timestamp
from ..core.exceptions import NetworkFailure, PreconditionViolation
from ..users.service import AuthSession
from .model import NOT_CLOCKED_IN, ClockedIn, Completed, NotClockedIn, SessionState, session_rank
from .repository import AttendanceRepository

log = structlog.get_logger(__name__)


def derive_session(payload: Optional[dict], *, today: date) -> tuple[SessionState, date]:
    """Map a ``/attendance/current`` payload to a session state and its day.

    An absent payload, or one without ``id``, means NotClockedIn.
    """

    if not payload or payload.get("id") is None:
        return NOT_CLOCKED_IN, today

    try:
        attendance_id = str(payload["id"])
        clock_in = parse_optional_timestamp(payload.get("clock_in"))
        clock_out = parse_optional_timestamp(payload.get("clock_out"))
        raw_date = payload.get("attendance_date")
        day = parse_iso_date(str(raw_date)) if raw_date else (clock_in.date() if clock_in else today)
    except (TypeError, ValueError) as e:
        raise NetworkFailure("Could not decode the current session") from e

    if clock_out is not None:
        return Completed(attendance_id=attendance_id, clock_out_at=clock_out, clock_in_at=clock_in), day
    if clock_in is not None:
        return ClockedIn(attendance_id=attendance_id, clock_in_at=clock_in), day
    return NOT_CLOCKED_IN, day


class SessionReconciler:
    """Today's clock-in/out state, reconciled against the server.

    The server is authoritative, but within one calendar day the state only
    moves forward: NotClockedIn -> ClockedIn -> Completed. Failed calls leave
    the state untouched and re-raise the error for the caller to display.
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
        self._clock = clock
        self._state: SessionState = NOT_CLOCKED_IN
        self._day: Optional[date] = None
        self._pending: Optional[str] = None
        # Sequence numbers: every refresh and completed mutation takes the next
        # one. A refresh that returns after a later one already settled the
        # state is discarded; a later refresh that failed settles nothing.
        self._issued = 0
        self._settled = 0

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def busy(self) -> bool:
        return self._pending is not None

    def reset(self) -> None:
        self._state = NOT_CLOCKED_IN
        self._day = None
        self._settle()

    def _settle(self) -> None:
        self._issued += 1
        self._settled = self._issued

    def _violation(self, operation: str, reason: str) -> PreconditionViolation:
        log.error("session.precondition_violation", operation=operation, state=type(self._state).__name__, reason=reason)
        return PreconditionViolation(f"{operation} is not allowed: {reason}")

    def _apply(self, state: SessionState, day: date) -> None:
        if day == self._day and session_rank(state) < session_rank(self._state):
            log.warning(
                "session.regression_ignored",
                current=type(self._state).__name__,
                received=type(state).__name__,
                day=day.isoformat(),
            )
            return
        self._state = state
        self._day = day

    async def get_current_session(self) -> SessionState:
        auth = self._auth.require()
        self._issued += 1
        seq = self._issued

        payload = await self._attendance.get_current(auth)
        state, day = derive_session(payload, today=self._clock().date())

        if seq < self._settled:
            log.info("session.stale_response_discarded", seq=seq, settled=self._settled)
            return self._state

        self._settled = seq
        self._apply(state, day)
        return self._state

    async def clock_in(self) -> ClockedIn:
        if self._pending is not None:
            raise self._violation("clock_in", f"{self._pending} already in flight")
        if not isinstance(self._state, NotClockedIn):
            raise self._violation("clock_in", "already clocked in today")

        auth = self._auth.require()
        self._pending = "clock_in"
        try:
            payload = await self._attendance.clock_in(auth)
        finally:
            self._pending = None

        raw_clock_in = payload.get("clock_in")
        try:
            clock_in_at = parse_timestamp(str(raw_clock_in)) if raw_clock_in else self._clock()
        except ValueError as e:
            raise NetworkFailure("Could not decode the clock-in response") from e
        state = ClockedIn(attendance_id=str(payload["attendance_id"]), clock_in_at=clock_in_at)

        self._settle()
        self._state = state
        self._day = clock_in_at.date()
        log.info("session.clock_in", attendance_id=state.attendance_id, at=clock_in_at.isoformat())
        return state

    async def clock_out(self, attendance_id: str) -> Completed:
        """Close the open session. Confirmation is the caller's job."""

        if self._pending is not None:
            raise self._violation("clock_out", f"{self._pending} already in flight")
        current = self._state
        if not isinstance(current, ClockedIn):
            raise self._violation("clock_out", "not clocked in")
        if str(attendance_id) != current.attendance_id:
            raise self._violation("clock_out", f"attendance {attendance_id} is not the open session")

        auth = self._auth.require()
        self._pending = "clock_out"
        try:
            await self._attendance.clock_out(auth, current.attendance_id)
        finally:
            self._pending = None

        state = Completed(attendance_id=current.attendance_id, clock_out_at=self._clock(), clock_in_at=current.clock_in_at)
        self._settle()
        self._state = state
        log.info("session.clock_out", attendance_id=state.attendance_id, at=state.clock_out_at.isoformat())
        return state

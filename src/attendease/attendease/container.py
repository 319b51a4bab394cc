from __future__ import annotations

import secrets
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

import httpx

from .attendance.calendar import CalendarService
from .attendance.feed import LogFeedService
from .attendance.http_attendance_repository import HttpAttendanceRepository
from .attendance.service import AttendanceService
from .attendance.session import SessionReconciler
from .common.datetime_utils import now_local
from .http.connection import ApiConfig, ApiConnection
from .leave.http_leave_repository import HttpLeaveRepository
from .leave.service import LeaveService
from .users.http_user_repository import HttpUserRepository
from .users.service import AuthService, AuthSession


@dataclass(frozen=True)
class ClientServices:
    """Stateful services of one signed-in client."""

    auth_session: AuthSession
    auth_service: AuthService
    session_reconciler: SessionReconciler
    calendar_service: CalendarService
    attendance_service: AttendanceService
    feed_service: LogFeedService
    leave_service: LeaveService


class ClientRegistry:
    """Per-client services keyed by an opaque id kept in the Flask session."""

    def __init__(self, factory: Callable[[], ClientServices]):
        self._factory = factory
        self._clients: dict[str, ClientServices] = {}

    def __len__(self) -> int:
        return len(self._clients)

    def get(self, client_id: Optional[str]) -> Optional[ClientServices]:
        if not client_id:
            return None
        return self._clients.get(client_id)

    def open(self) -> tuple[str, ClientServices]:
        client_id = secrets.token_urlsafe(16)
        client = self._factory()
        self._clients[client_id] = client
        return client_id, client

    def discard(self, client_id: Optional[str]) -> None:
        if client_id:
            self._clients.pop(client_id, None)


@dataclass(frozen=True)
class Container:
    conn: ApiConnection

    users_repo: HttpUserRepository
    attendance_repo: HttpAttendanceRepository
    leave_repo: HttpLeaveRepository

    clients: ClientRegistry = field(repr=False)


def build_client_services(
    *,
    users_repo: HttpUserRepository,
    attendance_repo: HttpAttendanceRepository,
    leave_repo: HttpLeaveRepository,
    auth_session: Optional[AuthSession] = None,
    clock: Callable[[], datetime] = now_local,
) -> ClientServices:
    auth_session = auth_session or AuthSession()
    calendar_service = CalendarService(attendance_repo, auth_session, clock=clock)

    return ClientServices(
        auth_session=auth_session,
        auth_service=AuthService(users_repo, auth_session),
        session_reconciler=SessionReconciler(attendance_repo, auth_session, clock=clock),
        calendar_service=calendar_service,
        attendance_service=AttendanceService(calendar_service),
        feed_service=LogFeedService(attendance_repo, auth_session),
        leave_service=LeaveService(leave_repo, auth_session),
    )


def build_container(
    *,
    api_config: dict,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    config = ApiConfig(
        base_url=str(api_config["base_url"]),
        timeout=float(api_config.get("timeout", 30.0)),
    )
    conn = ApiConnection(config, transport=transport)

    users_repo = HttpUserRepository(conn)
    attendance_repo = HttpAttendanceRepository(conn)
    leave_repo = HttpLeaveRepository(conn)

    def factory() -> ClientServices:
        return build_client_services(
            users_repo=users_repo,
            attendance_repo=attendance_repo,
            leave_repo=leave_repo,
            clock=clock,
        )

    return Container(
        conn=conn,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        clients=ClientRegistry(factory),
    )

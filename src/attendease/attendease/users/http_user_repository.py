from __future__ import annotations

from typing import Any

from ..core.exceptions import AuthenticationError, ServerRejected
from ..http.connection import ApiConnection
from ..http.http_base import api_request, unwrap_data
from .model import AuthContext, User
from .repository import UserRepository


class HttpUserRepository(UserRepository):
    def __init__(self, conn: ApiConnection):
        self._conn = conn

    @staticmethod
    def _to_context(body: Any, fallback: str) -> AuthContext:
        body = unwrap_data(body) or {}
        token = body.get("token") if isinstance(body, dict) else None
        user = body.get("user") if isinstance(body, dict) else None
        if not token or not isinstance(user, dict):
            raise AuthenticationError(fallback)
        return AuthContext(token=str(token), user=User.from_api(user))

    async def login(self, *, login: str, password: str) -> AuthContext:
        try:
            res = await api_request(self._conn, "POST", "/login", json={"login": login, "password": password})
        except ServerRejected as e:
            raise AuthenticationError(e.message) from e
        return self._to_context(res.body, "Login failed")

    async def register(self, *, name: str, email: str, password: str) -> AuthContext:
        try:
            res = await api_request(
                self._conn,
                "POST",
                "/auth/register",
                json={"name": name, "email": email, "password": password},
            )
        except ServerRejected as e:
            raise AuthenticationError(e.message) from e
        return self._to_context(res.body, "Registration failed")

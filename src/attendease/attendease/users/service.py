from __future__ import annotations

from typing import Optional

import structlog

from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import AuthenticationError, ValidationError
from .model import AuthContext
from .repository import UserRepository

log = structlog.get_logger(__name__)


class AuthSession:
    """In-memory holder of the current credential.

    Nothing is persisted; a restart means logging in again.
    """

    def __init__(self, context: Optional[AuthContext] = None):
        self._context = context

    @property
    def context(self) -> Optional[AuthContext]:
        return self._context

    @property
    def is_authenticated(self) -> bool:
        return self._context is not None

    def set(self, context: AuthContext) -> None:
        self._context = context

    def clear(self) -> None:
        self._context = None

    def require(self) -> AuthContext:
        if self._context is None:
            raise AuthenticationError("Please log in to continue")
        return self._context


class AuthService:
    """Use case: login, signup and logout."""

    def __init__(self, users: UserRepository, session: AuthSession):
        self._users = users
        self._session = session

    async def login(self, email: str, password: str) -> AuthContext:
        if not (email or "").strip() or not (password or "").strip():
            raise ValidationError("Please enter both email and password")

        context = await self._users.login(login=email.strip(), password=password)
        self._session.set(context)
        log.info("auth.login", user_id=context.user.user_id)
        return context

    async def signup(self, name: str, email: str, password: str, confirm_password: str) -> AuthContext:
        if not all((field or "").strip() for field in (name, email, password, confirm_password)):
            raise ValidationError("Please fill in all fields")
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        if password != confirm_password:
            raise ValidationError("Passwords do not match")

        context = await self._users.register(name=require_non_empty(name, "a name"), email=email, password=password)
        self._session.set(context)
        log.info("auth.signup", user_id=context.user.user_id)
        return context

    def logout(self) -> None:
        if self._session.context is not None:
            log.info("auth.logout", user_id=self._session.context.user.user_id)
        self._session.clear()

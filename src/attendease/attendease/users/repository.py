from __future__ import annotations

from typing import Protocol

from .model import AuthContext


class UserRepository(Protocol):
    async def login(self, *, login: str, password: str) -> AuthContext:
        raise NotImplementedError

    async def register(self, *, name: str, email: str, password: str) -> AuthContext:
        raise NotImplementedError

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    """Authenticated user as returned by the API."""

    user_id: str
    email: str
    name: str

    @classmethod
    def from_api(cls, payload: dict) -> "User":
        return cls(
            user_id=str(payload["id"]),
            email=str(payload.get("email") or ""),
            name=str(payload.get("name") or ""),
        )


@dataclass(frozen=True)
class AuthContext:
    """Bearer credential plus identity, passed explicitly to the core services."""

    token: str
    user: User

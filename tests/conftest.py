from __future__ import annotations

from datetime import datetime

import pytest

from attendease.users.model import AuthContext, User
from attendease.users.service import AuthSession


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 5, 9, 0, 0)


@pytest.fixture
def auth_context() -> AuthContext:
    return AuthContext(token="t0k3n", user=User(user_id="7", email="a@example.com", name="A"))


@pytest.fixture
def auth_session(auth_context) -> AuthSession:
    return AuthSession(auth_context)

from __future__ import annotations

import asyncio

import httpx
import pytest

from attendease.core.exceptions import AuthenticationError, ValidationError
from attendease.http.connection import ApiConfig, ApiConnection
from attendease.users.http_user_repository import HttpUserRepository
from attendease.users.model import AuthContext, User
from attendease.users.service import AuthService, AuthSession


class InMemoryUsers:
    def __init__(self):
        self.logins = []
        self.registrations = []

    async def login(self, *, login, password):
        self.logins.append((login, password))
        return AuthContext(token="tok", user=User("7", login, "A"))

    async def register(self, *, name, email, password):
        self.registrations.append((name, email, password))
        return AuthContext(token="tok", user=User("8", email, name))


def test_login_sets_session():
    session = AuthSession()
    repo = InMemoryUsers()

    asyncio.run(AuthService(repo, session).login(" a@example.com ", "secret"))

    assert session.is_authenticated
    assert repo.logins == [("a@example.com", "secret")]


def test_login_requires_both_fields():
    with pytest.raises(ValidationError):
        asyncio.run(AuthService(InMemoryUsers(), AuthSession()).login("a@example.com", ""))


@pytest.mark.parametrize(
    "name,email,password,confirm",
    [
        ("", "a@example.com", "secret1", "secret1"),
        ("A", "not-an-email", "secret1", "secret1"),
        ("A", "a@example.com", "short", "short"),
        ("A", "a@example.com", "secret1", "secret2"),
    ],
)
def test_signup_validation(name, email, password, confirm):
    repo = InMemoryUsers()
    with pytest.raises(ValidationError):
        asyncio.run(AuthService(repo, AuthSession()).signup(name, email, password, confirm))
    assert repo.registrations == []


def test_signup_then_logout():
    session = AuthSession()
    svc = AuthService(InMemoryUsers(), session)

    context = asyncio.run(svc.signup("A", "a@example.com", "secret1", "secret1"))
    assert session.context == context

    svc.logout()
    assert not session.is_authenticated
    with pytest.raises(AuthenticationError):
        session.require()


def _http_users(handler) -> HttpUserRepository:
    return HttpUserRepository(ApiConnection(ApiConfig(base_url="http://api.test/api"), transport=httpx.MockTransport(handler)))


def test_http_login_decodes_token_and_user():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/login"
        assert "Authorization" not in request.headers
        return httpx.Response(200, json={"token": "abc", "user": {"id": 7, "email": "a@example.com", "name": "A"}})

    context = asyncio.run(_http_users(handler).login(login="a@example.com", password="secret"))

    assert context == AuthContext(token="abc", user=User("7", "a@example.com", "A"))


def test_http_login_rejection_is_authentication_error():
    repo = _http_users(lambda request: httpx.Response(401, json={"message": "Invalid credentials"}))
    with pytest.raises(AuthenticationError, match="Invalid credentials"):
        asyncio.run(repo.login(login="a@example.com", password="wrong"))


def test_http_register_without_token_fails():
    repo = _http_users(lambda request: httpx.Response(201, json={"user": {"id": 8}}))
    with pytest.raises(AuthenticationError, match="Registration failed"):
        asyncio.run(repo.register(name="A", email="a@example.com", password="secret1"))

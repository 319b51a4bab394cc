from __future__ import annotations

import json

import httpx
import pytest

from attendease.main import create_app


class FakeApi:
    """Stateful stand-in for the remote attendance API."""

    def __init__(self):
        self.open_id = None
        self.closed = False
        self.leave_posts = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/api")
        if request.method == "POST" and path == "/login":
            body = json.loads(request.content)
            if body["password"] != "secret":
                return httpx.Response(401, json={"message": "Invalid credentials"})
            return httpx.Response(200, json={"token": "abc", "user": {"id": 7, "email": body["login"], "name": "A"}})

        if request.headers.get("Authorization") != "Bearer abc":
            return httpx.Response(401, json={"message": "Unauthorized"})

        if path == "/attendance/current":
            if self.open_id is None:
                return httpx.Response(404, json={"message": "No attendance today"})
            return httpx.Response(
                200,
                json={
                    "id": self.open_id,
                    "attendance_date": "2024-03-05",
                    "clock_in": "2024-03-05T09:00:00",
                    "clock_out": "2024-03-05T17:30:00" if self.closed else None,
                },
            )
        if path == "/clock_in":
            self.open_id = 42
            return httpx.Response(201, json={"attendance_id": 42, "clock_in": "2024-03-05T09:00:00"})
        if path == "/clock_out/42":
            self.closed = True
            return httpx.Response(200, json={"message": "ok"})
        if path == "/attendance/month/2024-3":
            return httpx.Response(
                200,
                json={
                    "data": [
                        {
                            "id": 42,
                            "attendance_date": "2024-03-05",
                            "clock_in": "2024-03-05T09:00:00",
                            "clock_out": "2024-03-05T17:30:00",
                            "status": "on_time",
                        }
                    ]
                },
            )
        if path == "/attendance":
            return httpx.Response(
                200,
                json=[{"id": 41, "attendance_date": "2024-03-04", "clock_in": "2024-03-04T08:55:00", "clock_out": None}],
            )
        if path == "/leave_type":
            return httpx.Response(200, json=[{"id": 1, "name": "Annual Leave"}])
        if path == "/leave_request" and request.method == "POST":
            self.leave_posts.append(json.loads(request.content))
            return httpx.Response(201, json={"message": "created"})
        if path == "/leave_request":
            return httpx.Response(200, json=[])
        return httpx.Response(404, json={"message": f"no route {path}"})


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def client(monkeypatch, api):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(transport=httpx.MockTransport(api))
    return app.test_client()


def _login(client):
    return client.post("/login", json={"email": "a@example.com", "password": "secret"})


def test_requires_login(client):
    res = client.get("/session")
    assert res.status_code == 401
    assert res.get_json()["success"] is False


def test_bad_credentials(client):
    res = client.post("/login", json={"email": "a@example.com", "password": "nope"})
    assert res.status_code == 401
    assert res.get_json()["message"] == "Invalid credentials"


def test_session_lifecycle(client, api):
    assert _login(client).status_code == 200

    res = client.get("/session")
    assert res.get_json()["session"] == {"state": "not_clocked_in", "can_clock_in": True, "can_clock_out": False}

    res = client.post("/session/clock-in")
    assert res.status_code == 200
    assert res.get_json()["session"]["attendance_id"] == "42"
    assert res.get_json()["session"]["clock_in"] == "09:00 AM"

    res = client.post("/session/clock-in")
    assert res.status_code == 409

    res = client.post("/session/clock-out", json={"attendance_id": "42"})
    assert res.status_code == 400
    assert api.closed is False

    res = client.post("/session/clock-out", json={"attendance_id": "42", "confirmed": True})
    assert res.status_code == 200
    assert res.get_json()["session"]["state"] == "completed"
    assert api.closed is True


def test_calendar_day_lookup(client):
    _login(client)

    res = client.get("/calendar?year=2024&month=3")
    calendar = res.get_json()["calendar"]
    assert res.status_code == 200
    assert calendar["label"] == "March 2024"
    assert calendar["recorded_days"] == ["2024-03-05"]

    day = client.get("/calendar/day/5").get_json()["day"]
    assert day["state"] == "found"
    assert day["working_hours"] == "8h 30m"
    assert day["status_label"] == "On time"

    missing = client.get("/calendar/day/6").get_json()["day"]
    assert missing == {"state": "not_found", "date": "2024-03-06", "message": "No attendance records found."}

    assert client.get("/calendar/day/32").status_code == 400


def test_calendar_load_failure_keeps_view(client):
    _login(client)
    client.get("/calendar?year=2024&month=3")

    res = client.get("/calendar?year=2024&month=4")
    # the fake answers unknown months with 404
    assert res.status_code == 404
    assert res.get_json()["calendar"]["label"] == "March 2024"
    assert client.get("/calendar/day/5").get_json()["day"]["state"] == "found"


def test_calendar_rejects_year_out_of_range(client):
    _login(client)

    res = client.get("/calendar?year=0&month=1")
    assert res.status_code == 400
    assert res.get_json()["success"] is False

    assert client.get("/calendar?year=2024&month=3").status_code == 200


def test_feed_and_leave(client, api):
    _login(client)

    entries = client.get("/feed").get_json()["entries"]
    assert entries == [{"id": "41-clockIn", "type": "clockIn", "date": "Monday, March 4, 2024", "time": "08:55 AM"}]

    res = client.post(
        "/leave",
        json={"leave_type": "Annual Leave", "start_date": "2024-03-11", "end_date": "2024-03-12", "reason": "Family trip abroad"},
    )
    assert res.status_code == 201
    assert api.leave_posts == [
        {"leave_type_id": "1", "start_date": "2024-03-11", "end_date": "2024-03-12", "reason": "Family trip abroad"}
    ]

    res = client.post("/leave", json={"leave_type": "Annual Leave", "start_date": "soon", "end_date": "2024-03-12"})
    assert res.status_code == 400

    assert client.get("/leave").get_json()["types"] == ["Annual Leave", "Sick Leave", "Casual Leave"]


def test_logout_resets_session(client):
    _login(client)
    assert client.post("/logout").status_code == 200
    assert client.get("/me").status_code == 401


def test_login_is_scoped_to_one_client(client):
    other = client.application.test_client()
    _login(client)

    assert client.get("/me").status_code == 200
    assert other.get("/me").status_code == 401
    assert other.post("/session/clock-in").status_code == 401


def test_clients_keep_separate_sessions(client, api):
    other = client.application.test_client()
    _login(client)
    _login(other)

    assert client.post("/session/clock-in").status_code == 200
    # the other client has not reconciled yet, so its own state still forbids clocking out
    assert other.post("/session/clock-out", json={"attendance_id": "42", "confirmed": True}).status_code == 409
    assert other.get("/session").get_json()["session"]["state"] == "clocked_in"

    other.post("/logout")
    assert other.get("/me").status_code == 401
    assert client.get("/me").status_code == 200

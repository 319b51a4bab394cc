from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.web import error_payload, error_response, login_required
from ..container import Container
from ..core.exceptions import DomainError, ValidationError
from .service import session_view


def register(app: Flask, container: Container) -> None:
    auth_required = login_required(container.clients)

    @app.route("/session", methods=["GET"], endpoint="current_session")
    @auth_required
    async def current_session():
        try:
            state = await g.client.session_reconciler.get_current_session()
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "session": session_view(state)}), 200

    @app.route("/session/clock-in", methods=["POST"], endpoint="clock_in")
    @auth_required
    async def clock_in():
        try:
            state = await g.client.session_reconciler.clock_in()
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "message": "Clocked in", "session": session_view(state)}), 200

    @app.route("/session/clock-out", methods=["POST"], endpoint="clock_out")
    @auth_required
    async def clock_out():
        data = request.get_json(silent=True) or {}
        if data.get("confirmed") is not True:
            return error_response(ValidationError("Please confirm that you want to clock out"))
        try:
            state = await g.client.session_reconciler.clock_out(str(data.get("attendance_id", "")))
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "message": "Clocked out", "session": session_view(state)}), 200

    def _calendar_payload() -> dict:
        return g.client.attendance_service.month_view()

    @app.route("/calendar", methods=["GET"], endpoint="calendar_month")
    @auth_required
    async def calendar_month():
        try:
            year = int(request.args.get("year", g.client.calendar_service.year))
            month = int(request.args.get("month", g.client.calendar_service.month_index + 1))
        except ValueError:
            return error_response(ValidationError("year and month must be numbers"))
        try:
            await g.client.calendar_service.load_month(year, month - 1)
        except DomainError as e:
            payload, status = error_payload(e)
            payload["calendar"] = _calendar_payload()
            return jsonify(payload), status
        return jsonify({"success": True, "calendar": _calendar_payload()}), 200

    @app.route("/calendar/refresh", methods=["POST"], endpoint="calendar_refresh")
    @auth_required
    async def calendar_refresh():
        try:
            await g.client.calendar_service.refresh()
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "calendar": _calendar_payload()}), 200

    @app.route("/calendar/navigate", methods=["POST"], endpoint="calendar_navigate")
    @auth_required
    async def calendar_navigate():
        data = request.get_json(silent=True) or {}
        direction = data.get("direction")
        if direction not in (1, -1):
            return error_response(ValidationError("direction must be 1 or -1"))
        try:
            await g.client.calendar_service.navigate(direction)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "calendar": _calendar_payload()}), 200

    @app.route("/calendar/day/<int:day>", methods=["GET"], endpoint="calendar_day")
    @auth_required
    async def calendar_day(day: int):
        try:
            view = g.client.attendance_service.day_view(day)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "day": view}), 200

    @app.route("/feed", methods=["GET"], endpoint="feed")
    @auth_required
    async def feed():
        try:
            entries = await g.client.feed_service.load_feed()
        except DomainError as e:
            return error_response(e)
        return jsonify(
            {
                "success": True,
                "entries": [{"id": e.id, "type": e.kind.value, "date": e.date, "time": e.time} for e in entries],
            }
        ), 200

from __future__ import annotations

from datetime import date

from flask import Flask, g, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import error_response, login_required
from ..container import Container
from ..core.constants import LEAVE_TYPES
from ..core.exceptions import DomainError, ValidationError


def register(app: Flask, container: Container) -> None:
    auth_required = login_required(container.clients)

    def _parse_date(value, field: str) -> date:
        try:
            return parse_iso_date(str(value))
        except (TypeError, ValueError):
            raise ValidationError(f"{field} must be a YYYY-MM-DD date")

    @app.route("/leave", methods=["GET"], endpoint="leave_list")
    @auth_required
    async def leave_list():
        try:
            requests_ = await g.client.leave_service.list_requests()
        except DomainError as e:
            return error_response(e)
        return jsonify(
            {
                "success": True,
                "types": list(LEAVE_TYPES),
                "requests": [g.client.leave_service.to_ui(r) for r in requests_],
            }
        ), 200

    @app.route("/leave", methods=["POST"], endpoint="leave_submit")
    @auth_required
    async def leave_submit():
        data = request.get_json(silent=True) or {}
        try:
            await g.client.leave_service.submit(
                leave_type=data.get("leave_type", ""),
                start_date=_parse_date(data.get("start_date"), "start_date"),
                end_date=_parse_date(data.get("end_date"), "end_date"),
                reason=data.get("reason", ""),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "message": "Your leave request has been submitted successfully!"}), 201

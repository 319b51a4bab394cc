from __future__ import annotations

from flask import Flask, g, jsonify, request, session

from ..common.web import CLIENT_KEY, error_response, login_required
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    clients = container.clients
    auth_required = login_required(clients)

    def _user_json(context) -> dict:
        return {"id": context.user.user_id, "email": context.user.email, "name": context.user.name}

    def _sign_in(client_id: str, context) -> None:
        clients.discard(session.get(CLIENT_KEY))
        session.clear()
        session[CLIENT_KEY] = client_id
        session["user_id"] = context.user.user_id
        session["name"] = context.user.name

    @app.route("/login", methods=["POST"], endpoint="login")
    async def login():
        data = request.get_json(silent=True) or {}
        client_id, client = clients.open()
        try:
            context = await client.auth_service.login(data.get("email", ""), data.get("password", ""))
        except DomainError as e:
            clients.discard(client_id)
            return error_response(e)
        _sign_in(client_id, context)
        return jsonify({"success": True, "user": _user_json(context)}), 200

    @app.route("/signup", methods=["POST"], endpoint="signup")
    async def signup():
        data = request.get_json(silent=True) or {}
        client_id, client = clients.open()
        try:
            context = await client.auth_service.signup(
                data.get("name", ""),
                data.get("email", ""),
                data.get("password", ""),
                data.get("confirm_password", ""),
            )
        except DomainError as e:
            clients.discard(client_id)
            return error_response(e)
        _sign_in(client_id, context)
        return jsonify({"success": True, "user": _user_json(context)}), 201

    @app.route("/logout", methods=["POST"], endpoint="logout")
    async def logout():
        client_id = session.get(CLIENT_KEY)
        client = clients.get(client_id)
        if client is not None:
            client.auth_service.logout()
            client.session_reconciler.reset()
        clients.discard(client_id)
        session.clear()
        return jsonify({"success": True}), 200

    @app.route("/me", methods=["GET"], endpoint="me")
    @auth_required
    async def me():
        return jsonify({"success": True, "user": _user_json(g.client.auth_session.require())}), 200

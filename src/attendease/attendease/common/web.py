from __future__ import annotations

from functools import wraps
from typing import Optional

import structlog
from flask import g, jsonify, session

from ..core.exceptions import (
    AuthenticationError,
    DomainError,
    NetworkFailure,
    PreconditionViolation,
    ServerRejected,
    ValidationError,
)
from ..container import ClientRegistry, ClientServices

log = structlog.get_logger(__name__)


def error_payload(e: DomainError) -> tuple[dict, int]:
    """Map a domain error to a JSON error body and status code."""

    if isinstance(e, ValidationError):
        return {"success": False, "message": str(e)}, 400
    if isinstance(e, AuthenticationError):
        return {"success": False, "message": str(e)}, 401
    if isinstance(e, PreconditionViolation):
        return {"success": False, "message": str(e)}, 409
    if isinstance(e, ServerRejected):
        status = e.status if 400 <= e.status < 600 else 502
        return {"success": False, "message": e.message}, status
    if isinstance(e, NetworkFailure):
        return {"success": False, "message": str(e)}, 502
    log.error("web.unhandled_domain_error", error=str(e), kind=type(e).__name__)
    return {"success": False, "message": "Unexpected error"}, 500


def error_response(e: DomainError):
    payload, status = error_payload(e)
    return jsonify(payload), status


CLIENT_KEY = "client_id"


def current_client(clients: ClientRegistry) -> Optional[ClientServices]:
    """Services of the signed-in client behind this request, if any."""
    client = clients.get(session.get(CLIENT_KEY))
    if client is None or not client.auth_session.is_authenticated:
        return None
    return client


def login_required(clients: ClientRegistry):
    def decorator(view):
        @wraps(view)
        async def wrapper(*args, **kwargs):
            client = current_client(clients)
            if client is None:
                return jsonify({"success": False, "message": "Please log in to continue"}), 401
            g.client = client
            return await view(*args, **kwargs)

        return wrapper

    return decorator

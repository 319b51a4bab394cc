from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import httpx
import structlog

from ..core.exceptions import NetworkFailure, ServerRejected
from .connection import ApiConnection

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ApiResponse:
    status: int
    body: Any


def _error_message(body: Any) -> Optional[str]:
    if isinstance(body, dict):
        for key in ("message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return None


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as e:
        raise NetworkFailure(f"Could not decode response from {response.request.url.path}") from e


async def api_request(
    conn: ApiConnection,
    method: str,
    path: str,
    *,
    token: Optional[str] = None,
    json: Any = None,
    allow_statuses: tuple[int, ...] = (),
) -> ApiResponse:
    """Issue one request and normalize its outcome.

    Transport errors and undecodable bodies become ``NetworkFailure``;
    non-2xx answers become ``ServerRejected`` unless listed in
    ``allow_statuses``.
    """

    headers = {"Accept": "application/json", "Content-Type": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"

    try:
        async with conn.connect() as client:
            response = await client.request(method, path, headers=headers, json=json)
    except httpx.HTTPError as e:
        log.warning("http.request_failed", method=method, path=path, error=str(e))
        raise NetworkFailure("Network error. Please try again later.") from e

    if response.is_success or response.status_code in allow_statuses:
        return ApiResponse(status=response.status_code, body=_decode(response))

    try:
        body = _decode(response)
    except NetworkFailure:
        body = None
    message = _error_message(body)
    log.info("http.request_rejected", method=method, path=path, status=response.status_code, message=message)
    raise ServerRejected(response.status_code, message)


def unwrap_data(body: Any) -> Any:
    """Accept both bare payloads and ``{"data": ...}`` envelopes."""
    if isinstance(body, dict) and "data" in body:
        return body["data"]
    return body

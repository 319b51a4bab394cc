from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for the attendance client."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login/signup fails or no credential is available."""


class PreconditionViolation(DomainError):
    """Raised when an operation is invoked in a state that does not allow it.

    This is a caller bug (the UI should have disabled the action), not a
    user-facing condition.
    """


class NetworkFailure(DomainError):
    """Raised when the transport could not complete the request."""


class ServerRejected(DomainError):
    """Raised when the server answered with a non-2xx status."""

    def __init__(self, status: int, message: Optional[str] = None):
        self.status = int(status)
        self.message = message or f"Request failed with status {status}"
        super().__init__(self.message)

"""
Authentication and profile error taxonomy.

Every error carries the HTTP status and the client-facing message it maps
to.  ``api.errors`` turns them into the ``{success: false, message}``
envelope.
"""

from __future__ import annotations

from typing import Optional


class AuthError(Exception):
    """Base class for all errors surfaced to API clients."""

    status_code: int = 500
    message: str = "Server error"

    def __init__(self, message: Optional[str] = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MissingCredentials(AuthError):
    status_code = 400
    message = "Identifier and secret are required"


class InvalidCredentials(AuthError):
    """Raised for unknown identifiers and wrong secrets alike."""

    status_code = 401
    message = "Invalid credentials"


class StoreUnavailable(AuthError):
    status_code = 500
    message = "Database connection not available"


class TokenMissing(AuthError):
    status_code = 401
    message = "Access token required"


class TokenInvalid(AuthError):
    """Raised for forged, malformed and expired tokens alike."""

    status_code = 403
    message = "Invalid or expired token"


class ValidationError(AuthError):
    status_code = 400
    message = "Invalid request"


class NotFound(AuthError):
    status_code = 404
    message = "User not found"

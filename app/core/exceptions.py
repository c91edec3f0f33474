"""
Application error taxonomy.

Services raise these exceptions; the handlers registered in ``app.main``
turn them into the standard error envelope::

    {"success": false, "error": "<message>", "timestamp": "...", "details": [...]}

Example:
    from app.core.exceptions import NotFoundError

    registration = crud.registration.get(db, id=registration_id)
    if not registration:
        raise NotFoundError("Registration not found")
"""

from typing import Any, List, Optional


class AppError(Exception):
    """Base application error carrying an HTTP status code."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[List[Any]] = None,
    ):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(AppError):
    """400 - malformed, missing or out-of-range input."""

    status_code = 400
    default_message = "Validation failed"


class AuthError(AppError):
    """401 - missing/expired session or bad credentials."""

    status_code = 401
    default_message = "Authentication required"


class Unauthenticated(AuthError):
    default_message = "Authentication required"


class SessionExpired(AuthError):
    default_message = "Session expired"


class InvalidCredentials(AuthError):
    default_message = "Invalid credentials"


class NotFoundError(AppError):
    """404 - the requested entity does not exist."""

    status_code = 404
    default_message = "Not found"


class InternalError(AppError):
    """500 - storage or unexpected failure. Message is safe for clients."""

    status_code = 500
    default_message = "Internal server error"


class InternalQueryError(InternalError):
    """A registration query failed; ``cause`` holds the driver message."""

    def __init__(self, message: Optional[str] = None, cause: Optional[str] = None):
        super().__init__(message)
        self.cause = cause

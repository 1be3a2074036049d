"""Application error taxonomy.

Services raise these; the handlers registered in main.py turn them
into JSON responses of the form {"message": ...}. Nothing else about
an exception crosses the HTTP boundary.
"""

from typing import Optional


class AppError(Exception):
    """Base class for errors that map to a client-facing HTTP status."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"message": self.message}


class ValidationError(AppError):
    """Bad client input. `errors` lists per-field problems when known."""

    status_code = 400
    default_message = "Invalid request"

    def __init__(
        self, message: Optional[str] = None, errors: Optional[list[dict]] = None
    ):
        super().__init__(message)
        self.errors = errors

    def to_dict(self) -> dict:
        if self.errors is None:
            return {"message": self.message}
        return {"message": self.message, "errors": self.errors}


class Unauthenticated(AppError):
    """Missing, invalid, or expired session token.

    `reason` is one of "none", "invalid", "expired".
    """

    status_code = 401
    default_message = "Authentication required"

    def __init__(self, message: Optional[str] = None, reason: str = "none"):
        super().__init__(message)
        self.reason = reason

    def to_dict(self) -> dict:
        return {"message": self.message, "reason": self.reason}


class Forbidden(AppError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(AppError):
    status_code = 404
    default_message = "Not found"


class Conflict(AppError):
    status_code = 409
    default_message = "Conflict"

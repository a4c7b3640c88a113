"""Application error taxonomy.

Services raise these; the API layer maps each kind to an HTTP status and a
stable ``{"error": ..., "message": ...}`` body.
"""

from typing import Any


class AppError(Exception):
    """Base class for errors that carry an HTTP status."""

    status_code: int = 500
    title: str = "Internal server error"
    default_message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: str | None = None,
        *,
        title: str | None = None,
        details: list[dict[str, Any]] | None = None,
    ):
        self.message = message or self.default_message
        if title is not None:
            self.title = title
        self.details = details
        super().__init__(self.message)

    @property
    def headers(self) -> dict[str, str] | None:
        return None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.title, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationFailed(AppError):
    status_code = 400
    title = "Validation failed"
    default_message = "The request contains invalid fields"


class BadInput(AppError):
    status_code = 400
    title = "Bad input"
    default_message = "The request could not be processed"


class Unauthorized(AppError):
    status_code = 401
    title = "Unauthorized"
    default_message = "Authentication is required"

    @property
    def headers(self) -> dict[str, str]:
        return {"WWW-Authenticate": "Bearer"}


class Forbidden(AppError):
    status_code = 403
    title = "Access denied"
    default_message = "You do not have access to this resource"


class NotFound(AppError):
    status_code = 404
    title = "Not found"
    default_message = "The requested resource does not exist"


class Conflict(AppError):
    status_code = 409
    title = "Conflict"
    default_message = "The resource already exists"


class Fatal(AppError):
    """Storage or infrastructure failure; the request is aborted, never retried."""

    status_code = 503
    title = "Service unavailable"
    default_message = "The service is temporarily unavailable"

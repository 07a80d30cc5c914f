"""Error body format and error codes.

Successful responses are the bare resource (a task, a list of tasks, a user).
Failures carry a flat body with the message at the top level.
"""

from pydantic import BaseModel, Field


class APIError(BaseModel):
    """Body of every error response."""

    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[str] | None = Field(None, description="Individual validation messages")


def error_body(code: str, message: str, details: list[str] | None = None) -> dict:
    """Serialize an error, leaving out details when there are none."""
    return APIError(code=code, message=message, details=details).model_dump(
        mode="json", exclude_none=True
    )


class ErrorCodes:
    """Standard error codes for consistent error handling."""

    # Authentication & Authorization
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    FORBIDDEN = "FORBIDDEN"

    # Resource Errors
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"

    # Validation Errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Infrastructure
    INTERNAL_ERROR = "INTERNAL_ERROR"

"""Global exception handlers for FastAPI.

Maps the domain exception taxonomy to HTTP status codes. Response bodies carry
only a short message; internal details are logged, never returned.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from api.base import error_body, ErrorCodes
from auth.exceptions import AuthenticationError, InvalidCredentialsError
from core.exceptions import (
    ConflictError,
    DomainError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_DOMAIN_STATUS = {
    ValidationError: (400, ErrorCodes.VALIDATION_ERROR),
    ForbiddenError: (403, ErrorCodes.FORBIDDEN),
    NotFoundError: (404, ErrorCodes.NOT_FOUND),
    ConflictError: (409, ErrorCodes.ALREADY_EXISTS),
}

_HTTP_CODES = {
    401: ErrorCodes.NOT_AUTHENTICATED,
    403: ErrorCodes.FORBIDDEN,
    404: ErrorCodes.NOT_FOUND,
    409: ErrorCodes.ALREADY_EXISTS,
}


def _json_error(
    status_code: int,
    code: str,
    message: str,
    details: list[str] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        headers=headers,
        content=error_body(code, message, details=details),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the app."""

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        for exc_type, (status_code, code) in _DOMAIN_STATUS.items():
            if isinstance(exc, exc_type):
                break
        else:
            status_code, code = 400, ErrorCodes.VALIDATION_ERROR

        details = exc.errors if isinstance(exc, ValidationError) and len(exc.errors) > 1 else None
        return _json_error(status_code, code, str(exc), details=details)

    @app.exception_handler(AuthenticationError)
    async def authentication_error_handler(request: Request, exc: AuthenticationError):
        if isinstance(exc, InvalidCredentialsError):
            return _json_error(
                401, ErrorCodes.INVALID_CREDENTIALS, "Invalid credentials"
            )
        return _json_error(
            401,
            ErrorCodes.NOT_AUTHENTICATED,
            "Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        details = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        ]
        return _json_error(
            400, ErrorCodes.VALIDATION_ERROR, "Invalid request", details=details
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        code = _HTTP_CODES.get(exc.status_code, ErrorCodes.VALIDATION_ERROR)
        if exc.status_code >= 500:
            code = ErrorCodes.INTERNAL_ERROR
        return _json_error(
            exc.status_code, code, str(exc.detail), headers=exc.headers
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception")
        return _json_error(
            500, ErrorCodes.INTERNAL_ERROR, "An internal error occurred"
        )

"""Security middleware for FastAPI - bearer token verification and user context."""

import ipaddress

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from auth.service import AuthService
from auth.exceptions import AuthenticationError
from api.base import error_body, ErrorCodes
from utils.user_context import set_current_user_id, clear_current_user_id


def get_client_ip(request: Request) -> str | None:
    """Extract valid IP address from request, or None if invalid."""
    if not request.client:
        return None
    host = request.client.host
    try:
        ipaddress.ip_address(host)
        return host
    except ValueError:
        return None


def _unauthorized(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=401,
        headers={"WWW-Authenticate": "Bearer"},
        content=error_body(ErrorCodes.NOT_AUTHENTICATED, message),
    )


class AuthMiddleware(BaseHTTPMiddleware):
    """Middleware that verifies the bearer token and sets user context.

    For protected routes:
    1. Extracts token from 'Authorization: Bearer <token>'
    2. Resolves it to an existing user via AuthService.authenticate
    3. Sets user and user_id in request.state and user context (for audit)
    4. Clears context after request completes

    Public paths bypass authentication entirely.
    """

    PUBLIC_PATHS = [
        "/auth/register",
        "/auth/login",
        "/health",
        "/docs",
        "/redoc",
        "/openapi.json",
    ]

    def __init__(self, app, auth_service: AuthService):
        super().__init__(app)
        self._auth_service = auth_service

    def _is_public_path(self, path: str) -> bool:
        """Check if path is in public paths list."""
        for public_path in self.PUBLIC_PATHS:
            if path == public_path or path.startswith(public_path + "/"):
                return True
        return False

    @staticmethod
    def _extract_bearer_token(request: Request) -> str | None:
        header = request.headers.get("Authorization")
        if not header:
            return None
        scheme, _, token = header.partition(" ")
        if scheme.lower() != "bearer":
            return None
        token = token.strip()
        return token or None

    async def dispatch(self, request: Request, call_next):
        """Process request through middleware."""
        path = request.url.path

        # Skip auth for public paths and CORS preflight
        if self._is_public_path(path) or request.method == "OPTIONS":
            return await call_next(request)

        token = self._extract_bearer_token(request)
        if token is None:
            return _unauthorized("Authentication required")

        # Expired and invalid tokens get the same response
        try:
            user = self._auth_service.authenticate(token, ip_address=get_client_ip(request))
        except AuthenticationError:
            return _unauthorized("Invalid or expired token")

        set_current_user_id(user.id)
        request.state.user_id = user.id
        request.state.user = user

        try:
            response = await call_next(request)
            return response
        finally:
            # Always clear context
            clear_current_user_id()

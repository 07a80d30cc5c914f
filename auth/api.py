"""HTTP routes for authentication."""

from typing import Any

from fastapi import APIRouter, Body, Request

from auth.config import AuthConfig
from auth.security_middleware import get_client_ip
from auth.service import AuthService
from auth.validation import validate_login, validate_registration


def _profile(request: Request) -> dict:
    # AuthMiddleware loads the user from storage on every request
    return request.state.user.model_dump(mode="json", by_alias=True)


def create_auth_router(auth_service: AuthService, config: AuthConfig) -> APIRouter:
    """Create auth router with injected service."""
    router = APIRouter(tags=["auth"])

    @router.post("/register", status_code=201)
    def register(request: Request, payload: Any = Body(None)):
        """Register a new user.

        Returns the created user without the password hash.
        ConflictError (409) if username or email is taken.
        """
        body = validate_registration(payload, config.password_min_length).unwrap()

        user = auth_service.register(
            username=body.username,
            email=body.email,
            password=body.password,
            ip_address=get_client_ip(request),
            user_agent=request.headers.get("User-Agent"),
        )

        return user.model_dump(mode="json", by_alias=True)

    @router.post("/login")
    def login(request: Request, payload: Any = Body(None)):
        """Exchange username (or email) and password for a bearer token.

        Unknown user and wrong password produce the same 401.
        """
        body = validate_login(payload).unwrap()

        result = auth_service.login(
            username_or_email=body.username_or_email,
            password=body.password,
            ip_address=get_client_ip(request),
            user_agent=request.headers.get("User-Agent"),
        )

        return result.model_dump(mode="json", by_alias=True)

    @router.get("/profile")
    def get_profile(request: Request):
        """Get the authenticated caller's identity.

        Requires authentication (middleware sets request.state.user).
        """
        return _profile(request)

    return router


def create_users_router() -> APIRouter:
    """Router for /users. Serves the same profile as /auth/profile."""
    router = APIRouter(tags=["users"])

    @router.get("/profile")
    def get_profile(request: Request):
        return _profile(request)

    return router

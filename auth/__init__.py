"""Authentication and authorization modules."""

from auth.exceptions import (
    AuthError,
    AuthenticationError,
    InvalidCredentialsError,
    InvalidTokenError,
)
from auth.types import (
    User,
    UserRecord,
    RegisterRequest,
    LoginRequest,
    LoginResult,
    TokenClaims,
)
from auth.config import AuthConfig
from auth.database import AuthDatabase
from auth.passwords import PasswordHasher
from auth.tokens import TokenManager
from auth.security_logger import SecurityLogger, SecurityEvent
from auth.service import AuthService
from auth.security_middleware import AuthMiddleware
from auth.api import create_auth_router, create_users_router

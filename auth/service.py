"""Authentication service - registration, password login, and token verification."""

import logging

from auth.config import AuthConfig
from auth.database import AuthDatabase
from auth.exceptions import InvalidCredentialsError, InvalidTokenError
from auth.passwords import PasswordHasher
from auth.security_logger import SecurityLogger, SecurityEvent
from auth.tokens import TokenManager
from auth.types import LoginResult, User, UserRecord
from core.exceptions import ConflictError

logger = logging.getLogger(__name__)


class AuthService:
    """Orchestrates password authentication.

    Handles:
    - Registration (uniqueness, hashing)
    - Login (with enumeration protection)
    - Bearer token verification for the auth middleware
    """

    def __init__(
        self,
        config: AuthConfig,
        auth_db: AuthDatabase,
        token_manager: TokenManager,
        password_hasher: PasswordHasher,
        security_logger: SecurityLogger,
    ):
        self._config = config
        self._auth_db = auth_db
        self._token_manager = token_manager
        self._password_hasher = password_hasher
        self._security_logger = security_logger

    def register(
        self,
        username: str,
        email: str,
        password: str,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> User:
        """Create a new user.

        Input shape (required fields, email format, password length) is
        checked at the HTTP boundary by auth.validation.validate_registration.

        Raises:
            ConflictError: Username or email already registered.
        """
        email = email.lower().strip()

        conflict = None
        if self._auth_db.get_user_by_username(username) is not None:
            conflict = "Username already exists"
        elif self._auth_db.get_user_by_email(email) is not None:
            conflict = "Email already exists"

        if conflict:
            self._security_logger.log(
                SecurityEvent.REGISTRATION_REJECTED,
                username=username,
                ip_address=ip_address,
                user_agent=user_agent,
                details={"reason": conflict},
            )
            raise ConflictError(conflict)

        password_hash = self._password_hasher.hash(password)
        record = self._auth_db.create_user(username, email, password_hash)

        self._security_logger.log(
            SecurityEvent.USER_REGISTERED,
            username=record.username,
            user_id=record.id,
            ip_address=ip_address,
            user_agent=user_agent,
        )

        return record.to_public()

    def login(
        self,
        username_or_email: str,
        password: str,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> LoginResult:
        """Verify credentials and issue a bearer token.

        Flow:
        1. Look up user by username; fall back to email if the value looks like one
        2. Verify password (against a dummy hash if no user, to equalize timing)
        3. Issue token
        4. Log security event

        Raises:
            InvalidCredentialsError: Unknown user or wrong password. The two
                cases are indistinguishable to the caller.
        """
        user = self._find_user(username_or_email)

        if user is None:
            self._password_hasher.dummy_verify(password)
            self._security_logger.log(
                SecurityEvent.LOGIN_FAILED,
                username=username_or_email,
                ip_address=ip_address,
                user_agent=user_agent,
                details={"reason": "user_not_found"},
            )
            raise InvalidCredentialsError("Invalid credentials")

        if not self._password_hasher.verify(password, user.password_hash):
            self._security_logger.log(
                SecurityEvent.LOGIN_FAILED,
                username=user.username,
                user_id=user.id,
                ip_address=ip_address,
                user_agent=user_agent,
                details={"reason": "bad_password"},
            )
            raise InvalidCredentialsError("Invalid credentials")

        token = self._token_manager.issue(user.id, user.username)

        self._security_logger.log(
            SecurityEvent.LOGIN_SUCCEEDED,
            username=user.username,
            user_id=user.id,
            ip_address=ip_address,
            user_agent=user_agent,
        )

        return LoginResult(token=token, user=user.to_public())

    def authenticate(self, token: str, ip_address: str | None = None) -> User:
        """Resolve a bearer token to an existing user.

        Performs exactly one user lookup.

        Raises:
            InvalidTokenError: Token invalid or expired, or the user it names
                no longer exists.
        """
        try:
            claims = self._token_manager.verify(token)
        except InvalidTokenError:
            self._security_logger.log(
                SecurityEvent.TOKEN_REJECTED,
                ip_address=ip_address,
                details={"reason": "invalid_token"},
            )
            raise

        user = self._auth_db.get_user_by_id(claims.user_id)
        if user is None:
            self._security_logger.log(
                SecurityEvent.TOKEN_REJECTED,
                user_id=claims.user_id,
                ip_address=ip_address,
                details={"reason": "user_not_found"},
            )
            raise InvalidTokenError("Invalid or expired token")

        return user.to_public()

    def _find_user(self, username_or_email: str) -> UserRecord | None:
        user = self._auth_db.get_user_by_username(username_or_email)
        if user is None and "@" in username_or_email:
            user = self._auth_db.get_user_by_email(username_or_email)
        return user

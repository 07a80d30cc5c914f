"""Bearer token issue and verification.

Tokens are HS256 JWTs carrying the user id in ``sub``. They are stateless:
nothing is stored server-side, and validity is decided purely by signature,
issuer, and expiry at verification time. There is no revocation.
"""

import logging
from datetime import timedelta

import jwt as pyjwt

from auth.config import AuthConfig
from auth.exceptions import InvalidTokenError
from auth.types import TokenClaims
from utils.timezone import now_utc, to_epoch, from_epoch

logger = logging.getLogger(__name__)


class TokenManager:
    """Signs and verifies bearer tokens."""

    def __init__(self, secret: str, config: AuthConfig):
        if not secret:
            raise ValueError("Token signing secret is required")
        self._secret = secret
        self._config = config

    def issue(self, user_id: int, username: str | None = None) -> str:
        """Create a signed token for user, valid for token_expiry_minutes."""
        now = now_utc()
        expires_at = now + timedelta(minutes=self._config.token_expiry_minutes)

        payload = {
            "sub": str(user_id),
            "iss": self._config.token_issuer,
            "iat": to_epoch(now),
            "exp": to_epoch(expires_at),
        }
        if username is not None:
            payload["username"] = username

        return pyjwt.encode(payload, self._secret, algorithm=self._config.token_algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Decode and validate token.

        Raises:
            InvalidTokenError: Malformed, bad signature, wrong issuer, expired,
                or missing required claims. The cause is logged, not surfaced.
        """
        try:
            payload = pyjwt.decode(
                token,
                self._secret,
                algorithms=[self._config.token_algorithm],
                issuer=self._config.token_issuer,
                options={"require": ["exp", "iat", "sub"]},
            )
        except pyjwt.ExpiredSignatureError:
            logger.info("Rejected expired token")
            raise InvalidTokenError("Invalid or expired token")
        except pyjwt.InvalidTokenError as e:
            logger.info(f"Rejected invalid token: {type(e).__name__}")
            raise InvalidTokenError("Invalid or expired token")

        try:
            user_id = int(payload["sub"])
        except (TypeError, ValueError):
            logger.info("Rejected token with non-numeric subject")
            raise InvalidTokenError("Invalid or expired token")

        return TokenClaims(
            user_id=user_id,
            username=payload.get("username"),
            issued_at=from_epoch(payload["iat"]),
            expires_at=from_epoch(payload["exp"]),
        )

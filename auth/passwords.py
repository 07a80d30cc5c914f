"""Password hashing with bcrypt.

Passwords are pre-hashed with SHA-256 (base64-encoded, 44 bytes) so inputs of
any length fit inside bcrypt's 72-byte limit and never contain NUL bytes.
"""

import base64
import hashlib
import logging

import bcrypt

logger = logging.getLogger(__name__)


def _prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


class PasswordHasher:
    """One-way password hashing and verification."""

    def __init__(self, rounds: int = 12):
        self._rounds = rounds
        self._dummy_hash: bytes | None = None

    def hash(self, password: str) -> str:
        """Hash password with a fresh salt. Returns the bcrypt string."""
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(_prehash(password), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Check password against a stored hash. Malformed hashes never verify."""
        try:
            return bcrypt.checkpw(_prehash(password), password_hash.encode("utf-8"))
        except ValueError:
            logger.warning("Stored password hash is malformed; treating as mismatch")
            return False

    def dummy_verify(self, password: str) -> None:
        """Spend the same work as verify() when there is no user to check against.

        Keeps response timing for unknown usernames in line with wrong passwords.
        """
        if self._dummy_hash is None:
            self._dummy_hash = bcrypt.hashpw(b"dummy", bcrypt.gensalt(rounds=self._rounds))
        bcrypt.checkpw(_prehash(password), self._dummy_hash)

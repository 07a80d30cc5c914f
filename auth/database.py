"""Database operations for authentication (users table).

Rows are returned as UserRecord, which carries the password hash. Only the
auth package sees UserRecord; everything else receives the public User.
"""

import logging

import psycopg2.errors

from clients.postgres_client import PostgresClient
from auth.types import UserRecord
from core.exceptions import ConflictError
from utils.timezone import now_utc

logger = logging.getLogger(__name__)

_USER_COLUMNS = "id, username, email, password_hash, created_at"


class AuthDatabase:
    """Database operations for authentication."""

    def __init__(self, postgres: PostgresClient):
        self._db = postgres

    def get_user_by_username(self, username: str) -> UserRecord | None:
        """Find user by exact username."""
        row = self._db.execute_single(
            f"SELECT {_USER_COLUMNS} FROM users WHERE username = %s",
            (username,),
        )
        if row is None:
            return None
        return UserRecord.model_validate(row)

    def get_user_by_email(self, email: str) -> UserRecord | None:
        """Find user by email (case-insensitive)."""
        row = self._db.execute_single(
            f"SELECT {_USER_COLUMNS} FROM users WHERE email = lower(%s)",
            (email,),
        )
        if row is None:
            return None
        return UserRecord.model_validate(row)

    def get_user_by_id(self, user_id: int) -> UserRecord | None:
        """Find user by ID."""
        row = self._db.execute_single(
            f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s",
            (user_id,),
        )
        if row is None:
            return None
        return UserRecord.model_validate(row)

    def create_user(self, username: str, email: str, password_hash: str) -> UserRecord:
        """Insert a new user (email lowercased).

        Raises:
            ConflictError: Username or email already taken. Covers the race
                where another registration commits between check and insert.
        """
        try:
            rows = self._db.execute_returning(
                f"""INSERT INTO users (username, email, password_hash, created_at)
                   VALUES (%s, lower(%s), %s, %s)
                   RETURNING {_USER_COLUMNS}""",
                (username, email, password_hash, now_utc()),
            )
        except psycopg2.errors.UniqueViolation as e:
            constraint = getattr(e.diag, "constraint_name", None) or ""
            logger.info(f"Unique violation on user insert: {constraint}")
            if "email" in constraint:
                raise ConflictError("Email already exists")
            raise ConflictError("Username already exists")

        return UserRecord.model_validate(rows[0])

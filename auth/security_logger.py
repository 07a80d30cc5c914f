"""Security event logging for auth audit trail.

Append-only log to the security_events table. Events are also echoed to the
module logger so they show up in process logs without a database query.
"""

import logging
from enum import Enum
from typing import Any

from psycopg2.extras import Json

from clients.postgres_client import PostgresClient
from utils.timezone import now_utc

logger = logging.getLogger(__name__)


class SecurityEvent(Enum):
    """Auth security event types."""

    USER_REGISTERED = "user_registered"
    REGISTRATION_REJECTED = "registration_rejected"
    LOGIN_SUCCEEDED = "login_succeeded"
    LOGIN_FAILED = "login_failed"
    TOKEN_REJECTED = "token_rejected"


class SecurityLogger:
    """Append-only security event logger."""

    def __init__(self, postgres: PostgresClient):
        self._db = postgres

    def log(
        self,
        event: SecurityEvent,
        username: str | None = None,
        user_id: int | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Log security event to database."""
        logger.info(f"Security event {event.value} user_id={user_id} ip={ip_address}")

        self._db.execute_returning(
            """INSERT INTO security_events
               (event_type, username, user_id, ip_address, user_agent, details, created_at)
               VALUES (%s, %s, %s, %s, %s, %s, %s)
               RETURNING id""",
            (
                event.value,
                username,
                user_id,
                ip_address,
                user_agent,
                Json(details) if details else None,
                now_utc(),
            ),
        )

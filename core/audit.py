"""
Append-only audit trail for task mutations.

Entries are attributed to the user in the current request context, which
AuthMiddleware sets after resolving the bearer token.
"""

from enum import Enum
from typing import Any

from psycopg2.extras import Json

from clients.postgres_client import PostgresClient
from utils.user_context import get_current_user_id
from utils.timezone import now_utc


class AuditAction(Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


def compute_changes(
    before: dict[str, Any],
    after: dict[str, Any],
    ignored: frozenset[str] = frozenset({"updated_at"}),
) -> dict[str, dict[str, Any]]:
    """Field-by-field diff as {field: {"old": ..., "new": ...}}, keys sorted."""
    return {
        key: {"old": before.get(key), "new": after.get(key)}
        for key in sorted(before.keys() | after.keys())
        if key not in ignored and before.get(key) != after.get(key)
    }


class AuditLogger:
    """
    Writes audit_log rows.

    changes must be JSON-serializable, so pass model_dump(mode="json") output:
    {"created": {...}} for CREATE, a compute_changes() diff for UPDATE and
    {"deleted": {...}} for DELETE.
    """

    def __init__(self, postgres: PostgresClient):
        self.postgres = postgres

    def log_change(
        self,
        entity_type: str,
        entity_id: int,
        action: AuditAction,
        changes: dict[str, Any],
    ) -> None:
        """
        Record one change by the current user.

        Raises:
            RuntimeError: If called outside an authenticated user context.
        """
        self.postgres.execute(
            "INSERT INTO audit_log (user_id, entity_type, entity_id, action, changes, created_at) "
            "VALUES (%s, %s, %s, %s, %s, %s)",
            (get_current_user_id(), entity_type, entity_id, action.value, Json(changes), now_utc()),
        )

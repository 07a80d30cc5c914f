"""Tests for the task audit trail."""

from unittest.mock import Mock

import pytest
from psycopg2.extras import Json

from clients.postgres_client import PostgresClient
from core.audit import AuditLogger, AuditAction, compute_changes


@pytest.fixture
def mock_db():
    return Mock(spec=PostgresClient)


@pytest.fixture
def audit(mock_db):
    return AuditLogger(mock_db)


class TestAuditAction:
    """Tests for AuditAction enum."""

    def test_has_create_update_delete(self):
        """AuditAction has required values."""
        assert AuditAction.CREATE.value == "create"
        assert AuditAction.UPDATE.value == "update"
        assert AuditAction.DELETE.value == "delete"


class TestComputeChanges:
    """Tests for compute_changes utility function."""

    def test_detects_changed_fields(self):
        """Different values for same key detected."""
        old = {"title": "Buy milk", "status": "PENDING"}
        new = {"title": "Buy milk", "status": "COMPLETED"}

        changes = compute_changes(old, new)

        assert changes == {"status": {"old": "PENDING", "new": "COMPLETED"}}

    def test_detects_added_and_removed_fields(self):
        changes = compute_changes({"description": "x"}, {"due_date": "2024-03-15"})

        assert changes["description"] == {"old": "x", "new": None}
        assert changes["due_date"] == {"old": None, "new": "2024-03-15"}

    def test_excludes_updated_at_by_default(self):
        """updated_at not reported as change."""
        old = {"title": "a", "updated_at": "2024-01-01T00:00:00Z"}
        new = {"title": "a", "updated_at": "2024-01-02T00:00:00Z"}

        assert compute_changes(old, new) == {}

    def test_custom_ignored_fields(self):
        old = {"title": "a", "internal": 1}
        new = {"title": "b", "internal": 2}

        changes = compute_changes(old, new, ignored=frozenset({"updated_at", "internal"}))

        assert list(changes) == ["title"]

    def test_keys_sorted(self):
        changes = compute_changes({"title": "a", "description": "a"}, {"title": "b", "description": "b"})

        assert list(changes) == ["description", "title"]


class TestAuditLogger:
    """Tests for AuditLogger class."""

    def test_log_change_inserts_entry(self, audit, mock_db, authenticated_context):
        audit.log_change(
            entity_type="task",
            entity_id=7,
            action=AuditAction.CREATE,
            changes={"created": {"title": "Buy milk"}},
        )

        sql, params = mock_db.execute.call_args.args
        assert "INSERT INTO audit_log" in sql
        assert params[:4] == (1, "task", 7, "create")
        assert isinstance(params[4], Json)
        assert params[4].adapted == {"created": {"title": "Buy milk"}}

    def test_log_change_uses_context_user(self, audit, mock_db, authenticated_context, test_user_id):
        audit.log_change("task", 7, AuditAction.DELETE, {"deleted": {}})

        assert mock_db.execute.call_args.args[1][0] == test_user_id

    def test_log_change_without_user_raises(self, audit):
        with pytest.raises(RuntimeError):
            audit.log_change("task", 7, AuditAction.CREATE, {"created": {}})

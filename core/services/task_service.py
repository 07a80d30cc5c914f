"""
Task service: calendar-filtered listing and create/read/update/delete.

Ownership is not checked here except in listing, which is always scoped to
one user. Single-task operations are addressed by id. The HTTP boundary
checks task.user_id against the requester after get(), so "not found" (404)
and "forbidden" (403) stay distinguishable.
"""

import logging

from clients.postgres_client import PostgresClient
from core.audit import AuditLogger, AuditAction, compute_changes
from core.date_range import DateFilter, resolve_date_range
from core.exceptions import NotFoundError
from core.models import Task, TaskCreate, TaskUpdate, TaskStatus
from utils.timezone import now_utc

logger = logging.getLogger(__name__)

_UPDATABLE_COLUMNS = {"title", "description", "status", "due_date"}

# NULL due dates follow PostgreSQL's default for ASC (NULLS LAST).
_LIST_ORDER = "ORDER BY due_date ASC, created_at DESC, id DESC"


class TaskService:
    """Service for task operations."""

    def __init__(self, postgres: PostgresClient, audit: AuditLogger):
        self.postgres = postgres
        self.audit = audit

    def list_for_user(self, user_id: int, date_filter: DateFilter | None = None) -> list[Task]:
        """
        List a user's tasks, optionally restricted to a calendar window.

        Args:
            user_id: Owner whose tasks are returned (never anyone else's)
            date_filter: day/month/year window; incomplete filters match all tasks

        Returns:
            Tasks ordered by due date ascending, then newest first.
        """
        conditions = ["user_id = %s"]
        params: list = [user_id]

        date_range = resolve_date_range(date_filter) if date_filter else None
        if date_range is not None:
            condition, range_params = date_range.sql_condition("due_date")
            conditions.append(condition)
            params.extend(range_params)

        rows = self.postgres.execute(
            f"""
            SELECT * FROM tasks
            WHERE {' AND '.join(conditions)}
            {_LIST_ORDER}
            """,
            tuple(params)
        )

        return [Task.model_validate(row) for row in rows]

    def create(self, user_id: int, data: TaskCreate) -> Task:
        """
        Create a new task owned by user_id.

        Args:
            user_id: Owner of the new task
            data: Validated creation data (title already trimmed and non-empty)

        Returns:
            Created task in PENDING status
        """
        now = now_utc()

        row = self.postgres.execute_returning(
            """
            INSERT INTO tasks (
                user_id, title, description,
                status, due_date,
                created_at, updated_at
            ) VALUES (
                %s, %s, %s,
                %s, %s,
                %s, %s
            )
            RETURNING *
            """,
            (
                user_id, data.title, data.description,
                TaskStatus.PENDING.value, data.due_date,
                now, now
            )
        )[0]

        task = Task.model_validate(row)

        self.audit.log_change(
            entity_type="task",
            entity_id=task.id,
            action=AuditAction.CREATE,
            changes={"created": data.model_dump(mode="json", exclude_none=True)},
        )

        return task

    def get(self, task_id: int) -> Task:
        """
        Get task by ID.

        Raises:
            NotFoundError: If no task has this id.
        """
        row = self.postgres.execute_single(
            "SELECT * FROM tasks WHERE id = %s",
            (task_id,)
        )

        if row is None:
            raise NotFoundError("Task not found")

        return Task.model_validate(row)

    def update(self, task_id: int, data: TaskUpdate) -> Task:
        """
        Apply the fields present in data. Last write wins.

        Returns:
            Updated task (unchanged task if data carries no fields)

        Raises:
            NotFoundError: If the task does not exist, including when it is
                deleted between the read and the write.
        """
        current = self.get(task_id)

        updates = {k: v for k, v in data.changes().items() if k in _UPDATABLE_COLUMNS}
        if not updates:
            return current

        set_parts = []
        params = []
        for field, value in updates.items():
            set_parts.append(f"{field} = %s")
            params.append(value)

        set_parts.append("updated_at = %s")
        params.append(now_utc())
        params.append(task_id)

        rows = self.postgres.execute_returning(
            f"""
            UPDATE tasks
            SET {', '.join(set_parts)}
            WHERE id = %s
            RETURNING *
            """,
            tuple(params)
        )

        if not rows:
            raise NotFoundError("Task not found")

        updated = Task.model_validate(rows[0])

        changes = compute_changes(
            current.model_dump(mode="json"),
            updated.model_dump(mode="json")
        )
        if changes:
            self.audit.log_change(
                entity_type="task",
                entity_id=task_id,
                action=AuditAction.UPDATE,
                changes=changes,
            )

        return updated

    def remove(self, task_id: int) -> None:
        """
        Permanently delete a task. Deleting a missing id is a no-op.
        """
        rows = self.postgres.execute_returning(
            "DELETE FROM tasks WHERE id = %s RETURNING *",
            (task_id,)
        )

        if not rows:
            logger.info(f"Delete of task {task_id} matched no rows")
            return

        deleted = Task.model_validate(rows[0])
        self.audit.log_change(
            entity_type="task",
            entity_id=task_id,
            action=AuditAction.DELETE,
            changes={"deleted": deleted.model_dump(mode="json")},
        )

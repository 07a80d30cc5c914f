"""Tests for task domain models."""

from datetime import date

import pytest
from pydantic import ValidationError

from core.models import Task, TaskCreate, TaskUpdate, TaskStatus


class TestTaskCreate:
    """TaskCreate normalizes free text and never carries a status."""

    def test_blank_description_becomes_none(self):
        assert TaskCreate(title="t", description="   ").description is None

    def test_description_trimmed(self):
        assert TaskCreate(title="t", description="  2 litres ").description == "2 litres"

    def test_accepts_snake_case_names(self):
        assert TaskCreate(title="t", due_date="2024-03-15").due_date == date(2024, 3, 15)

    def test_whitespace_title_rejected(self):
        with pytest.raises(ValidationError, match="Title is required"):
            TaskCreate(title="   ")


class TestTaskUpdate:
    """Only provided fields are reported as changes."""

    def test_changes_only_provided_fields(self):
        update = TaskUpdate.model_validate({"title": " New ", "dueDate": None})

        assert update.changes() == {"title": "New", "due_date": None}

    def test_status_reported_as_plain_value(self):
        update = TaskUpdate.model_validate({"status": "COMPLETED"})

        assert update.changes() == {"status": "COMPLETED"}

    def test_omitted_title_is_not_a_change(self):
        update = TaskUpdate.model_validate({"description": "x"})

        assert "title" not in update.changes()

    def test_blank_description_clears_it(self):
        update = TaskUpdate.model_validate({"description": "  "})

        assert update.changes() == {"description": None}

    def test_unknown_keys_ignored(self):
        update = TaskUpdate.model_validate({"userId": 2, "id": 99})

        assert update.changes() == {}

    def test_enum_instance_accepted(self):
        assert TaskUpdate(status=TaskStatus.PENDING).status == TaskStatus.PENDING


class TestTask:
    """Full entity serialization."""

    def test_from_row(self, task_row):
        task = Task.model_validate(task_row(status="COMPLETED"))

        assert task.status == TaskStatus.COMPLETED
        assert task.due_date == date(2024, 3, 15)

    def test_wire_format_is_camel_case(self, task_row):
        data = Task.model_validate(task_row()).model_dump(mode="json", by_alias=True)

        assert data == {
            "id": 1,
            "userId": 1,
            "title": "Buy milk",
            "description": None,
            "status": "PENDING",
            "dueDate": "2024-03-15",
            "createdAt": "2024-01-01T12:00:00Z",
            "updatedAt": "2024-01-01T12:00:00Z",
        }

    def test_null_due_date(self, task_row):
        assert Task.model_validate(task_row(due_date=None)).due_date is None

    def test_rejects_unknown_status(self, task_row):
        with pytest.raises(ValidationError):
            Task.model_validate(task_row(status="DONE"))

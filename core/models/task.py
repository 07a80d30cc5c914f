"""Task domain models."""

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, field_validator, model_validator
from pydantic.alias_generators import to_camel


class TaskStatus(str, Enum):
    """Task lifecycle status."""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"


_VALID_STATUSES = ", ".join(s.value for s in TaskStatus)

_INPUT_CONFIG = {"alias_generator": to_camel, "populate_by_name": True}


def _blank_to_none(value: Any) -> Any:
    """Date inputs from HTML forms arrive as "" when cleared."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _trim_description(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class TaskCreate(BaseModel):
    """Data accepted when creating a task.

    No status field: new tasks are always PENDING, and any
    status in the payload is dropped with the other unknown keys.
    """

    title: str | None = None
    description: str | None = None
    due_date: date | None = None

    model_config = _INPUT_CONFIG

    @field_validator("title")
    @classmethod
    def trim_title(cls, value: str | None) -> str | None:
        return value.strip() if value is not None else None

    @field_validator("description")
    @classmethod
    def trim_description(cls, value: str | None) -> str | None:
        return _trim_description(value)

    @field_validator("due_date", mode="before")
    @classmethod
    def blank_due_date(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @model_validator(mode="after")
    def require_title(self) -> "TaskCreate":
        if not self.title:
            raise ValueError("Title is required")
        return self


class TaskUpdate(BaseModel):
    """Fields that can be changed on a task. Only fields present in the
    payload are applied; description and dueDate may be set to null."""

    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None
    due_date: date | None = None

    model_config = _INPUT_CONFIG

    @field_validator("title")
    @classmethod
    def trim_title(cls, value: str | None) -> str | None:
        return value.strip() if value is not None else None

    @field_validator("description")
    @classmethod
    def trim_description(cls, value: str | None) -> str | None:
        return _trim_description(value)

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, value: Any) -> Any:
        if value is None:
            return value
        try:
            return TaskStatus(value)
        except (ValueError, TypeError):
            raise ValueError(f"Status must be one of {_VALID_STATUSES}")

    @field_validator("due_date", mode="before")
    @classmethod
    def blank_due_date(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @model_validator(mode="after")
    def forbid_clearing_required(self) -> "TaskUpdate":
        if "title" in self.model_fields_set and not self.title:
            raise ValueError("Title is required")
        if "status" in self.model_fields_set and self.status is None:
            raise ValueError(f"Status must be one of {_VALID_STATUSES}")
        return self

    def changes(self) -> dict[str, Any]:
        """Provided fields keyed by column name, enums as plain values."""
        updates = {name: getattr(self, name) for name in self.model_fields_set}
        if updates.get("status") is not None:
            updates["status"] = updates["status"].value
        return updates


class Task(BaseModel):
    """Full task entity as stored."""

    id: int
    user_id: int
    title: str
    description: str | None
    status: TaskStatus
    due_date: date | None
    created_at: datetime
    updated_at: datetime

    model_config = {
        "from_attributes": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }
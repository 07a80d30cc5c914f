"""Core domain models."""

from core.models.task import Task, TaskCreate, TaskUpdate, TaskStatus

__all__ = [
    "Task", "TaskCreate", "TaskUpdate", "TaskStatus",
]

"""Task routes: calendar listing and per-task CRUD with ownership checks."""

from typing import Any

from fastapi import APIRouter, Body, Query, Request

from core.exceptions import ForbiddenError
from core.models import Task
from core.services.task_service import TaskService
from core.validation import validate_date_filter, validate_task_create, validate_task_update


def _dump(task: Task) -> dict:
    return task.model_dump(mode="json", by_alias=True)


def create_tasks_router(task_service: TaskService) -> APIRouter:
    """Create tasks router with injected service. Requires AuthMiddleware."""
    router = APIRouter(tags=["tasks"])

    def _owned_task(task_id: int, request: Request) -> Task:
        """Existence first (404), then ownership (403)."""
        task = task_service.get(task_id)
        if task.user_id != request.state.user_id:
            raise ForbiddenError("You do not have permission to access this task")
        return task

    @router.get("")
    def list_tasks(
        request: Request,
        year: int | None = Query(None),
        month: int | None = Query(None),
        day: int | None = Query(None),
        mode: str | None = Query(None, description="day, month or year (default day)"),
    ):
        """List the caller's tasks, filtered to a day, month or year of due dates."""
        date_filter = validate_date_filter(mode, year, month, day).unwrap()
        tasks = task_service.list_for_user(request.state.user_id, date_filter)
        return [_dump(t) for t in tasks]

    @router.get("/{task_id}")
    def get_task(request: Request, task_id: int):
        return _dump(_owned_task(task_id, request))

    @router.post("", status_code=201)
    def create_task(request: Request, payload: Any = Body(None)):
        """Create a task. Status is always PENDING."""
        data = validate_task_create(payload).unwrap()
        return _dump(task_service.create(request.state.user_id, data))

    @router.patch("/{task_id}")
    def update_task(request: Request, task_id: int, payload: Any = Body(None)):
        data = validate_task_update(payload).unwrap()
        _owned_task(task_id, request)
        return _dump(task_service.update(task_id, data))

    @router.delete("/{task_id}")
    def delete_task(request: Request, task_id: int):
        _owned_task(task_id, request)
        task_service.remove(task_id)
        return {"deleted": task_id}

    return router

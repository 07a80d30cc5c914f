"""
Boundary validation.

Each validate_* function takes raw request input and returns a
ValidationResult: either the parsed model, or the list of problems. Routers
call .unwrap() before handing input to a service, so services only ever see
well-formed data.
"""

from dataclasses import dataclass, field
from datetime import MAXYEAR
from typing import Any, Generic, TypeVar

import pydantic

from core.date_range import DateFilter, FilterMode, last_day_of_month
from core.exceptions import ValidationError
from core.models import TaskCreate, TaskUpdate

T = TypeVar("T")


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    """Outcome of validating one request input."""

    value: T | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> T:
        """Return the parsed value or raise ValidationError with all messages."""
        if self.errors:
            raise ValidationError("; ".join(self.errors), errors=list(self.errors))
        return self.value

    @classmethod
    def success(cls, value: T) -> "ValidationResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, *errors: str) -> "ValidationResult[T]":
        return cls(errors=list(errors))


def _messages(exc: pydantic.ValidationError) -> list[str]:
    """Flatten pydantic errors into short human-readable messages."""
    messages = []
    for err in exc.errors():
        # Messages raised by our own validators are already user-facing
        if err["msg"].startswith("Value error, "):
            messages.append(err["msg"].removeprefix("Value error, "))
            continue
        location = ".".join(str(part) for part in err["loc"]) or "body"
        messages.append(f"{location}: {err['msg']}")
    return messages


def parse_model(model: type[pydantic.BaseModel], payload: Any) -> ValidationResult:
    """Validate a JSON object body against model, collecting every problem."""
    if not isinstance(payload, dict):
        return ValidationResult.failure("Request body must be a JSON object")
    try:
        return ValidationResult.success(model.model_validate(payload))
    except pydantic.ValidationError as e:
        return ValidationResult.failure(*_messages(e))


def validate_task_create(payload: Any) -> ValidationResult[TaskCreate]:
    """Validate a create-task body. Title is trimmed and must be non-empty."""
    return parse_model(TaskCreate, payload)


def validate_task_update(payload: Any) -> ValidationResult[TaskUpdate]:
    """Validate a partial task update. Status must be PENDING or COMPLETED."""
    return parse_model(TaskUpdate, payload)


def validate_date_filter(
    mode: str | None,
    year: int | None,
    month: int | None,
    day: int | None,
) -> ValidationResult[DateFilter]:
    """
    Validate calendar query parameters.

    Mode defaults to day. Only the parts the mode uses are checked and kept:
    year mode ignores month and day, month mode ignores day. Missing parts are
    allowed (they disable filtering), but parts that are used must be able to
    form a real date.
    """
    try:
        filter_mode = FilterMode(mode) if mode else FilterMode.DAY
    except ValueError:
        valid = ", ".join(m.value for m in FilterMode)
        return ValidationResult.failure(f"Mode must be one of {valid}")

    if filter_mode == FilterMode.YEAR:
        month = day = None
    elif filter_mode == FilterMode.MONTH:
        day = None

    errors = []
    if year is not None and not 1 <= year < MAXYEAR:
        errors.append(f"Year must be between 1 and {MAXYEAR - 1}")
    if month is not None and not 1 <= month <= 12:
        errors.append("Month must be between 1 and 12")
    if day is not None and not 1 <= day <= 31:
        errors.append("Day must be between 1 and 31")

    if not errors and None not in (year, month, day):
        if day > last_day_of_month(year, month).day:
            errors.append(f"Day {day} does not exist in {year}-{month:02d}")

    if errors:
        return ValidationResult.failure(*errors)

    return ValidationResult.success(
        DateFilter(mode=filter_mode, year=year, month=month, day=day)
    )

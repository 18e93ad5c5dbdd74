"""
Typed inputs for TaskStore and the plain functions that validate them.

UpdateTaskInput keeps an explicit set of the fields the caller supplied, so
"description omitted" (keep the old value) and "description sent empty or
null" (clear it) stay distinguishable after the HTTP layer is gone.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from task_api.core.errors import ValidationError
from task_api.models.task import TASK_STATUSES, TITLE_MAX_LENGTH, TaskStatus

UPDATABLE_FIELDS = ("title", "description", "status")


@dataclass(frozen=True)
class CreateTaskInput:
    title: Any
    description: Any = None
    status: Any = None


@dataclass(frozen=True)
class UpdateTaskInput:
    title: Any = None
    description: Any = None
    status: Any = None
    fields_set: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_fields(cls, **fields: Any) -> "UpdateTaskInput":
        """Build from only the fields that were present in the request."""
        unknown = set(fields) - set(UPDATABLE_FIELDS)
        if unknown:
            raise TypeError(f"unknown task fields: {', '.join(sorted(unknown))}")
        return cls(fields_set=frozenset(fields), **fields)

    def has(self, name: str) -> bool:
        return name in self.fields_set


@dataclass(frozen=True)
class TaskValues:
    """Cleaned values ready to be written. Only `present` keys are applied."""

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    present: frozenset[str] = field(default_factory=frozenset)


def clean_title(value: Any, *, required: bool) -> str:
    if not isinstance(value, str) or not value.strip():
        if required:
            raise ValidationError(
                "Title is required and must be a non-empty string", field="title"
            )
        raise ValidationError("Title must be a non-empty string", field="title")
    title = value.strip()
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(
            f"Title must be at most {TITLE_MAX_LENGTH} characters", field="title"
        )
    return title


def clean_description(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError("Description must be a string", field="description")
    return value.strip() or None


def clean_status(value: Any) -> str:
    if isinstance(value, TaskStatus):
        return value.value
    if not isinstance(value, str) or value not in TASK_STATUSES:
        raise ValidationError(
            f"Invalid status. Must be one of: {', '.join(TASK_STATUSES)}",
            field="status",
        )
    return value


def validate_create(data: CreateTaskInput) -> TaskValues:
    title = clean_title(data.title, required=True)
    description = clean_description(data.description)
    status = (
        TaskStatus.PENDING.value if data.status is None else clean_status(data.status)
    )
    return TaskValues(
        title=title,
        description=description,
        status=status,
        present=frozenset(UPDATABLE_FIELDS),
    )


def validate_update(data: UpdateTaskInput) -> TaskValues:
    values: dict[str, Any] = {}
    if data.has("title"):
        values["title"] = clean_title(data.title, required=False)
    if data.has("description"):
        values["description"] = clean_description(data.description)
    if data.has("status"):
        values["status"] = clean_status(data.status)
    return TaskValues(present=frozenset(values), **values)

# task_api/schemas/task.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from task_api.models.task import TASK_STATUSES, TITLE_MAX_LENGTH, TaskStatus
from task_api.services.task_inputs import CreateTaskInput, UpdateTaskInput


def iso_utc(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec="milliseconds") + "Z"


# ===== 요청 =====
# 타입 검사는 TaskStore 검증 함수에 맡기고, 스키마는 문서용 정보만 가짐

_TITLE_SCHEMA = {"type": "string", "minLength": 1, "maxLength": TITLE_MAX_LENGTH}
_DESCRIPTION_SCHEMA = {"type": "string", "nullable": True}
_STATUS_SCHEMA = {"type": "string", "enum": list(TASK_STATUSES)}


class TaskCreate(BaseModel):
    model_config = ConfigDict(json_schema_extra={"required": ["title"]})

    title: Any = Field(
        default=None,
        json_schema_extra=_TITLE_SCHEMA,
        description="The title of the task",
        examples=["Complete project documentation"],
    )
    description: Any = Field(
        default=None,
        json_schema_extra=_DESCRIPTION_SCHEMA,
        description="A detailed description of the task",
        examples=["Write comprehensive documentation for the REST API endpoints"],
    )
    status: Any = Field(
        default=None,
        json_schema_extra=_STATUS_SCHEMA,
        description="The status of the task (default: pending)",
    )

    def to_input(self) -> CreateTaskInput:
        return CreateTaskInput(
            title=self.title,
            description=self.description,
            status=self.status,
        )


class TaskUpdate(BaseModel):
    title: Any = Field(
        default=None,
        json_schema_extra=_TITLE_SCHEMA,
        description="The title of the task",
        examples=["Updated task title"],
    )
    description: Any = Field(
        default=None,
        json_schema_extra=_DESCRIPTION_SCHEMA,
        description="Send an empty string or null to clear it; omit to keep it",
        examples=["Updated task description"],
    )
    status: Any = Field(
        default=None,
        json_schema_extra=_STATUS_SCHEMA,
        description="The status of the task",
    )

    def to_input(self) -> UpdateTaskInput:
        # 요청에 실제로 들어온 필드만 전달 (생략 vs 빈 값 구분)
        return UpdateTaskInput.from_fields(
            **{name: getattr(self, name) for name in self.model_fields_set}
        )


# ===== 응답 =====

class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., examples=[1])
    title: str
    description: Optional[str] = None
    status: TaskStatus
    created_at: datetime = Field(..., serialization_alias="createdAt")
    updated_at: datetime = Field(..., serialization_alias="updatedAt")

    @field_serializer("created_at", "updated_at")
    def _ser_ts(self, value: datetime) -> str:
        return iso_utc(value)


class ErrorOut(BaseModel):
    error: str


class HealthOut(BaseModel):
    status: str
    timestamp: Optional[str] = None

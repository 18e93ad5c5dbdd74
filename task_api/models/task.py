from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import CheckConstraint, Column, DateTime, Text
from sqlmodel import Field, SQLModel


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


TASK_STATUSES = tuple(s.value for s in TaskStatus)
TITLE_MAX_LENGTH = 255


class Task(SQLModel, table=True):
    __tablename__ = "tasks"

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'in_progress', 'completed')",
            name="ck_tasks_status",
        ),
        # SQLite가 삭제된 id를 재사용하지 않도록
        {"sqlite_autoincrement": True},
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    status: str = Field(default=TaskStatus.PENDING.value, max_length=20)
    created_at: datetime = Field(sa_column=Column("createdAt", DateTime, nullable=False))
    updated_at: datetime = Field(sa_column=Column("updatedAt", DateTime, nullable=False))

# task_api/services/task_store.py
from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select, text

from task_api.core.errors import StoreError
from task_api.db.session import build_db_url, create_all_tables, make_engine, session_scope
from task_api.models.task import Task
from task_api.services.task_inputs import (
    CreateTaskInput,
    UpdateTaskInput,
    validate_create,
    validate_update,
)

log = logging.getLogger(__name__)


def _utcnow() -> datetime:
    # naive UTC; SQLite DateTime does not keep tzinfo
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TaskStore:
    """
    Task persistence and validation, independent of any HTTP framework.

    Owns one engine for the life of the process: build it once with
    `from_url`, call `init_schema` if tables are not migrated, and `close`
    at shutdown. Each operation uses its own short session.

    Outcomes:
    - bad input -> ValidationError, raised before touching the DB
    - missing id -> None (get/update) or False (delete)
    - backend failure -> StoreError
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @classmethod
    def from_url(cls, database_url: str, echo: bool = False) -> "TaskStore":
        return cls(make_engine(build_db_url(database_url), echo=echo))

    def init_schema(self) -> None:
        with self._wrap("init_schema"):
            create_all_tables(self._engine)

    def close(self) -> None:
        self._engine.dispose()
        log.info("TaskStore closed")

    def ping(self) -> None:
        with self._session("ping") as db:
            db.exec(text("SELECT 1"))

    # ---- operations ----

    def list(self) -> list[Task]:
        with self._session("list") as db:
            stmt = select(Task).order_by(Task.created_at.desc(), Task.id.desc())
            return list(db.exec(stmt).all())

    def get(self, task_id: int) -> Optional[Task]:
        with self._session("get") as db:
            return db.get(Task, task_id)

    def create(self, data: CreateTaskInput) -> Task:
        values = validate_create(data)
        now = _utcnow()
        task = Task(
            title=values.title,
            description=values.description,
            status=values.status,
            created_at=now,
            updated_at=now,
        )
        with self._session("create") as db:
            db.add(task)
            db.commit()
            db.refresh(task)
        log.info("task created id=%s", task.id)
        return task

    def update(self, task_id: int, data: UpdateTaskInput) -> Optional[Task]:
        values = validate_update(data)
        with self._session("update") as db:
            task = db.get(Task, task_id)
            if task is None:
                return None

            for name in values.present:
                setattr(task, name, getattr(values, name))
            task.updated_at = max(_utcnow(), task.created_at)

            db.add(task)
            db.commit()
            db.refresh(task)
        log.info("task updated id=%s fields=%s", task_id, sorted(values.present))
        return task

    def delete(self, task_id: int) -> bool:
        with self._session("delete") as db:
            task = db.get(Task, task_id)
            if task is None:
                return False
            db.delete(task)
            db.commit()
        log.info("task deleted id=%s", task_id)
        return True

    # ---- helpers ----

    @contextmanager
    def _wrap(self, op: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            log.exception("TaskStore.%s failed", op)
            raise StoreError(f"{op} failed") from exc

    @contextmanager
    def _session(self, op: str) -> Iterator[Session]:
        # 세션 종료 후에도 반환한 객체 속성을 읽을 수 있도록 expire 하지 않음
        with self._wrap(op), session_scope(self._engine, expire_on_commit=False) as db:
            yield db

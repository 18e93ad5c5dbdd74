from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config

from task_api.core.errors import StoreError
from task_api.services import task_store as task_store_module
from task_api.services.task_inputs import CreateTaskInput, TaskValues
from task_api.services.task_store import TaskStore

ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def migrated_url(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path / 'migrated' / 'tasks.db'}"
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.setenv("DATABASE_URL", url)

    # ini 파일 없이 구성해서 fileConfig 로 로깅이 재설정되지 않게 함
    cfg = Config()
    cfg.set_main_option("script_location", str(ROOT / "alembic"))
    command.upgrade(cfg, "head")
    return url


def test_upgrade_creates_usable_tasks_table(migrated_url):
    store = TaskStore.from_url(migrated_url)
    try:
        first = store.create(CreateTaskInput(title="from migration"))
        store.delete(first.id)
        second = store.create(CreateTaskInput(title="next"))

        assert second.id > first.id
        assert [t.title for t in store.list()] == ["next"]
    finally:
        store.close()


def test_migrated_table_checks_status(migrated_url, monkeypatch):
    monkeypatch.setattr(
        task_store_module,
        "validate_create",
        lambda data: TaskValues(title="raw", status="archived", present=frozenset()),
    )
    store = TaskStore.from_url(migrated_url)
    try:
        with pytest.raises(StoreError):
            store.create(CreateTaskInput(title="raw"))
    finally:
        store.close()

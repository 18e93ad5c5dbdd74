import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from task_api.core.config import Settings  # noqa: E402
from task_api.main import create_app  # noqa: E402
from task_api.services.task_store import TaskStore  # noqa: E402

MEMORY_URL = "sqlite:///:memory:"


@pytest.fixture
def store():
    s = TaskStore.from_url(MEMORY_URL)
    s.init_schema()
    yield s
    s.close()


@pytest.fixture
def settings(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    return Settings(APP_ENV="test", DATABASE_URL=MEMORY_URL, LOG_LEVEL="WARNING")


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c

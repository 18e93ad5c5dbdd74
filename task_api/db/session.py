# task_api/db/session.py
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.engine import url as sa_url
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

log = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///./data/tasks.db"


def _mask(url: str) -> str:
    if "://" not in url:
        return url
    scheme, rest = url.split("://", 1)
    if "@" in rest and ":" in rest.split("@", 1)[0]:
        creds, tail = rest.split("@", 1)
        user = creds.split(":", 1)[0]
        return f"{scheme}://{user}:***@{tail}"
    return url


def _strip_outer_quotes(s: str) -> str:
    if not s:
        return s
    if (s[0] == s[-1]) and s[0] in ("'", '"', "`"):
        return s[1:-1].strip()
    return s


def build_db_url(raw: str) -> str:
    url = _strip_outer_quotes((raw or "").strip())

    if not url:
        url = DEFAULT_DATABASE_URL

    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+psycopg2://", 1)

    if any(dom in url for dom in ("render.com", "neon.tech")) and "sslmode=" not in url:
        sep = "&" if "?" in url else "?"
        url = f"{url}{sep}sslmode=require"

    try:
        sa_url.make_url(url)
    except Exception as exc:
        raise RuntimeError(f"Invalid DATABASE_URL: {repr(url)} ({exc})")

    log.info("DB URL: %s", _mask(url))
    return url


def _is_memory_sqlite(parsed: sa_url.URL) -> bool:
    return parsed.database in (None, "", ":memory:")


def _enable_wal(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_conn, _record):
        cur = dbapi_conn.cursor()
        try:
            cur.execute("PRAGMA journal_mode=WAL")
        finally:
            cur.close()


def make_engine(url: str, echo: bool = False) -> Engine:
    """Create the process-wide engine. Callers own it and must dispose it."""
    parsed = sa_url.make_url(url)

    if parsed.get_backend_name() != "sqlite":
        return create_engine(
            url,
            echo=echo,
            pool_pre_ping=True,
            pool_recycle=1800,
        )

    connect_args = {"check_same_thread": False}
    if _is_memory_sqlite(parsed):
        # 메모리 DB는 커넥션 하나를 공유해야 테이블이 유지됨
        return create_engine(
            url, echo=echo, connect_args=connect_args, poolclass=StaticPool
        )

    Path(parsed.database).expanduser().parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(url, echo=echo, connect_args=connect_args)
    _enable_wal(engine)
    return engine


def create_all_tables(engine: Engine) -> None:
    # 모델 모듈 임포트(테이블 등록 보장용)
    from task_api.models import task as _m_task  # noqa: F401

    SQLModel.metadata.create_all(engine)


@contextmanager
def session_scope(engine: Engine, **kwargs) -> Iterator[Session]:
    """Session bound to one unit of work; rolled back on error, always closed."""
    s = Session(engine, **kwargs)
    try:
        yield s
    except Exception:
        s.rollback()
        raise
    finally:
        s.close()

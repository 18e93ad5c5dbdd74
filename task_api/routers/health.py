# task_api/routers/health.py
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException

from task_api.core.errors import StoreError
from task_api.dependencies.store import get_task_store
from task_api.schemas.task import HealthOut, iso_utc
from task_api.services.task_store import TaskStore

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("", response_model=HealthOut, summary="Health check endpoint")
def health():
    """Liveness only; does not touch the database."""
    return HealthOut(status="ok", timestamp=iso_utc(datetime.now(timezone.utc)))


@router.get(
    "/db",
    response_model=HealthOut,
    response_model_exclude_none=True,
    summary="Database connectivity check",
)
def health_db(store: TaskStore = Depends(get_task_store)):
    # Migration is a deployment concern. Runtime only verifies DB connectivity.
    try:
        store.ping()
    except StoreError:
        raise HTTPException(status_code=500, detail="Database connection failed")
    return HealthOut(status="ok")

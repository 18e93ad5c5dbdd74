# task_api/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from task_api.core.config import Settings, get_settings
from task_api.core.errors import StoreError, ValidationError
from task_api.core.logging_config import setup_logging
from task_api.routers import health, task
from task_api.services.task_store import TaskStore

logger = logging.getLogger(__name__)

INVALID_TASK_ID = "Invalid task ID"
INTERNAL_ERROR = "Internal Server Error"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = first.get("loc", ())
    if first.get("type") == "json_invalid":
        return "Request body is not valid JSON"
    if loc[:1] == ("path",):
        return INVALID_TASK_ID
    if loc == ("body",):
        return "Request body must be a JSON object"
    name = ".".join(str(p) for p in loc[1:]) or "body"
    return f"{name}: {first.get('msg', 'invalid value')}"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def _on_validation_error(request: Request, exc: ValidationError):
        return _error(400, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _on_request_validation(request: Request, exc: RequestValidationError):
        return _error(400, _validation_message(exc))

    @app.exception_handler(StarletteHTTPException)
    async def _on_http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(StoreError)
    async def _on_store_error(request: Request, exc: StoreError):
        logger.error("store failure on %s %s: %s", request.method, request.url.path, exc)
        return _error(500, INTERNAL_ERROR)

    @app.exception_handler(Exception)
    async def _on_unhandled(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return _error(500, INTERNAL_ERROR)


def create_app(settings: Optional[Settings] = None, store: Optional[TaskStore] = None) -> FastAPI:
    """
    Build the API. The TaskStore is opened when the app starts and closed
    when it stops; pass `store` to reuse one you already own (it is then
    left open on shutdown).
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = store is None
        task_store = store or TaskStore.from_url(settings.database_url, echo=settings.db_echo)
        if settings.db_auto_create:
            task_store.init_schema()
        app.state.task_store = task_store
        logger.info("task-api started env=%s", settings.app_env)
        try:
            yield
        finally:
            if owned:
                task_store.close()

    app = FastAPI(
        title="Task Management API",
        description="A simple REST API for managing tasks",
        version=settings.app_version,
        docs_url="/api-docs",
        openapi_url="/api-docs.json",
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.origins,
        allow_credentials="*" not in settings.origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # 라우터 등록
    app.include_router(health.router)
    app.include_router(task.router)
    return app


def run() -> None:
    import uvicorn

    load_dotenv()
    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()

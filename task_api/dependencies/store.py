from fastapi import Request

from task_api.services.task_store import TaskStore


def get_task_store(request: Request) -> TaskStore:
    """FastAPI Depends(get_task_store): the store opened in the app lifespan."""
    return request.app.state.task_store

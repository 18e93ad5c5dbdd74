# task_api/routers/task.py
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status

from task_api.dependencies.store import get_task_store
from task_api.schemas.task import ErrorOut, TaskCreate, TaskOut, TaskUpdate
from task_api.services.task_store import TaskStore

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])

TASK_NOT_FOUND = "Task not found"

TaskId = Annotated[int, Path(gt=0, description="Task ID")]
_errors = {
    400: {"model": ErrorOut, "description": "Invalid input"},
    404: {"model": ErrorOut, "description": TASK_NOT_FOUND},
}


@router.get("", response_model=list[TaskOut], summary="Get all tasks")
def list_tasks(store: TaskStore = Depends(get_task_store)):
    return [TaskOut.model_validate(t, from_attributes=True) for t in store.list()]


@router.get(
    "/{task_id}",
    response_model=TaskOut,
    summary="Get a task by ID",
    responses=_errors,
)
def get_task(task_id: TaskId, store: TaskStore = Depends(get_task_store)):
    task = store.get(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail=TASK_NOT_FOUND)
    return TaskOut.model_validate(task, from_attributes=True)


@router.post(
    "",
    response_model=TaskOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new task",
    responses={400: _errors[400]},
)
def create_task(body: TaskCreate, store: TaskStore = Depends(get_task_store)):
    task = store.create(body.to_input())
    return TaskOut.model_validate(task, from_attributes=True)


@router.api_route(
    "/{task_id}",
    methods=["PUT", "PATCH"],
    response_model=TaskOut,
    summary="Update an existing task",
    responses=_errors,
)
def update_task(
    body: TaskUpdate,
    task_id: TaskId,
    store: TaskStore = Depends(get_task_store),
):
    task = store.update(task_id, body.to_input())
    if task is None:
        raise HTTPException(status_code=404, detail=TASK_NOT_FOUND)
    return TaskOut.model_validate(task, from_attributes=True)


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a task",
    responses=_errors,
)
def delete_task(task_id: TaskId, store: TaskStore = Depends(get_task_store)):
    if not store.delete(task_id):
        raise HTTPException(status_code=404, detail=TASK_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""Task and health endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from ..core.ports import TaskRepo
from ..tasks.task_api import (
    DEFAULT_MAX_TITLE_LENGTH,
    check_task_input,
    completion_error_message,
    dependency_error_message,
)
from ..tasks.task_models import CompletionOutcome, Task
from .schemas import HealthResponse, TaskCreateRequest, TaskResponse, TaskUpdateRequest

logger = logging.getLogger(__name__)

router = APIRouter()
health_router = APIRouter()


def get_task_store(request: Request) -> TaskRepo:
    return request.app.state.task_store


def get_max_title_length(request: Request) -> int:
    settings = getattr(request.app.state, "settings", None)
    return int(getattr(settings, "max_title_length", DEFAULT_MAX_TITLE_LENGTH))


def _not_found(task_id: int) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Task with ID {task_id} not found.")


def _validate_candidate(store: TaskRepo, task: Task, max_title_length: int, action: str) -> None:
    """Input checks, then the dependency walk. Raises 400 on the first problem."""
    error = check_task_input(task, max_title_length=max_title_length)
    if error is None:
        error = dependency_error_message(store.validate_dependencies(task))
    if error is not None:
        logger.warning("Rejected task %s id=%s: %s", action, task.id, error)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error)


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: TaskCreateRequest,
    store: TaskRepo = Depends(get_task_store),
    max_title_length: int = Depends(get_max_title_length),
) -> TaskResponse:
    """Create a task after input and dependency validation."""
    task = payload.to_task(payload.id)
    _validate_candidate(store, task, max_title_length, "create")

    if not store.add_task(task):
        logger.warning("Failed to create task id=%s, ID already exists.", task.id)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Task with ID {task.id} already exists.",
        )

    logger.info("Task id=%s created title=%r", task.id, task.title)
    return TaskResponse.from_task(task)


@router.get("", response_model=list[TaskResponse])
def list_tasks(store: TaskRepo = Depends(get_task_store)) -> list[TaskResponse]:
    return [TaskResponse.from_task(t) for t in store.list_tasks()]


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: int, store: TaskRepo = Depends(get_task_store)) -> TaskResponse:
    task = store.get_task(task_id)
    if task is None:
        logger.warning("Task id=%s not found.", task_id)
        raise _not_found(task_id)
    return TaskResponse.from_task(task)


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: int,
    payload: TaskUpdateRequest,
    store: TaskRepo = Depends(get_task_store),
    max_title_length: int = Depends(get_max_title_length),
) -> TaskResponse:
    """Replace title, due date, completion flag and dependencies of a task."""
    if store.get_task(task_id) is None:
        logger.warning("Task id=%s not found for update.", task_id)
        raise _not_found(task_id)

    candidate = payload.to_task(task_id)
    _validate_candidate(store, candidate, max_title_length, "update")

    updated = store.update_task(task_id, candidate)
    if updated is None:
        # Deleted between the existence check and the write.
        logger.warning("Task id=%s disappeared before update.", task_id)
        raise _not_found(task_id)

    logger.info("Task id=%s updated.", task_id)
    return TaskResponse.from_task(updated)


@router.put("/{task_id}/complete", response_model=TaskResponse)
def complete_task(task_id: int, store: TaskRepo = Depends(get_task_store)) -> TaskResponse:
    """Mark a task complete if all of its dependencies are complete."""
    outcome = store.try_complete_task(task_id)
    if outcome is CompletionOutcome.NOT_FOUND:
        logger.warning("Task id=%s not found for completion.", task_id)
        raise _not_found(task_id)

    if outcome is not CompletionOutcome.COMPLETED:
        detail = completion_error_message(outcome)
        logger.warning("Task id=%s cannot be completed: %s", task_id, outcome.value)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

    task = store.get_task(task_id)
    if task is None:
        raise _not_found(task_id)
    logger.info("Task id=%s completed.", task_id)
    return TaskResponse.from_task(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: int, store: TaskRepo = Depends(get_task_store)) -> Response:
    if not store.delete_task(task_id):
        logger.warning("Task id=%s not found for delete.", task_id)
        raise _not_found(task_id)
    logger.info("Task id=%s deleted.", task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@health_router.get("/health", response_model=HealthResponse)
def health_check(store: TaskRepo = Depends(get_task_store)) -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", tasks=store.count_tasks())

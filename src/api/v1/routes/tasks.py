"""Task API routes."""

from collections.abc import Callable
from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, Query, Request, status

from api.v1.dependencies import get_clock, get_task_store
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.task import (
    CategoryFilter,
    PriorityFilter,
    StatusFilter,
    TaskCreate,
    TaskDetailResponse,
    TaskListResponse,
    TaskResponse,
    TaskStatsDetailResponse,
    TaskStatsResponse,
    TaskUpdate,
)
from core.exceptions import TaskNotFoundError
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.task import Completed, Pending, TaskDraft, TaskFilters, TaskStatus
from domain.services.task_query import apply_filters_and_sort
from domain.services.task_stats import compute_stats
from domain.services.task_store import TaskStore

# Handlers are plain functions: the store does blocking I/O, so FastAPI runs
# them in its threadpool.
router = APIRouter(prefix="/tasks", tags=["tasks"])

Clock = Callable[[], datetime]


@router.get(
    "",
    response_model=TaskListResponse,
    summary="List tasks",
    responses={
        200: {"description": "Filtered tasks in display order"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
def list_tasks(
    request: Request,
    store: TaskStore = Depends(get_task_store),
    clock: Clock = Depends(get_clock),
    status_filter: StatusFilter = Query("all", alias="status", description="Filter by status"),
    priority: PriorityFilter = Query("all", description="Filter by priority"),
    category: CategoryFilter = Query("all", description="Filter by category"),
    q: str = Query("", max_length=200, description="Case-insensitive text search"),
) -> TaskListResponse:
    """
    Get tasks matching the filters.

    Pending tasks come first, then higher priority, then earlier due date
    (undated last), then newest.
    """
    tasks = store.load_all()
    filters = TaskFilters(
        status=status_filter,
        priority=priority,
        category=category,
        search_query=q,
    )
    shown = apply_filters_and_sort(tasks, filters)
    now = clock()

    return TaskListResponse(
        data=[TaskResponse.from_entity(t, now) for t in shown],
        meta={
            "total": len(tasks),
            "count": len(shown),
        },
    )


@router.get(
    "/stats",
    response_model=TaskStatsDetailResponse,
    summary="Task statistics",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
def get_task_stats(
    request: Request,
    store: TaskStore = Depends(get_task_store),
    clock: Clock = Depends(get_clock),
) -> TaskStatsDetailResponse:
    """Counts over the whole collection, ignoring any list filters."""
    stats = compute_stats(store.load_all(), clock())
    return TaskStatsDetailResponse(data=TaskStatsResponse.from_stats(stats))


@router.get(
    "/{task_id}",
    response_model=TaskDetailResponse,
    summary="Get a task",
    responses={
        200: {"description": "Task details"},
        404: {"model": ErrorResponse, "description": "Task not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
def get_task(
    request: Request,
    task_id: str,
    store: TaskStore = Depends(get_task_store),
    clock: Clock = Depends(get_clock),
) -> TaskDetailResponse:
    """Get a specific task by ID."""
    task = store.get(task_id)
    if task is None:
        raise TaskNotFoundError(task_id)
    return TaskDetailResponse(data=TaskResponse.from_entity(task, clock()))


@router.post(
    "",
    response_model=TaskDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new task",
    responses={
        201: {"description": "Task created successfully"},
        422: {"model": ErrorResponse, "description": "Validation error"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
def create_task(
    request: Request,
    body: TaskCreate,
    store: TaskStore = Depends(get_task_store),
    clock: Clock = Depends(get_clock),
) -> TaskDetailResponse:
    """
    Create a new pending task.

    The description is trimmed and must be 1-200 characters; a due date may
    not be in the past.
    """
    task = store.add(
        TaskDraft(
            description=body.description,
            priority=body.priority,
            category=body.category,
            due_date=body.due_date,
        )
    )
    return TaskDetailResponse(data=TaskResponse.from_entity(task, clock()))


@router.patch(
    "/{task_id}",
    response_model=TaskDetailResponse,
    summary="Update a task",
    responses={
        200: {"description": "Task updated successfully"},
        404: {"model": ErrorResponse, "description": "Task not found"},
        422: {"model": ErrorResponse, "description": "Validation error"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
def update_task(
    request: Request,
    task_id: str,
    body: TaskUpdate,
    store: TaskStore = Depends(get_task_store),
    clock: Clock = Depends(get_clock),
) -> TaskDetailResponse:
    """
    Update an existing task. All fields are optional (partial update).

    Set `due_date` to `null` to remove the due date. Changing `status`
    stamps or clears the completion time.
    """
    existing = store.get(task_id)
    if existing is None:
        raise TaskNotFoundError(task_id)

    changes: dict[str, Any] = {}
    for name in ("description", "priority", "category"):
        value = getattr(body, name)
        if value is not None:
            changes[name] = value
    if "due_date" in body.model_fields_set:
        changes["due_date"] = body.due_date
    if body.status is not None and body.status != existing.status:
        if body.status == TaskStatus.COMPLETED:
            changes["state"] = Completed(at=clock())
        else:
            changes["state"] = Pending()

    task = store.update(task_id, **changes)
    if task is None:
        raise TaskNotFoundError(task_id)
    return TaskDetailResponse(data=TaskResponse.from_entity(task, clock()))


@router.post(
    "/{task_id}/complete",
    response_model=TaskDetailResponse,
    summary="Mark a task as completed",
    responses={404: {"model": ErrorResponse, "description": "Task not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
def complete_task(
    request: Request,
    task_id: str,
    store: TaskStore = Depends(get_task_store),
    clock: Clock = Depends(get_clock),
) -> TaskDetailResponse:
    task = store.complete(task_id)
    if task is None:
        raise TaskNotFoundError(task_id)
    return TaskDetailResponse(data=TaskResponse.from_entity(task, clock()))


@router.post(
    "/{task_id}/uncomplete",
    response_model=TaskDetailResponse,
    summary="Mark a task as pending",
    responses={404: {"model": ErrorResponse, "description": "Task not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
def uncomplete_task(
    request: Request,
    task_id: str,
    store: TaskStore = Depends(get_task_store),
    clock: Clock = Depends(get_clock),
) -> TaskDetailResponse:
    task = store.uncomplete(task_id)
    if task is None:
        raise TaskNotFoundError(task_id)
    return TaskDetailResponse(data=TaskResponse.from_entity(task, clock()))


@router.post(
    "/{task_id}/toggle",
    response_model=TaskDetailResponse,
    summary="Flip a task between pending and completed",
    responses={404: {"model": ErrorResponse, "description": "Task not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
def toggle_task(
    request: Request,
    task_id: str,
    store: TaskStore = Depends(get_task_store),
    clock: Clock = Depends(get_clock),
) -> TaskDetailResponse:
    task = store.toggle(task_id)
    if task is None:
        raise TaskNotFoundError(task_id)
    return TaskDetailResponse(data=TaskResponse.from_entity(task, clock()))


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a task",
    responses={
        204: {"description": "Task deleted successfully"},
        404: {"model": ErrorResponse, "description": "Task not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
def delete_task(
    request: Request,
    task_id: str,
    store: TaskStore = Depends(get_task_store),
) -> None:
    """Delete a task permanently."""
    if not store.delete(task_id):
        raise TaskNotFoundError(task_id)
    return None

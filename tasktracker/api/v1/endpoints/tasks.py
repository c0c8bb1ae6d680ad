"""Task API: thin routes delegating to TaskStore and HistoryLog.

Request bodies and query values are validated here (pydantic / FastAPI);
the store only ever sees typed values. Missing tasks surface as 404 via
ResourceNotFoundException and the registered exception handler.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from tasktracker.api.v1.dependencies import get_history_log, get_task_store
from tasktracker.application.services.history_log import HistoryLog
from tasktracker.application.use_cases.tasks import TaskStore
from tasktracker.core.limiter import limit_writes
from tasktracker.domain.enums import HistoryAction, TaskPriority, TaskStatus
from tasktracker.schemas.history import HistoryEntryResponse, history_response_list
from tasktracker.schemas.task import (
    BulkDeleteRequest,
    BulkDeleteResponse,
    BulkUpdateStatusRequest,
    TaskCreateRequest,
    TaskResponse,
    TaskStatisticsResponse,
    TaskUpdateRequest,
    task_response_list,
)

router = APIRouter()

StoreDep = Annotated[TaskStore, Depends(get_task_store)]
HistoryDep = Annotated[HistoryLog, Depends(get_history_log)]


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    store: StoreDep,
    status: TaskStatus | None = Query(None, description="Filter by status"),
    priority: TaskPriority | None = Query(None, description="Filter by priority"),
    category: str | None = Query(None, description="Filter by exact category"),
    tag: str | None = Query(None, description="Filter by exact tag"),
    search: str | None = Query(
        None, description="Case-insensitive text search; overrides other filters"
    ),
):
    """List tasks. At most one filter applies: search, then status, priority, category, tag."""
    if search:
        tasks = store.search(search)
    elif status:
        tasks = store.find_by_status(status)
    elif priority:
        tasks = store.find_by_priority(priority)
    elif category:
        tasks = store.find_by_category(category)
    elif tag:
        tasks = store.find_by_tag(tag)
    else:
        tasks = store.find_all()
    return task_response_list(tasks)


@router.get("/statistics", response_model=TaskStatisticsResponse)
async def get_statistics(store: StoreDep):
    """Counts by status, priority and category."""
    return TaskStatisticsResponse.from_statistics(store.get_statistics())


@router.get("/categories", response_model=list[str])
async def get_categories(store: StoreDep):
    """Distinct non-empty categories."""
    return store.get_categories()


@router.get("/tags", response_model=list[str])
async def get_tags(store: StoreDep):
    """Distinct tags across all tasks."""
    return store.get_tags()


@router.get("/history", response_model=list[HistoryEntryResponse])
async def get_history(
    history: HistoryDep,
    action: HistoryAction | None = Query(None, description="Filter by action kind"),
):
    """Full change history, newest first, optionally filtered by action."""
    entries = history.by_action(action) if action else history.all()
    return history_response_list(entries)


@router.get("/{task_id}/history", response_model=list[HistoryEntryResponse])
async def get_task_history(task_id: str, history: HistoryDep):
    """History of one task, newest first. Also works for deleted tasks."""
    return history_response_list(history.for_task(task_id))


@router.delete("/{task_id}/history", status_code=204)
@limit_writes
async def clear_task_history(request: Request, task_id: str, history: HistoryDep):
    """Remove all history entries of one task (idempotent)."""
    history.clear_for_task(task_id)
    return Response(status_code=204)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: str, store: StoreDep):
    """Get one task by id."""
    return TaskResponse.model_validate(store.find_one(task_id))


@router.post("", response_model=TaskResponse, status_code=201)
@limit_writes
async def create_task(request: Request, body: TaskCreateRequest, store: StoreDep):
    """Create a task. Omitted status/priority/tags get their defaults."""
    return TaskResponse.model_validate(store.create(body.to_dto()))


@router.post("/bulk/update-status", response_model=list[TaskResponse])
@limit_writes
async def bulk_update_status(
    request: Request, body: BulkUpdateStatusRequest, store: StoreDep
):
    """Set one status on many tasks; unknown ids are left out of the response."""
    return task_response_list(store.bulk_update_status(body.ids, body.status))


@router.post("/bulk/delete", response_model=BulkDeleteResponse)
@limit_writes
async def bulk_delete(request: Request, body: BulkDeleteRequest, store: StoreDep):
    """Delete many tasks; returns how many were deleted and how many were not found."""
    return BulkDeleteResponse.from_result(store.bulk_delete(body.ids))


@router.put("/{task_id}", response_model=TaskResponse)
@router.patch("/{task_id}", response_model=TaskResponse)
@limit_writes
async def update_task(
    request: Request, task_id: str, body: TaskUpdateRequest, store: StoreDep
):
    """Update a task (partial). Only fields present in the body are compared and applied."""
    return TaskResponse.model_validate(store.update(task_id, body.to_dto()))


@router.delete("/{task_id}", status_code=204)
@limit_writes
async def delete_task(request: Request, task_id: str, store: StoreDep):
    """Delete a task. Its history is kept."""
    store.remove(task_id)
    return Response(status_code=204)

"""Health check endpoint, used for liveness checks."""

from typing import Annotated

from fastapi import APIRouter, Depends

from tasktracker.api.v1.dependencies import get_task_store
from tasktracker.application.use_cases.tasks import TaskStore
from tasktracker.core.config import get_settings
from tasktracker.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
async def health_check(
    store: Annotated[TaskStore, Depends(get_task_store)],
) -> HealthResponse:
    """Return ok status, version and the number of tasks held in memory."""
    return HealthResponse(version=get_settings().app_version, task_count=len(store))

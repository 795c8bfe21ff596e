"""Schedule generation endpoint."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from taskplan.api.errors import raise_scheduling_failure, raise_validation_error
from taskplan.config import Settings, get_settings
from taskplan.models.schedule import ScheduleResult, ScheduleStatus, TaskDescriptor
from taskplan.scheduling import schedule

log = structlog.get_logger()

router = APIRouter(prefix="/projects", tags=["schedule"])


class ScheduleRequest(BaseModel):
    """Request to schedule a project's tasks."""

    tasks: list[TaskDescriptor] = Field(default_factory=list)


@router.post("/{project_id}/schedule", response_model=ScheduleResult)
def generate_schedule(
    project_id: str,
    request: ScheduleRequest,
    settings: Annotated[Settings, Depends(get_settings)],
) -> ScheduleResult | JSONResponse:
    """Generate a dependency-respecting task order.

    Cycles and rejected input are client errors and come back as 400 with the
    full result body. Internal failures become a generic 500.
    """
    if len(request.tasks) > settings.max_tasks:
        raise_validation_error(
            f"Too many tasks: {len(request.tasks)} exceeds the limit of {settings.max_tasks}",
            context="generating schedule",
        )

    result = schedule(request.tasks, dangling_policy=settings.dangling_policy)
    log.info(
        "schedule_generated",
        project_id=project_id,
        task_count=len(request.tasks),
        status=result.status.value,
    )

    if result.status == ScheduleStatus.FAILED:
        raise_scheduling_failure(result, project_id=project_id, task_count=len(request.tasks))

    if result.status in (ScheduleStatus.CYCLE, ScheduleStatus.INVALID):
        return JSONResponse(
            status_code=400,
            content=result.model_dump(mode="json", by_alias=True),
        )

    return result

"""
Work schedule API endpoints.

Default-plan previews for the task creation and task detail views.
"""

from datetime import datetime, tzinfo
from typing import Any, Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from stress_police.api.deps import CurrentClock, WorkScheduleSvc
from stress_police.core.exceptions import ConfigurationError, ValidationError
from stress_police.models.enums import Priority
from stress_police.models.task import Task
from stress_police.models.work_block import WorkBlock
from stress_police.services.work_plan_service import (
    blocks_from_ai_payload,
    completion_progress,
    plan_task,
    schedule_progress,
    task_progress,
)
from stress_police.utils.datetime_utils import get_zone

router = APIRouter()

EMPTY_SCHEDULE_MESSAGE = "No blocks could be scheduled before the deadline"


class WorkingHoursPayload(BaseModel):
    """Raw working window; ordering is checked by the scheduler."""
    start: int
    end: int


class SchedulePreviewRequest(BaseModel):
    """Task metadata for a default-plan preview."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=500)
    deadline: datetime
    priority: Priority = Priority.MEDIUM
    working_hours: Optional[WorkingHoursPayload] = Field(None, alias="workingHours")
    # IANA zone of the user; defaults to the deadline's own offset
    timezone: Optional[str] = None


class SchedulePreviewResponse(BaseModel):
    blocks: list[WorkBlock]
    message: str = ""


class ScheduleProgressRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    blocks: list[WorkBlock] = Field(default_factory=list)
    is_completed: bool = Field(False, alias="isCompleted")


class ScheduleProgressResponse(BaseModel):
    """Progress percentages (0-100)."""
    progress: float
    completed: float


class AIBlocksRequest(BaseModel):
    blocks: list[dict[str, Any]]


class TaskPlanRequest(BaseModel):
    """A task to (re)plan, with the inputs of its plan mode."""

    model_config = ConfigDict(populate_by_name=True)

    task: Task
    working_hours: Optional[WorkingHoursPayload] = Field(None, alias="workingHours")
    timezone: Optional[str] = None


class TaskPlanResponse(BaseModel):
    task: Task
    progress: float
    message: str = ""


def _planning_zone(timezone: Optional[str], deadline: datetime) -> Optional[tzinfo]:
    """
    Calendar frame for a request: the named zone, else the deadline's offset.

    None (naive deadline, no zone) leaves the server clock's zone in charge.
    """
    if timezone:
        return get_zone(timezone)
    return deadline.tzinfo


@router.post("/preview", response_model=SchedulePreviewResponse)
async def preview_work_schedule(
    payload: SchedulePreviewRequest,
    service: WorkScheduleSvc,
):
    """Generate the default plan for a task without saving it."""
    working_hours = payload.working_hours.model_dump() if payload.working_hours else None
    try:
        blocks = service.generate(
            payload.title,
            payload.deadline,
            payload.priority,
            working_hours,
            timezone=_planning_zone(payload.timezone, payload.deadline),
        )
    except (ConfigurationError, ValidationError) as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )

    return SchedulePreviewResponse(
        blocks=blocks,
        message="" if blocks else EMPTY_SCHEDULE_MESSAGE,
    )


@router.post("/progress", response_model=ScheduleProgressResponse)
async def get_schedule_progress(
    payload: ScheduleProgressRequest,
    clock: CurrentClock,
):
    """Progress of a block sequence as of now."""
    return ScheduleProgressResponse(
        progress=schedule_progress(payload.blocks, clock.now(), payload.is_completed),
        completed=completion_progress(payload.blocks),
    )


@router.post("/ai-blocks", response_model=SchedulePreviewResponse)
async def accept_ai_blocks(payload: AIBlocksRequest):
    """Normalize blocks returned by the AI planner into work blocks."""
    try:
        blocks = blocks_from_ai_payload(payload.blocks)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
    return SchedulePreviewResponse(
        blocks=blocks,
        message="" if blocks else EMPTY_SCHEDULE_MESSAGE,
    )


@router.post("/plan", response_model=TaskPlanResponse)
async def plan_work_schedule(
    payload: TaskPlanRequest,
    service: WorkScheduleSvc,
    clock: CurrentClock,
):
    """Fill in a task's active schedule for its plan mode."""
    working_hours = payload.working_hours.model_dump() if payload.working_hours else None
    try:
        task = plan_task(
            payload.task,
            working_hours,
            service=service,
            timezone=_planning_zone(payload.timezone, payload.task.deadline),
        )
    except (ConfigurationError, ValidationError) as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )

    return TaskPlanResponse(
        task=task,
        progress=task_progress(task, clock.now()),
        message="" if task.work_schedule else EMPTY_SCHEDULE_MESSAGE,
    )

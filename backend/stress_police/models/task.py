"""
Task model.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from stress_police.models.enums import PlanMode, Priority
from stress_police.models.work_block import WorkBlock


class Task(BaseModel):
    """A task with a deadline and the block sequence currently active for it."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID = Field(default_factory=uuid4)
    title: str = Field(..., min_length=1, max_length=500)
    deadline: datetime
    priority: Priority = Priority.MEDIUM
    is_completed: bool = Field(False, alias="isCompleted")
    plan_mode: PlanMode = Field(PlanMode.DEFAULT_PLAN, alias="planMode")
    work_schedule: list[WorkBlock] = Field(default_factory=list, alias="workSchedule")
    group_members: Optional[list[str]] = Field(None, alias="groupMembers")

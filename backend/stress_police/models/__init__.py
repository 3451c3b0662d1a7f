"""Domain models."""

from stress_police.models.enums import BlockSource, PlanMode, Priority
from stress_police.models.schedule import DEFAULT_POLICIES, BlockPolicy, WorkingHours
from stress_police.models.task import Task
from stress_police.models.work_block import WorkBlock

__all__ = [
    "BlockPolicy",
    "BlockSource",
    "DEFAULT_POLICIES",
    "PlanMode",
    "Priority",
    "Task",
    "WorkBlock",
    "WorkingHours",
]

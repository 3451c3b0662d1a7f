"""
Work block model: one focused work session.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from stress_police.models.enums import BlockSource
from stress_police.utils.datetime_utils import elapsed


class WorkBlock(BaseModel):
    """
    A scheduled focus session.

    Hours are floats of the day the block sits on (13.25 = 1:15 PM).
    Default-plan blocks also carry the exact instants they were placed at;
    AI and custom blocks only have hours.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: UUID = Field(default_factory=uuid4)
    start_hour: float = Field(..., alias="startHour", ge=0, lt=24)
    end_hour: float = Field(..., alias="endHour", gt=0, le=24)
    source: BlockSource = BlockSource.CUSTOM
    label: Optional[str] = None
    completed: bool = False
    start_time: Optional[datetime] = Field(None, alias="startTime")
    end_time: Optional[datetime] = Field(None, alias="endTime")

    @model_validator(mode="after")
    def _check_range(self) -> "WorkBlock":
        if self.end_hour <= self.start_hour:
            raise ValueError(
                f"endHour ({self.end_hour}) must be greater than startHour ({self.start_hour})"
            )
        return self

    @property
    def duration_minutes(self) -> int:
        """Block length in whole minutes."""
        if self.start_time is not None and self.end_time is not None:
            return int(elapsed(self.start_time, self.end_time).total_seconds() // 60)
        return round((self.end_hour - self.start_hour) * 60)

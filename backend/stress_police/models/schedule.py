"""
Schedule configuration models: working window and priority policy table.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from stress_police.core.exceptions import ConfigurationError
from stress_police.models.enums import Priority


class WorkingHours(BaseModel):
    """Daily availability window ``[start, end)`` in whole hours."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(9, ge=0, le=23)
    end: int = Field(19, ge=1, le=24)

    @model_validator(mode="after")
    def _check_order(self) -> "WorkingHours":
        if self.start >= self.end:
            raise ValueError(
                f"working hours start ({self.start}) must be before end ({self.end})"
            )
        return self

    @classmethod
    def from_hours(cls, start: int, end: int) -> "WorkingHours":
        """Build a window, raising ConfigurationError on a degenerate one."""
        try:
            return cls(start=start, end=end)
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid working hours ({start}, {end})",
                details=exc.errors(include_url=False),
            ) from exc


class BlockPolicy(BaseModel):
    """Target block count and preferred block length for one priority."""

    model_config = ConfigDict(frozen=True)

    block_count: int = Field(..., ge=0)
    block_minutes: int = Field(..., gt=0)


DEFAULT_POLICIES: dict[Priority, BlockPolicy] = {
    Priority.HIGH: BlockPolicy(block_count=6, block_minutes=45),
    Priority.MEDIUM: BlockPolicy(block_count=4, block_minutes=40),
    Priority.LOW: BlockPolicy(block_count=3, block_minutes=30),
}

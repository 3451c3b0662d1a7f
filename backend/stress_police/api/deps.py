"""
Dependency injection for API endpoints.
"""

from typing import Annotated

from fastapi import Depends

from stress_police.services.work_schedule_service import WorkScheduleService
from stress_police.utils.clock import Clock, SystemClock


def get_clock() -> Clock:
    """Get the clock used for "now" in requests."""
    return SystemClock()


def get_work_schedule_service(
    clock: Clock = Depends(get_clock),
) -> WorkScheduleService:
    """Get WorkScheduleService bound to the request clock."""
    return WorkScheduleService(clock=clock)


CurrentClock = Annotated[Clock, Depends(get_clock)]
WorkScheduleSvc = Annotated[WorkScheduleService, Depends(get_work_schedule_service)]

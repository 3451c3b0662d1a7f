"""API routers."""

from stress_police.api import work_schedule

__all__ = [
    "work_schedule",
]

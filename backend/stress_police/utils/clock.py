"""
Clock abstraction so "now" can be injected instead of read globally.
"""

from datetime import datetime
from typing import Optional, Protocol

from stress_police.utils.datetime_utils import get_zone


class Clock(Protocol):
    """Source of the current time."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """
    Device clock in a named IANA timezone.

    The zone is a ZoneInfo rather than a fixed UTC offset, so day boundaries
    computed from ``now()`` follow DST changes on later days.
    """

    def __init__(self, timezone: Optional[str] = None):
        if timezone is None:
            from stress_police.core.config import get_settings

            timezone = get_settings().TIMEZONE
        self.zone = get_zone(timezone)

    def now(self) -> datetime:
        return datetime.now(self.zone)

    def __repr__(self) -> str:
        return f"SystemClock({self.zone.key})"


class FixedClock:
    """Clock frozen at a single instant."""

    def __init__(self, instant: datetime):
        self.instant = instant

    def now(self) -> datetime:
        return self.instant

    def __repr__(self) -> str:
        return f"FixedClock({self.instant.isoformat()})"

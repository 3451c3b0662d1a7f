"""
Calendar-day datetime utilities.

Block boundaries are computed on datetimes and only converted to
hour-of-day floats at the end, so day changes never lose precision.
"""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from stress_police.core.exceptions import ConfigurationError

UTC = timezone.utc


def align_to(reference: datetime, value: datetime) -> datetime:
    """
    Express ``value`` in the same timezone frame as ``reference``.

    Naive values are read as wall time in the reference's timezone.
    Aware values are converted; with a naive reference they become local
    wall time.

    Example:
        >>> now = datetime(2024, 1, 20, 9, 0, tzinfo=ZoneInfo("Asia/Tokyo"))
        >>> align_to(now, datetime(2024, 1, 20, 0, 0, tzinfo=timezone.utc))
        datetime(2024, 1, 20, 9, 0, tzinfo=ZoneInfo("Asia/Tokyo"))
    """
    if reference.tzinfo is None:
        if value.tzinfo is None:
            return value
        return value.astimezone().replace(tzinfo=None)

    if value.tzinfo is None:
        return value.replace(tzinfo=reference.tzinfo)

    return value.astimezone(reference.tzinfo)


def day_start(moment: datetime) -> datetime:
    """Midnight at the start of the moment's calendar day."""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def at_hour(moment: datetime, hour: int) -> datetime:
    """
    The given whole hour on the moment's calendar day (24 = next midnight).

    A wall time skipped by a DST jump resolves to the first real instant
    after it (02:00 on a spring-forward night reads as 03:00).
    """
    return shift(day_start(moment) + timedelta(hours=hour), timedelta(0))


def hour_of_day(moment: datetime, day: datetime | None = None) -> float:
    """
    Minute-precision hour float of ``moment`` relative to ``day``'s midnight.

    ``day`` defaults to the moment itself; passing the block's start lets an
    end at midnight read as 24.0 instead of 0.0.
    """
    base = day_start(day if day is not None else moment)
    minutes = int((moment - base).total_seconds() // 60)
    return minutes / 60.0


def shift(moment: datetime, delta: timedelta) -> datetime:
    """
    Move ``moment`` by real elapsed time.

    Aware datetimes go through UTC so a DST change inside ``delta`` is
    honored (01:40 EST + 20 min is 03:00 EDT, not 02:00).
    """
    if moment.tzinfo is None:
        return moment + delta
    return (moment.astimezone(UTC) + delta).astimezone(moment.tzinfo)


def elapsed(start: datetime, end: datetime) -> timedelta:
    """Real time between two instants, DST-safe for aware datetimes."""
    if start.tzinfo is None or end.tzinfo is None:
        return end - start
    return end.astimezone(UTC) - start.astimezone(UTC)


def ceil_minute(moment: datetime) -> datetime:
    """Round up to the next whole minute (unchanged when already whole)."""
    if moment.second == 0 and moment.microsecond == 0:
        return moment
    return shift(moment.replace(second=0, microsecond=0), timedelta(minutes=1))


def get_zone(name: str) -> ZoneInfo:
    """
    Resolve an IANA timezone name.

    Raises:
        ConfigurationError: If the name is unknown
    """
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError(f"Unknown timezone: {name!r}") from exc

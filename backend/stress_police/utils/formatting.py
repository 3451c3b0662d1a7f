"""
Human-readable strings for deadlines, durations and blocks.
"""

from datetime import datetime

from stress_police.models.work_block import WorkBlock
from stress_police.utils.datetime_utils import align_to, elapsed


def time_left_string(deadline: datetime, now: datetime) -> str:
    """
    Friendly countdown to a deadline.

    Example:
        >>> time_left_string(datetime(2024, 1, 22, 12, 0), datetime(2024, 1, 20, 9, 0))
        'Due in 2d 3h'
    """
    seconds = elapsed(now, align_to(now, deadline)).total_seconds()
    if seconds <= 0:
        return "Time Up"

    minutes = int(seconds // 60) % 60
    hours = int(seconds // 3600) % 24
    days = int(seconds // 86400)

    if days > 0:
        return f"Due in {days}d {hours}h"
    if hours > 0:
        return f"Due in {hours}h {minutes}m"
    return f"Due in {minutes}m"


def format_duration(minutes: int) -> str:
    """45 -> '45 min', 90 -> '1 hr 30 min'."""
    if minutes < 60:
        return f"{minutes} min"
    return f"{minutes // 60} hr {minutes % 60} min"


def format_hour(hour: float) -> str:
    """Hour-of-day float on a 12-hour clock (13.25 -> '1:15 PM')."""
    total_minutes = round(hour * 60)
    hh = (total_minutes // 60) % 24
    mm = total_minutes % 60
    suffix = "AM" if hh < 12 else "PM"
    return f"{hh % 12 or 12}:{mm:02d} {suffix}"


def format_block(block: WorkBlock) -> str:
    text = (
        f"{format_hour(block.start_hour)} - {format_hour(block.end_hour)} "
        f"({block.duration_minutes} min)"
    )
    if block.label:
        text += f" -> {block.label}"
    return text

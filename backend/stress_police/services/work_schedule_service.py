"""
Work schedule service for the default plan.

Splits the time left before a task's deadline into a bounded number of
focused work blocks inside the daily working hours, separated by rest gaps.
"""

from collections.abc import Mapping
from datetime import datetime, timedelta, tzinfo
from typing import Optional, Union
from uuid import NAMESPACE_URL, uuid5

from pydantic import ValidationError as PydanticValidationError

from stress_police.core.config import get_settings
from stress_police.core.exceptions import ConfigurationError, ValidationError
from stress_police.core.logger import setup_logger
from stress_police.models.enums import BlockSource, Priority
from stress_police.models.schedule import DEFAULT_POLICIES, BlockPolicy, WorkingHours
from stress_police.models.work_block import WorkBlock
from stress_police.utils.clock import Clock, SystemClock
from stress_police.utils.datetime_utils import (
    align_to,
    at_hour,
    ceil_minute,
    day_start,
    elapsed,
    hour_of_day,
    shift,
)

logger = setup_logger(__name__)

PREP_MINUTES = 10
REST_GAP_MINUTES = 20
MIN_BLOCK_MINUTES = 10

WorkingHoursInput = Union[WorkingHours, tuple[int, int], list[int], Mapping, None]


class WorkScheduleService:
    """
    Greedy placement of default-plan work blocks.

    Provides:
    - Priority policy lookup (block count and preferred length)
    - Working-hours validation
    - Deterministic block generation for an injected clock
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        policies: Optional[Mapping[Priority, Union[BlockPolicy, Mapping]]] = None,
        prep_minutes: int = PREP_MINUTES,
        rest_gap_minutes: int = REST_GAP_MINUTES,
        min_block_minutes: int = MIN_BLOCK_MINUTES,
        max_days: Optional[int] = None,
    ):
        """
        Initialize work schedule service.

        Args:
            clock: Source of "now" (defaults to the device clock)
            policies: Per-priority overrides of the block policy table
            prep_minutes: Offset from now before the first block may start
            rest_gap_minutes: Rest between consecutive blocks
            min_block_minutes: Shortest block worth placing
            max_days: Cap on calendar days scanned (None = settings value)
        """
        if max_days is None:
            max_days = get_settings().SCHEDULE_MAX_DAYS

        if prep_minutes < 0:
            raise ConfigurationError(f"prep_minutes must be >= 0, got {prep_minutes}")
        if rest_gap_minutes < 0:
            raise ConfigurationError(f"rest_gap_minutes must be >= 0, got {rest_gap_minutes}")
        if min_block_minutes < 1:
            raise ConfigurationError(f"min_block_minutes must be >= 1, got {min_block_minutes}")
        if max_days < 1:
            raise ConfigurationError(f"max_days must be >= 1, got {max_days}")

        self.clock = clock or SystemClock()
        self.policies = self._build_policies(policies)
        self.prep = timedelta(minutes=prep_minutes)
        self.rest_gap = timedelta(minutes=rest_gap_minutes)
        self.min_block = timedelta(minutes=min_block_minutes)
        self.max_days = max_days

    @staticmethod
    def _build_policies(
        overrides: Optional[Mapping[Priority, Union[BlockPolicy, Mapping]]],
    ) -> dict[Priority, BlockPolicy]:
        policies = dict(DEFAULT_POLICIES)
        for key, value in (overrides or {}).items():
            try:
                priority = Priority(key)
                policies[priority] = (
                    value if isinstance(value, BlockPolicy) else BlockPolicy.model_validate(value)
                )
            except (ValueError, PydanticValidationError) as exc:
                raise ConfigurationError(
                    f"Invalid block policy for {key!r}", details=str(exc)
                ) from exc
        return policies

    def policy_for(self, priority: Union[Priority, str]) -> BlockPolicy:
        """Block count and preferred length for a priority."""
        return self.policies[self._parse_priority(priority)]

    @staticmethod
    def _parse_priority(priority: Union[Priority, str]) -> Priority:
        try:
            return Priority(priority)
        except ValueError as exc:
            raise ValidationError(f"Unknown priority: {priority!r}") from exc

    @staticmethod
    def resolve_working_hours(working_hours: WorkingHoursInput) -> WorkingHours:
        """
        Normalize caller input into a validated working window.

        Accepts a WorkingHours, a (start, end) pair, a {"start", "end"} mapping,
        or None for the configured default.

        Raises:
            ConfigurationError: If the window is degenerate or unreadable
        """
        if working_hours is None:
            return get_settings().default_working_hours
        if isinstance(working_hours, WorkingHours):
            return working_hours
        if isinstance(working_hours, Mapping):
            if "start" not in working_hours or "end" not in working_hours:
                raise ConfigurationError(
                    "working hours mapping needs 'start' and 'end'",
                    details=dict(working_hours),
                )
            return WorkingHours.from_hours(working_hours["start"], working_hours["end"])
        if isinstance(working_hours, (tuple, list)) and len(working_hours) == 2:
            return WorkingHours.from_hours(working_hours[0], working_hours[1])
        raise ConfigurationError(f"Unsupported working hours value: {working_hours!r}")

    def generate(
        self,
        title: str,
        deadline: datetime,
        priority: Union[Priority, str],
        working_hours: WorkingHoursInput = None,
        timezone: Optional[tzinfo] = None,
    ) -> list[WorkBlock]:
        """
        Build the default-plan block sequence for a task.

        Args:
            title: Task title (logging and block ids only)
            deadline: Point in time no block may extend past
            priority: Selects target block count and preferred length
            working_hours: Daily window; see resolve_working_hours
            timezone: Zone whose calendar days and working hours apply
                (defaults to the clock's own zone)

        Returns:
            Chronological, non-overlapping blocks starting on whole minutes.
            Empty when there is no time left before the deadline; shorter
            than the target when the deadline comes first.

        Raises:
            ConfigurationError: If the working hours are degenerate
            ValidationError: If the priority is unknown
        """
        hours = self.resolve_working_hours(working_hours)
        priority = self._parse_priority(priority)
        policy = self.policies[priority]

        now = self.clock.now()
        if timezone is not None:
            now = now.astimezone(timezone)
        deadline = align_to(now, deadline)
        cursor = ceil_minute(shift(now, self.prep))

        if deadline <= cursor:
            logger.info(f"No time left to schedule '{title}' (deadline {deadline.isoformat()})")
            return []

        preferred = timedelta(minutes=policy.block_minutes)
        horizon = day_start(cursor) + timedelta(days=self.max_days)
        remaining_blocks = policy.block_count
        blocks: list[WorkBlock] = []

        while remaining_blocks > 0 and cursor < deadline:
            if cursor >= horizon:
                logger.warning(
                    f"Stopped scheduling '{title}' after {self.max_days} days "
                    f"with {remaining_blocks} blocks unplaced"
                )
                break

            work_day_start = at_hour(cursor, hours.start)
            work_day_end = at_hour(cursor, hours.end)

            if cursor < work_day_start:
                cursor = work_day_start
            elif cursor >= work_day_end:
                cursor = self._next_work_day_start(cursor, hours)
                continue

            duration = min(preferred, elapsed(cursor, deadline), elapsed(cursor, work_day_end))
            if duration >= self.min_block:
                end = shift(cursor, duration)
                blocks.append(self._make_block(title, cursor, end))
                cursor = shift(end, self.rest_gap)
                remaining_blocks -= 1
            else:
                logger.debug(
                    f"Only {duration} left at {cursor.isoformat()}, deferring to next day"
                )
                cursor = self._next_work_day_start(cursor, hours)

        logger.info(
            f"Scheduled {len(blocks)}/{policy.block_count} blocks for '{title}' "
            f"(priority={priority.value}, hours={hours.start}-{hours.end})"
        )
        return blocks

    @staticmethod
    def _next_work_day_start(cursor: datetime, hours: WorkingHours) -> datetime:
        return at_hour(day_start(cursor) + timedelta(days=1), hours.start)

    @staticmethod
    def _make_block(title: str, start: datetime, end: datetime) -> WorkBlock:
        # Same task and instants give the same id, so recomputed previews match
        block_id = uuid5(NAMESPACE_URL, f"work-block:{title}:{start.isoformat()}:{end.isoformat()}")
        return WorkBlock(
            id=block_id,
            start_hour=hour_of_day(start),
            end_hour=hour_of_day(end, day=start),
            source=BlockSource.DEFAULT_PLAN,
            label=None,
            start_time=start,
            end_time=end,
        )


def generate_work_schedule(
    title: str,
    deadline: datetime,
    priority: Union[Priority, str],
    working_hours: WorkingHoursInput = None,
    clock: Optional[Clock] = None,
    timezone: Optional[tzinfo] = None,
) -> list[WorkBlock]:
    """Generate default-plan blocks with the standard policy."""
    return WorkScheduleService(clock=clock).generate(
        title, deadline, priority, working_hours, timezone=timezone
    )

"""
Work plan helpers for the task flows.

Chooses the active block sequence for a task, accepts blocks produced by
the user or by the external AI planner, and measures progress.
"""

from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta, tzinfo
from typing import Any, Optional, Sequence, Union

from pydantic import ValidationError as PydanticValidationError

from stress_police.core.exceptions import ValidationError
from stress_police.core.logger import setup_logger
from stress_police.models.enums import BlockSource, PlanMode, Priority
from stress_police.models.task import Task
from stress_police.models.work_block import WorkBlock
from stress_police.services.work_schedule_service import (
    WorkingHoursInput,
    WorkScheduleService,
)
from stress_police.utils.datetime_utils import align_to

logger = setup_logger(__name__)

# Deadline assumed for a default plan when the user has not picked one yet
DEFAULT_DEADLINE_OFFSET = timedelta(hours=1)


def select_active_schedule(
    mode: Union[PlanMode, str],
    title: str,
    deadline: Optional[datetime],
    priority: Union[Priority, str],
    working_hours: WorkingHoursInput = None,
    ai_blocks: Sequence[WorkBlock] = (),
    custom_blocks: Sequence[WorkBlock] = (),
    service: Optional[WorkScheduleService] = None,
    timezone: Optional[tzinfo] = None,
) -> list[WorkBlock]:
    """
    Return the block sequence that becomes active for a task.

    The default plan is generated on the spot (in ``timezone`` when given);
    AI and custom plans are returned as supplied.
    """
    try:
        mode = PlanMode(mode)
    except ValueError as exc:
        raise ValidationError(f"Unknown plan mode: {mode!r}") from exc

    if mode == PlanMode.AI_PLAN:
        return list(ai_blocks)
    if mode == PlanMode.CUSTOM_PLAN:
        return list(custom_blocks)

    service = service or WorkScheduleService()
    if deadline is None:
        deadline = service.clock.now() + DEFAULT_DEADLINE_OFFSET
    return service.generate(title, deadline, priority, working_hours, timezone=timezone)


def plan_task(
    task: Task,
    working_hours: WorkingHoursInput = None,
    ai_blocks: Optional[Sequence[WorkBlock]] = None,
    custom_blocks: Optional[Sequence[WorkBlock]] = None,
    service: Optional[WorkScheduleService] = None,
    timezone: Optional[tzinfo] = None,
) -> Task:
    """
    Copy of ``task`` with its active schedule filled in for its plan mode.

    AI and custom plans fall back to the blocks already stored on the task
    when none are supplied.

    Raises:
        ConfigurationError: If the working hours are degenerate
    """
    blocks = select_active_schedule(
        task.plan_mode,
        task.title,
        task.deadline,
        task.priority,
        working_hours=working_hours,
        ai_blocks=task.work_schedule if ai_blocks is None else ai_blocks,
        custom_blocks=task.work_schedule if custom_blocks is None else custom_blocks,
        service=service,
        timezone=timezone,
    )
    logger.info(f"Planned {len(blocks)} blocks for task {task.id} ({task.plan_mode.value})")
    return task.model_copy(update={"work_schedule": blocks})


def blocks_from_ai_payload(payload: Iterable[Mapping[str, Any]]) -> list[WorkBlock]:
    """
    Accept labeled blocks returned by the AI planner.

    Expects entries shaped like ``{"startHour": 10.5, "endHour": 11.25,
    "label": "..."}``. Only the shape is checked; blocks are not reconciled
    against working hours or each other.

    Raises:
        ValidationError: If an entry is not a valid block
    """
    blocks: list[WorkBlock] = []
    for index, entry in enumerate(payload):
        if not isinstance(entry, Mapping):
            raise ValidationError(f"AI block #{index} is not an object", details=entry)
        try:
            block = WorkBlock(
                start_hour=entry["startHour"],
                end_hour=entry["endHour"],
                label=_clean_label(entry.get("label")),
                source=BlockSource.AI,
            )
        except KeyError as exc:
            raise ValidationError(
                f"AI block #{index} is missing {exc.args[0]}", details=dict(entry)
            ) from exc
        except PydanticValidationError as exc:
            raise ValidationError(
                f"AI block #{index} is invalid",
                details=exc.errors(include_url=False),
            ) from exc
        blocks.append(block)

    logger.info(f"Accepted {len(blocks)} AI blocks")
    return blocks


def make_custom_block(
    start_hour: float,
    end_hour: float,
    label: Optional[str] = None,
) -> WorkBlock:
    """
    Build a user-authored block.

    Raises:
        ValidationError: If end_hour is not after start_hour or out of range
    """
    try:
        return WorkBlock(
            start_hour=start_hour,
            end_hour=end_hour,
            label=_clean_label(label),
            source=BlockSource.CUSTOM,
        )
    except PydanticValidationError as exc:
        raise ValidationError(
            f"Invalid custom block {start_hour}-{end_hour}",
            details=exc.errors(include_url=False),
        ) from exc


def _clean_label(label: Optional[str]) -> Optional[str]:
    if label is None:
        return None
    label = str(label).strip()
    return label or None


def schedule_progress(
    blocks: Sequence[WorkBlock],
    now: datetime,
    is_completed: bool = False,
) -> float:
    """
    Percent of the schedule that has already begun.

    Counts the leading blocks whose start instant is before ``now``.
    Blocks without a start instant (AI/custom) stop the count.
    """
    if is_completed:
        return 100.0
    if not blocks:
        return 0.0

    started = 0
    for block in blocks:
        if block.start_time is None or block.start_time >= align_to(block.start_time, now):
            break
        started += 1
    return started / len(blocks) * 100


def task_progress(task: Task, now: datetime) -> float:
    """Schedule progress of a stored task."""
    return schedule_progress(task.work_schedule, now, task.is_completed)


def completion_progress(blocks: Sequence[WorkBlock]) -> float:
    """Percent of blocks the user has checked off."""
    if not blocks:
        return 0.0
    done = sum(1 for block in blocks if block.completed)
    return done / len(blocks) * 100

"""
Enum definitions for the application.

These enums are used across models and provide type-safe priority/source values.
"""

from enum import Enum


class Priority(str, Enum):
    """Task priority. Selects the target block count and block length."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def _missing_(cls, value):
        # Stored tasks use capitalized names ("High")
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None


class BlockSource(str, Enum):
    """Which subsystem produced a work block."""

    CUSTOM = "custom"
    AI = "ai"
    DEFAULT_PLAN = "defaultPlan"


class PlanMode(str, Enum):
    """Plan the user picked for a task; decides which block sequence is active."""

    DEFAULT_PLAN = "defaultPlan"
    AI_PLAN = "aiPlan"
    CUSTOM_PLAN = "customPlan"

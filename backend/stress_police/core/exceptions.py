"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class StressPoliceError(Exception):
    """Base exception for stress_police."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ConfigurationError(StressPoliceError):
    """Scheduler configuration is degenerate (working hours, policy, limits)."""

    pass


class ValidationError(StressPoliceError):
    """Block or task data failed validation."""

    pass

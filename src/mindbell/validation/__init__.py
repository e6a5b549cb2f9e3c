"""Pre-flight validation for bell schedules and settings windows."""

from .schedule import ScheduleValidation, is_valid_clock, parse_window, validate_schedule_params
from .windows import check_time_windows, find_overlapping_windows

__all__ = [
    "ScheduleValidation",
    "is_valid_clock",
    "parse_window",
    "validate_schedule_params",
    "check_time_windows",
    "find_overlapping_windows",
]

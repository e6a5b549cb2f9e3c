"""Daily mindfulness bell scheduling."""

from mindbell.core import MindbellValueError
from mindbell.scheduler import BellScheduler
from mindbell.scheduling import (
    BellDensity,
    BellEvent,
    BellStatus,
    TimeWindow,
    available_minutes,
    create_time_slots,
    generate_daily_schedule,
)
from mindbell.validation import ScheduleValidation, validate_schedule_params

__version__ = "0.1.0"

__all__ = [
    "MindbellValueError",
    "BellScheduler",
    "BellDensity",
    "BellEvent",
    "BellStatus",
    "TimeWindow",
    "available_minutes",
    "create_time_slots",
    "generate_daily_schedule",
    "ScheduleValidation",
    "validate_schedule_params",
]

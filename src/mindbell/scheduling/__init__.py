"""Scheduling primitives (window resolution, bell placement, data model)."""

from .models import (
    DENSITY_BELL_COUNTS,
    BellDensity,
    BellEvent,
    BellStatus,
    TimeSlot,
    TimeWindow,
    bell_count_for_density,
    coerce_windows,
)
from .placement import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MINIMUM_INTERVAL,
    generate_daily_schedule,
    place_bells,
    remove_time_around_bell,
)
from .windows import available_minutes, create_time_slots

__all__ = [
    "DENSITY_BELL_COUNTS",
    "BellDensity",
    "BellEvent",
    "BellStatus",
    "TimeSlot",
    "TimeWindow",
    "bell_count_for_density",
    "coerce_windows",
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_MINIMUM_INTERVAL",
    "generate_daily_schedule",
    "place_bells",
    "remove_time_around_bell",
    "available_minutes",
    "create_time_slots",
]

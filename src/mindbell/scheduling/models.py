"""Pydantic models describing bell schedule inputs and outputs."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from mindbell.core.errors import MindbellValueError

MINUTES_PER_DAY = 24 * 60


class BellDensity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class BellStatus(str, Enum):
    SCHEDULED = "scheduled"
    TRIGGERED = "triggered"
    ACKNOWLEDGED = "acknowledged"
    MISSED = "missed"


# One fixed count per density band. Product copy advertises ranges
# (low 3-5, medium 8-12, high 15-20); the scheduler targets these values.
DENSITY_BELL_COUNTS: Mapping[BellDensity, int] = {
    BellDensity.LOW: 4,
    BellDensity.MEDIUM: 8,
    BellDensity.HIGH: 12,
}


def bell_count_for_density(
    density: BellDensity | str, counts: Mapping[BellDensity, int] | None = None
) -> int:
    """Return the target number of bells per day for ``density``."""
    table = DENSITY_BELL_COUNTS if counts is None else counts
    try:
        key = BellDensity(density.lower() if isinstance(density, str) else density)
    except ValueError as exc:
        choices = ", ".join(member.value for member in BellDensity)
        raise MindbellValueError(
            f"Invalid bell density: {density!r}. Must be one of: {choices}"
        ) from exc
    return table[key]


def clock_to_minutes(value: str) -> int:
    """Convert ``H:M`` wall-clock text to minutes after midnight.

    Only the shape is checked here (two integer fields); range checks belong to
    :mod:`mindbell.validation`. ``"24:00"`` therefore maps to ``1440``.
    """
    hours, sep, minutes = value.strip().partition(":")
    if not sep or not hours.isdigit() or not minutes.isdigit():
        raise MindbellValueError(f"Invalid wall-clock time {value!r}; expected HH:MM")
    return int(hours) * 60 + int(minutes)


def minutes_to_clock(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


class TimeWindow(BaseModel):
    """Day-local half-open ``[start, end)`` range in ``HH:MM`` wall-clock time.

    Attributes
    ----------
    start:
        Opening time of the range.
    end:
        Closing time (exclusive). An ``end`` earlier than ``start`` means the window
        runs past midnight, which only quiet hours may do.

    The model keeps both fields as plain strings and does not enforce the
    ``HH:MM`` pattern so that malformed settings can still be reported by
    :func:`mindbell.validation.validate_schedule_params`.
    """

    model_config = ConfigDict(frozen=True)

    start: str
    end: str

    @model_validator(mode="before")
    @classmethod
    def _accept_shorthand(cls, data: Any) -> Any:
        if isinstance(data, str):
            start, sep, end = data.partition("-")
            if not sep:
                raise ValueError(f"Time window must look like 'HH:MM-HH:MM' (got {data!r})")
            return {"start": start.strip(), "end": end.strip()}
        return data

    @field_validator("start", "end", mode="before")
    @classmethod
    def _sexagesimal_to_clock(cls, value: Any) -> Any:
        # YAML 1.1 loads unquoted 09:00 as the base-60 integer 540
        if isinstance(value, int) and not isinstance(value, bool):
            return minutes_to_clock(value)
        return value

    @classmethod
    def coerce(cls, value: TimeWindow | Mapping[str, Any] | str) -> TimeWindow:
        if isinstance(value, cls):
            return value
        return cls.model_validate(value)

    @property
    def start_minutes(self) -> int:
        return clock_to_minutes(self.start)

    @property
    def end_minutes(self) -> int:
        return clock_to_minutes(self.end)

    @property
    def wraps_midnight(self) -> bool:
        return self.end_minutes < self.start_minutes

    def minute_ranges(self) -> list[tuple[int, int]]:
        """Split into same-day ``(start, end)`` minute ranges; overnight windows give two."""
        start, end = self.start_minutes, self.end_minutes
        if end < start:
            return [(start, MINUTES_PER_DAY), (0, end)]
        return [(start, end)]

    def label(self) -> str:
        return f"{self.start}-{self.end}"


def coerce_windows(
    windows: Iterable[TimeWindow | Mapping[str, Any] | str] | None,
) -> list[TimeWindow]:
    """Normalise window-like inputs (models, mappings, ``"HH:MM-HH:MM"``) to models."""
    return [TimeWindow.coerce(window) for window in windows or ()]


class BellEvent(BaseModel):
    """One scheduled bell.

    Attributes
    ----------
    id:
        Opaque unique identifier (UUID4 text).
    scheduled_time:
        Absolute instant on the target day.
    status:
        Lifecycle state. The scheduler only creates ``scheduled`` events; delivery and
        acknowledgement tracking move them along.
    fired_at / acknowledged_at:
        Lifecycle timestamps filled in by downstream collaborators.
    """

    id: str
    scheduled_time: datetime
    status: BellStatus = BellStatus.SCHEDULED
    fired_at: datetime | None = None
    acknowledged_at: datetime | None = None


@dataclass(slots=True)
class TimeSlot:
    """Contiguous period on the target day where a bell may still be placed."""

    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end


__all__ = [
    "BellDensity",
    "BellStatus",
    "DENSITY_BELL_COUNTS",
    "MINUTES_PER_DAY",
    "bell_count_for_density",
    "clock_to_minutes",
    "minutes_to_clock",
    "TimeWindow",
    "coerce_windows",
    "BellEvent",
    "TimeSlot",
]

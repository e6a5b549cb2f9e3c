"""Feasibility checks for bell schedule parameters (no placement involved)."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from pydantic import BaseModel, Field

from mindbell.core.errors import MindbellValueError
from mindbell.scheduling.models import BellDensity, TimeWindow, bell_count_for_density
from mindbell.scheduling.windows import available_minutes

CLOCK_PATTERN = re.compile(r"^([01][0-9]|2[0-3]):[0-5][0-9]$")

INVALID_ACTIVE_FORMAT = "Invalid time format in active windows"
INVALID_QUIET_FORMAT = "Invalid time format in quiet hours"
END_BEFORE_START = "Invalid time window: end time before start time"
ACTIVE_NOT_A_LIST = "Active windows must be a list"
QUIET_NOT_A_LIST = "Quiet hours must be a list"
INTERVAL_NOT_A_NUMBER = "Minimum interval must be a number"
INSUFFICIENT_TIME = (
    "Not enough available time for all bells with minimum interval. "
    "Consider reducing density or increasing active windows."
)


class ScheduleValidation(BaseModel):
    """Outcome of :func:`validate_schedule_params`.

    ``warnings`` mixes errors (which also clear ``valid``) and the non-fatal
    capacity warning.
    """

    valid: bool
    estimated_bells_per_day: int
    available_minutes_per_day: int
    warnings: list[str] = Field(default_factory=list)


def is_valid_clock(value: Any) -> bool:
    """True when ``value`` is strict 24-hour ``HH:MM`` text."""
    return isinstance(value, str) and CLOCK_PATTERN.match(value) is not None


def parse_window(raw: Any) -> TimeWindow | None:
    """Coerce ``raw`` to a :class:`TimeWindow` with well-formed clock fields, else ``None``."""
    try:
        window = TimeWindow.coerce(raw)
    except (TypeError, ValueError):
        return None
    if not (is_valid_clock(window.start) and is_valid_clock(window.end)):
        return None
    return window


def window_list(raw: Any) -> list[Any] | None:
    """Return ``raw`` as a list of window entries, or ``None`` when it is not list-like."""
    if isinstance(raw, (str, Mapping)) or not isinstance(raw, Iterable):
        return None
    return list(raw)


def coerce_interval(value: Any) -> float | None:
    """Return ``value`` as a number of minutes; numeric text such as ``"45"`` is accepted."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def validate_schedule_params(
    *,
    density: BellDensity | str,
    active_windows: Iterable[Any],
    quiet_hours: Iterable[Any] = (),
    minimum_interval: float | None = 45,
    day: date | None = None,
    density_counts: Mapping[BellDensity, int] | None = None,
) -> ScheduleValidation:
    """Check windows and estimate whether the density fits the available time.

    Malformed windows are reported and left out of the minute count. Active windows
    must end after they start; quiet hours alone may wrap midnight. A shortfall of
    ``estimated_bells_per_day * minimum_interval`` minutes adds a warning without
    clearing ``valid``. Inputs of the wrong shape are reported, never raised.
    """
    warnings: list[str] = []
    valid = True

    active_entries = window_list(active_windows)
    if active_entries is None:
        valid = False
        warnings.append(ACTIVE_NOT_A_LIST)
        active_entries = []
    active: list[TimeWindow] = []
    for raw in active_entries:
        window = parse_window(raw)
        if window is None:
            valid = False
            warnings.append(INVALID_ACTIVE_FORMAT)
            continue
        if window.end_minutes <= window.start_minutes:
            valid = False
            warnings.append(END_BEFORE_START)
        active.append(window)

    quiet_entries = window_list(quiet_hours)
    if quiet_entries is None:
        valid = False
        warnings.append(QUIET_NOT_A_LIST)
        quiet_entries = []
    quiet: list[TimeWindow] = []
    for raw in quiet_entries:
        window = parse_window(raw)
        if window is None:
            valid = False
            warnings.append(INVALID_QUIET_FORMAT)
            continue
        quiet.append(window)

    try:
        estimated = bell_count_for_density(density, density_counts)
    except MindbellValueError as exc:
        valid = False
        warnings.append(str(exc))
        estimated = 0

    interval = coerce_interval(45 if minimum_interval is None else minimum_interval)
    if interval is None:
        valid = False
        warnings.append(INTERVAL_NOT_A_NUMBER)
    elif interval < 0:
        valid = False
        warnings.append("Minimum interval must be non-negative")

    minutes = available_minutes(day or date.today(), active, quiet)
    if interval is not None and minutes < estimated * interval:
        warnings.append(INSUFFICIENT_TIME)

    return ScheduleValidation(
        valid=valid,
        estimated_bells_per_day=estimated,
        available_minutes_per_day=minutes,
        warnings=warnings,
    )


__all__ = [
    "CLOCK_PATTERN",
    "INVALID_ACTIVE_FORMAT",
    "INVALID_QUIET_FORMAT",
    "END_BEFORE_START",
    "INSUFFICIENT_TIME",
    "ACTIVE_NOT_A_LIST",
    "QUIET_NOT_A_LIST",
    "INTERVAL_NOT_A_NUMBER",
    "ScheduleValidation",
    "is_valid_clock",
    "parse_window",
    "window_list",
    "coerce_interval",
    "validate_schedule_params",
]

"""Settings-level checks for lists of active windows and quiet hours."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from mindbell.scheduling.models import MINUTES_PER_DAY, TimeWindow

from .schedule import is_valid_clock

MAX_WINDOWS = 10
MIN_WINDOW_MINUTES = 15


def _coerce(raw: Any) -> TimeWindow | str:
    """Return the window model, or the error explaining why ``raw`` is not one."""
    if not isinstance(raw, (TimeWindow, Mapping, str)):
        return "Time window must be an object"
    try:
        window = TimeWindow.coerce(raw)
    except ValueError:
        return "Time window must have start and end times"
    if not window.start or not window.end:
        return "Time window must have start and end times"
    return window


def _single_window_errors(window: TimeWindow, allow_overnight: bool) -> list[str]:
    errors: list[str] = []
    if not is_valid_clock(window.start):
        errors.append(f"Invalid start time format: {window.start}")
    if not is_valid_clock(window.end):
        errors.append(f"Invalid end time format: {window.end}")
    if errors:
        return errors

    start_min, end_min = window.start_minutes, window.end_minutes
    if not allow_overnight and end_min <= start_min:
        errors.append("End time must be after start time")
    if allow_overnight and end_min == start_min:
        errors.append("Start and end times cannot be the same")

    if allow_overnight and end_min < start_min:
        duration = MINUTES_PER_DAY - start_min + end_min
    else:
        duration = end_min - start_min
    if duration < MIN_WINDOW_MINUTES:
        errors.append(f"Time window must be at least {MIN_WINDOW_MINUTES} minutes long")
    return errors


def find_overlapping_windows(windows: Sequence[TimeWindow]) -> list[str]:
    """Return ``"a-b and c-d"`` labels for every overlapping pair (same-day comparison)."""
    overlaps: list[str] = []
    for i, first in enumerate(windows):
        for second in windows[i + 1 :]:
            if (
                first.start_minutes < second.end_minutes
                and second.start_minutes < first.end_minutes
            ):
                overlaps.append(f"{first.label()} and {second.label()}")
    return overlaps


def check_time_windows(
    windows: Any,
    *,
    allow_overnight: bool = False,
    require_nonempty: bool = True,
) -> list[str]:
    """Return errors for a list of windows; an empty list means the windows are usable.

    Rules: at least one window (when ``require_nonempty``), at most ten, strict
    ``HH:MM`` fields, ``end > start`` unless ``allow_overnight``, at least fifteen
    minutes long, and no overlapping pairs.
    """
    if isinstance(windows, (str, Mapping)) or not isinstance(windows, Sequence):
        return ["Time windows must be a list"]
    if not windows:
        return ["At least one time window is required"] if require_nonempty else []

    errors: list[str] = []
    if len(windows) > MAX_WINDOWS:
        errors.append(f"Cannot have more than {MAX_WINDOWS} time windows")

    well_formed: list[TimeWindow] = []
    for index, raw in enumerate(windows, start=1):
        window = _coerce(raw)
        window_errors = (
            [window] if isinstance(window, str) else _single_window_errors(window, allow_overnight)
        )
        if window_errors:
            errors.append(f"Window {index}: {', '.join(window_errors)}")
            continue
        well_formed.append(window)

    overlaps = find_overlapping_windows(well_formed)
    if overlaps:
        errors.append(f"Overlapping time windows found: {', '.join(overlaps)}")
    return errors


__all__ = [
    "MAX_WINDOWS",
    "MIN_WINDOW_MINUTES",
    "check_time_windows",
    "find_overlapping_windows",
]

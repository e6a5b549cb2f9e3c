"""Window resolver: available minutes and placement slots for a single day."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date, datetime, time, timedelta, tzinfo as TzInfo

from .models import TimeSlot, TimeWindow

logger = logging.getLogger(__name__)


def anchor(day: date, minutes: int, tzinfo: TzInfo | None = None) -> datetime:
    """Absolute instant ``minutes`` after midnight on ``day`` (1440 is the next midnight)."""
    return datetime.combine(day, time.min, tzinfo=tzinfo) + timedelta(minutes=minutes)


def _quiet_ranges(quiet_hours: Sequence[TimeWindow]) -> list[tuple[int, int]]:
    return sorted(piece for quiet in quiet_hours for piece in quiet.minute_ranges())


def available_minutes(
    day: date,
    active_windows: Sequence[TimeWindow],
    quiet_hours: Sequence[TimeWindow],
) -> int:
    """Return the minutes per day on which a bell may ring.

    Each active window contributes ``end - start`` minus its overlap with every quiet
    piece, floored at zero. Overnight quiet hours count as ``[start, 24:00)`` plus
    ``[00:00, end)``. Overlapping active windows are summed independently, so their
    shared minutes count twice; capacity reduction in the placement engine relies on
    this figure as-is.

    ``day`` is accepted for symmetry with :func:`create_time_slots`; the count does
    not depend on the calendar date.
    """
    quiet = _quiet_ranges(quiet_hours)
    total = 0
    for window in active_windows:
        start, end = window.start_minutes, window.end_minutes
        minutes = end - start
        for quiet_start, quiet_end in quiet:
            minutes -= max(0, min(end, quiet_end) - max(start, quiet_start))
        total += max(0, minutes)
    return total


def create_time_slots(
    day: date,
    active_windows: Sequence[TimeWindow],
    quiet_hours: Sequence[TimeWindow],
    *,
    tzinfo: TzInfo | None = None,
) -> list[TimeSlot]:
    """Return the disjoint slots of each active window with quiet hours removed.

    A cursor walks every window from its start. Quiet pieces are visited in
    chronological order; each one closes the current slot at its start and moves the
    cursor to its end. Overnight quiet hours are anchored as two pieces, one ending at
    the next midnight and one starting at this day's midnight. Empty slots are dropped.
    """
    quiet = [
        (anchor(day, quiet_start, tzinfo), anchor(day, quiet_end, tzinfo))
        for quiet_start, quiet_end in _quiet_ranges(quiet_hours)
    ]
    slots: list[TimeSlot] = []
    for window in active_windows:
        window_start = anchor(day, window.start_minutes, tzinfo)
        window_end = anchor(day, window.end_minutes, tzinfo)
        cursor = window_start
        for quiet_start, quiet_end in quiet:
            if quiet_end <= cursor:
                continue
            if quiet_start >= window_end:
                break
            if quiet_start > cursor:
                slots.append(TimeSlot(start=cursor, end=quiet_start))
            cursor = quiet_end
        if cursor < window_end:
            slots.append(TimeSlot(start=cursor, end=window_end))
    slots = [slot for slot in slots if slot.end > slot.start]
    logger.debug(
        "Resolved %d active window(s) into %d slot(s) for %s", len(active_windows), len(slots), day
    )
    return slots


__all__ = ["anchor", "available_minutes", "create_time_slots"]

"""Assertion helpers shared by the schedule tests."""

from __future__ import annotations

from datetime import date, datetime

from mindbell.scheduling import TimeWindow


def clock(day: date, text: str) -> datetime:
    """Absolute instant for ``HH:MM`` on ``day``."""
    hours, minutes = (int(part) for part in text.split(":"))
    return datetime(day.year, day.month, day.day, hours, minutes)


def minute_of_day(instant: datetime) -> float:
    return instant.hour * 60 + instant.minute + instant.second / 60.0


def inside(window: TimeWindow, instant: datetime) -> bool:
    """True when ``instant`` falls in the half-open window (overnight aware)."""
    minute = minute_of_day(instant)
    return any(start <= minute < end for start, end in window.minute_ranges())


class FixedRandom:
    """Random stand-in returning a constant draw and always the first choice."""

    def __init__(self, value: float = 0.0) -> None:
        self.value = value
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.value

    def choice(self, seq):
        return seq[0]

    def getrandbits(self, k: int) -> int:
        return 0

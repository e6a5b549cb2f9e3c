"""Placement engine: randomized, spaced bell times inside resolved slots."""

from __future__ import annotations

import logging
import random as _random
import uuid
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime, timedelta, tzinfo as TzInfo
from typing import Any

from mindbell.core.errors import MindbellValueError

from .models import (
    BellDensity,
    BellEvent,
    BellStatus,
    TimeSlot,
    TimeWindow,
    bell_count_for_density,
    coerce_windows,
)
from .windows import available_minutes, create_time_slots

logger = logging.getLogger(__name__)

DEFAULT_MINIMUM_INTERVAL = 45
DEFAULT_MAX_ATTEMPTS = 100

WindowLike = TimeWindow | Mapping[str, Any] | str

# candidates are whole seconds; the right-hand piece never restarts at the bell itself
_MIN_SEPARATION = timedelta(seconds=1)


def remove_time_around_bell(
    slots: Iterable[TimeSlot], bell_time: datetime, interval: timedelta
) -> list[TimeSlot]:
    """Return the slot pool with the buffer ``[bell_time - interval, bell_time + interval]`` cut out.

    Slots straddling the buffer keep at most two outer pieces; slots inside it vanish.
    A zero interval still removes ``bell_time`` itself, so no instant is drawn twice.
    """
    buffer_start = bell_time - interval
    buffer_end = bell_time + max(interval, _MIN_SEPARATION)
    remaining: list[TimeSlot] = []
    for slot in slots:
        if slot.end < buffer_start or slot.start > buffer_end:
            remaining.append(slot)
            continue
        if slot.start < buffer_start:
            remaining.append(TimeSlot(start=slot.start, end=buffer_start))
        if slot.end > buffer_end:
            remaining.append(TimeSlot(start=buffer_end, end=slot.end))
    return remaining


def _pick_instant(rng: _random.Random, slot: TimeSlot) -> datetime:
    # whole seconds, floored, so the instant always stays before slot.end
    span = int(slot.duration.total_seconds())
    return slot.start + timedelta(seconds=int(rng.random() * span))


def place_bells(
    slots: Sequence[TimeSlot],
    count: int,
    minimum_interval: float,
    *,
    rng: _random.Random,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> list[datetime]:
    """Randomly place up to ``count`` bells in ``slots`` by rejection sampling.

    Parameters
    ----------
    slots:
        Candidate slots from :func:`create_time_slots`. The input is not modified.
    count:
        Number of bells to attempt.
    minimum_interval:
        Minimum spacing in minutes between any two bells.
    rng:
        Random source; the only nondeterminism in the engine.
    max_attempts:
        Candidate draws per bell before that bell is skipped.

    Returns
    -------
    list[datetime]
        Placed instants in ascending order. The list is shorter than ``count`` when
        the pool runs dry or a bell exhausts its attempts.
    """
    interval = timedelta(minutes=minimum_interval)
    pool = list(slots)
    placed: list[datetime] = []
    for bell_index in range(count):
        if not pool:
            logger.debug("Slot pool exhausted after %d bell(s)", len(placed))
            break
        for _ in range(max_attempts):
            candidate = _pick_instant(rng, rng.choice(pool))
            if all(abs(candidate - existing) >= interval for existing in placed):
                placed.append(candidate)
                pool = remove_time_around_bell(pool, candidate, interval)
                break
        else:
            logger.debug("Skipping bell %d after %d rejected candidates", bell_index + 1, max_attempts)
    return sorted(placed)


def _new_bell_id(rng: _random.Random) -> str:
    return str(uuid.UUID(int=rng.getrandbits(128), version=4))


def generate_daily_schedule(
    day: date,
    density: BellDensity | str,
    active_windows: Sequence[WindowLike],
    quiet_hours: Sequence[WindowLike] = (),
    minimum_interval: float = DEFAULT_MINIMUM_INTERVAL,
    *,
    rng: _random.Random | None = None,
    seed: int | None = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    tzinfo: TzInfo | None = None,
    density_counts: Mapping[BellDensity, int] | None = None,
) -> list[BellEvent]:
    """Generate one day of randomized, non-clustered bells.

    Parameters
    ----------
    day:
        Calendar date the bells belong to. A ``datetime`` is reduced to its date.
    density:
        ``low``/``medium``/``high`` (see :data:`DENSITY_BELL_COUNTS`).
    active_windows:
        Same-day windows where bells may ring.
    quiet_hours:
        Windows where bells never ring; may wrap past midnight.
    minimum_interval:
        Minutes between bells. When the available minutes cannot hold the density
        target at this spacing, the target drops to ``available // minimum_interval``.
    rng / seed:
        Injected random source. ``seed`` builds a ``random.Random`` when ``rng`` is
        omitted; with neither, the generator is seeded from the OS. Bell ids are drawn
        from the same source, so a fixed seed reproduces the full output.
    max_attempts:
        Candidate draws per bell before the bell is skipped.
    tzinfo:
        Optional zone attached to every generated timestamp.
    density_counts:
        Override for the density-to-count mapping.

    Returns
    -------
    list[BellEvent]
        ``scheduled`` events sorted by ``scheduled_time``; possibly shorter than the
        target, empty when there are no active windows.
    """
    if minimum_interval < 0:
        raise MindbellValueError("minimum_interval must be non-negative")
    if isinstance(day, datetime):
        day = day.date()
    active = coerce_windows(active_windows)
    quiet = coerce_windows(quiet_hours)
    if rng is None:
        rng = _random.Random(seed)

    minutes = available_minutes(day, active, quiet)
    target = bell_count_for_density(density, density_counts)
    count = target
    if minutes < target * minimum_interval:
        count = int(minutes // minimum_interval)
        logger.info(
            "Reducing bells for %s from %d to %d: %d available minute(s) at %s-minute spacing",
            day,
            target,
            count,
            minutes,
            minimum_interval,
        )

    slots = create_time_slots(day, active, quiet, tzinfo=tzinfo)
    times = place_bells(slots, count, minimum_interval, rng=rng, max_attempts=max_attempts)
    if len(times) < count:
        logger.debug("Placed %d of %d bell(s) for %s", len(times), count, day)
    return [
        BellEvent(id=_new_bell_id(rng), scheduled_time=instant, status=BellStatus.SCHEDULED)
        for instant in times
    ]


__all__ = [
    "DEFAULT_MINIMUM_INTERVAL",
    "DEFAULT_MAX_ATTEMPTS",
    "remove_time_around_bell",
    "place_bells",
    "generate_daily_schedule",
]

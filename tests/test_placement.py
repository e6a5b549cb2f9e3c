from __future__ import annotations

import random
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from mindbell.core.errors import MindbellValueError
from mindbell.scheduling import (
    BellDensity,
    BellStatus,
    TimeSlot,
    TimeWindow,
    available_minutes,
    generate_daily_schedule,
    place_bells,
    remove_time_around_bell,
)
from tests.helpers import FixedRandom, clock, inside

CASES = [
    ([TimeWindow(start="09:00", end="17:00")], [], BellDensity.MEDIUM, 45),
    ([TimeWindow(start="09:00", end="12:00"), TimeWindow(start="14:00", end="17:00")], [], BellDensity.HIGH, 45),
    ([TimeWindow(start="08:00", end="18:00")], [TimeWindow(start="12:00", end="13:00")], BellDensity.MEDIUM, 45),
    ([TimeWindow(start="00:00", end="24:00")], [TimeWindow(start="22:00", end="07:00")], BellDensity.HIGH, 30),
    ([TimeWindow(start="06:30", end="23:30")], [TimeWindow(start="21:00", end="08:00")], BellDensity.LOW, 90),
]


@pytest.mark.parametrize("active, quiet, density, interval", CASES)
def test_schedule_invariants_hold_across_seeds(target_day, active, quiet, density, interval):
    minutes = available_minutes(target_day, active, quiet)
    bound = min({"low": 4, "medium": 8, "high": 12}[density.value], minutes // interval)
    for seed in range(25):
        events = generate_daily_schedule(
            target_day, density, active, quiet, interval, rng=random.Random(seed)
        )
        times = [event.scheduled_time for event in events]
        assert len(events) <= bound
        assert times == sorted(times)
        assert len(set(times)) == len(times)
        for instant in times:
            assert instant.date() == target_day
            assert any(inside(window, instant) for window in active)
            assert not any(inside(window, instant) for window in quiet)
        for earlier, later in zip(times, times[1:]):
            assert later - earlier >= timedelta(minutes=interval)


def test_medium_density_in_working_day_usually_reaches_target(target_day):
    window = [TimeWindow(start="09:00", end="17:00")]
    counts = [
        len(generate_daily_schedule(target_day, "medium", window, [], rng=random.Random(seed)))
        for seed in range(20)
    ]
    assert max(counts) == 8
    assert min(counts) >= 5


def test_capacity_reduction_limits_short_window(target_day):
    for seed in range(10):
        events = generate_daily_schedule(
            target_day, "high", [TimeWindow(start="09:00", end="10:00")], [], rng=random.Random(seed)
        )
        assert len(events) == 1
        assert clock(target_day, "09:00") <= events[0].scheduled_time < clock(target_day, "10:00")


def test_overnight_quiet_hours_keep_bells_in_daytime(target_day):
    events = generate_daily_schedule(
        target_day,
        BellDensity.HIGH,
        [TimeWindow(start="00:00", end="24:00")],
        [TimeWindow(start="22:00", end="07:00")],
        seed=99,
    )
    assert events
    for event in events:
        assert clock(target_day, "07:00") <= event.scheduled_time < clock(target_day, "22:00")


def test_empty_active_windows_return_empty_schedule(target_day):
    for density in BellDensity:
        assert generate_daily_schedule(target_day, density, [], [TimeWindow(start="22:00", end="07:00")]) == []


def test_interval_longer_than_available_span_yields_no_bells(target_day):
    events = generate_daily_schedule(
        target_day, "low", [TimeWindow(start="09:00", end="09:30")], [], 45, seed=1
    )
    assert events == []


def test_interval_equal_to_span_yields_single_bell(target_day):
    events = generate_daily_schedule(
        target_day, "low", [TimeWindow(start="09:00", end="10:00")], [], 60, seed=1
    )
    assert len(events) == 1


def test_same_seed_reproduces_times_and_ids(target_day):
    window = [TimeWindow(start="09:00", end="17:00")]
    first = generate_daily_schedule(target_day, "medium", window, [], rng=random.Random(2024))
    second = generate_daily_schedule(target_day, "medium", window, [], rng=random.Random(2024))
    assert [e.scheduled_time for e in first] == [e.scheduled_time for e in second]
    assert [e.id for e in first] == [e.id for e in second]


def test_injected_rng_drives_exact_sequence(target_day):
    events = generate_daily_schedule(
        target_day, "low", [TimeWindow(start="09:00", end="17:00")], [], 45, rng=FixedRandom(0.0)
    )
    assert [e.scheduled_time.strftime("%H:%M") for e in events] == ["09:00", "09:45", "10:30", "11:15"]


def test_events_are_scheduled_with_unique_uuid4_ids(target_day):
    events = generate_daily_schedule(
        target_day, "high", [TimeWindow(start="07:00", end="21:00")], [], seed=5
    )
    assert len({event.id for event in events}) == len(events)
    for event in events:
        assert event.status is BellStatus.SCHEDULED
        assert uuid.UUID(event.id).version == 4
        assert event.fired_at is None and event.acknowledged_at is None


def test_accepts_mapping_and_shorthand_windows(target_day):
    events = generate_daily_schedule(
        target_day,
        "low",
        [{"start": "09:00", "end": "12:00"}, "13:00-17:00"],
        ["12:00-13:00"],
        seed=3,
    )
    assert 1 <= len(events) <= 4
    assert all(not (12 <= e.scheduled_time.hour < 13) for e in events)


def test_datetime_day_and_tzinfo(target_day):
    day = datetime(2025, 1, 15, 18, 30)
    events = generate_daily_schedule(
        day, "low", ["09:00-17:00"], [], seed=11, tzinfo=timezone.utc
    )
    assert events
    assert all(e.scheduled_time.utcoffset() == timedelta(0) for e in events)
    assert all(e.scheduled_time.date() == target_day for e in events)


def test_invalid_density_and_negative_interval_raise(target_day):
    with pytest.raises(MindbellValueError):
        generate_daily_schedule(target_day, "extreme", ["09:00-17:00"], [])
    with pytest.raises(MindbellValueError):
        generate_daily_schedule(target_day, "low", ["09:00-17:00"], [], -5)


def test_custom_density_counts(target_day):
    events = generate_daily_schedule(
        target_day,
        "high",
        ["09:00-17:00"],
        [],
        seed=8,
        density_counts={BellDensity.LOW: 1, BellDensity.MEDIUM: 2, BellDensity.HIGH: 3},
    )
    assert len(events) <= 3


def test_remove_time_around_bell_splits_straddling_slot(target_day):
    slot = TimeSlot(start=clock(target_day, "09:00"), end=clock(target_day, "17:00"))
    remaining = remove_time_around_bell([slot], clock(target_day, "12:00"), timedelta(minutes=45))
    assert remaining == [
        TimeSlot(start=clock(target_day, "09:00"), end=clock(target_day, "11:15")),
        TimeSlot(start=clock(target_day, "12:45"), end=clock(target_day, "17:00")),
    ]


def test_remove_time_around_bell_drops_covered_and_keeps_distant_slots(target_day):
    covered = TimeSlot(start=clock(target_day, "11:30"), end=clock(target_day, "12:30"))
    distant = TimeSlot(start=clock(target_day, "15:00"), end=clock(target_day, "16:00"))
    remaining = remove_time_around_bell(
        [covered, distant], clock(target_day, "12:00"), timedelta(minutes=45)
    )
    assert remaining == [distant]


def test_place_bells_stops_when_pool_is_exhausted(target_day, rng):
    slot = TimeSlot(start=clock(target_day, "09:00"), end=clock(target_day, "10:00"))
    placed = place_bells([slot], 5, 45, rng=rng)
    assert 1 <= len(placed) <= 2
    assert placed == sorted(placed)


def test_place_bells_does_not_mutate_input(target_day, rng):
    slots = [TimeSlot(start=clock(target_day, "09:00"), end=clock(target_day, "17:00"))]
    place_bells(slots, 4, 45, rng=rng)
    assert slots == [TimeSlot(start=clock(target_day, "09:00"), end=clock(target_day, "17:00"))]


def test_zero_interval_never_repeats_an_instant(target_day):
    for seed in range(50):
        events = generate_daily_schedule(
            target_day, "high", ["09:00-09:15"], [], 0, rng=random.Random(seed)
        )
        times = [event.scheduled_time for event in events]
        assert len(times) == 12
        assert all(earlier < later for earlier, later in zip(times, times[1:]))


def test_remove_time_around_bell_with_zero_interval_drops_the_bell_second(target_day):
    slot = TimeSlot(start=clock(target_day, "09:00"), end=clock(target_day, "09:15"))
    bell = clock(target_day, "09:05")
    remaining = remove_time_around_bell([slot], bell, timedelta(0))
    assert remaining == [
        TimeSlot(start=clock(target_day, "09:00"), end=bell),
        TimeSlot(start=bell + timedelta(seconds=1), end=clock(target_day, "09:15")),
    ]
    assert not any(piece.contains(bell) for piece in remaining)

from __future__ import annotations

import dataclasses
import random
from concurrent.futures import ThreadPoolExecutor
from datetime import date, timedelta

import pytest

from mindbell import BellScheduler
from mindbell.core.errors import MindbellValueError
from mindbell.scheduling import BellDensity
from mindbell.validation.schedule import INSUFFICIENT_TIME


def test_scheduler_is_immutable():
    scheduler = BellScheduler()
    with pytest.raises(dataclasses.FrozenInstanceError):
        scheduler.minimum_interval = 10
    with pytest.raises(TypeError):
        scheduler.density_counts[BellDensity.LOW] = 1


def test_scheduler_defaults():
    scheduler = BellScheduler()
    assert scheduler.minimum_interval == 45
    assert scheduler.max_attempts == 100
    assert scheduler.bell_count("low") == 4
    assert scheduler.bell_count("MEDIUM") == 8
    assert scheduler.bell_count(BellDensity.HIGH) == 12


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"minimum_interval": -1}, "non-negative"),
        ({"max_attempts": 0}, "max_attempts"),
        ({"density_counts": {"low": 1}}, "missing entries for: high, medium"),
        ({"density_counts": {"low": 1, "medium": -2, "high": 3}}, "non-negative"),
    ],
)
def test_scheduler_rejects_bad_configuration(kwargs, message):
    with pytest.raises(MindbellValueError, match=message):
        BellScheduler(**kwargs)


def test_scheduler_uses_configured_interval(target_day):
    scheduler = BellScheduler(minimum_interval=120)
    events = scheduler.generate_daily_schedule(target_day, "low", ["09:00-17:00"], seed=4)
    times = [event.scheduled_time for event in events]
    assert 1 <= len(times) <= 4
    assert all(b - a >= timedelta(minutes=120) for a, b in zip(times, times[1:]))


def test_call_interval_overrides_configured_one(target_day):
    scheduler = BellScheduler(minimum_interval=120)
    events = scheduler.generate_daily_schedule(
        target_day, "high", ["09:00-10:00"], [], 30, seed=4
    )
    assert len(events) <= 2


def test_scheduler_custom_counts_flow_into_generation_and_validation(target_day):
    scheduler = BellScheduler(density_counts={"low": 1, "medium": 2, "high": 3})
    events = scheduler.generate_daily_schedule(target_day, "high", ["07:00-21:00"], seed=2)
    assert len(events) <= 3

    result = scheduler.validate(density="high", active_windows=["09:00-10:00"])
    assert result.estimated_bells_per_day == 3
    assert result.warnings == [INSUFFICIENT_TIME]


def test_scheduler_available_minutes_accepts_raw_windows(target_day):
    scheduler = BellScheduler()
    assert scheduler.available_minutes(target_day, ["00:00-24:00"], ["22:00-07:00"]) == 900
    assert scheduler.available_minutes(target_day, [{"start": "09:00", "end": "17:00"}]) == 480


def test_shared_scheduler_is_deterministic_across_threads():
    scheduler = BellScheduler()
    days = [date(2025, 3, 1) + timedelta(days=offset) for offset in range(8)]

    def run(day: date):
        events = scheduler.generate_daily_schedule(
            day, "high", ["07:00-12:00", "13:00-21:00"], ["22:00-06:00"], rng=random.Random(day.toordinal())
        )
        return [(event.id, event.scheduled_time) for event in events]

    sequential = [run(day) for day in days]
    with ThreadPoolExecutor(max_workers=4) as pool:
        concurrent = list(pool.map(run, days))
    assert concurrent == sequential

"""User settings that drive the daily bell schedule."""

from __future__ import annotations

import random as _random
from collections.abc import Mapping
from datetime import date
from typing import Any

from pydantic import BaseModel, Field, field_validator

from mindbell.core.errors import MindbellValueError
from mindbell.scheduler import BellScheduler
from mindbell.scheduling import BellDensity, BellEvent, TimeWindow, bell_count_for_density
from mindbell.validation import check_time_windows, validate_schedule_params
from mindbell.validation.schedule import INTERVAL_NOT_A_NUMBER, coerce_interval, window_list


def _default_active_windows() -> list[TimeWindow]:
    return [TimeWindow(start="09:00", end="17:00")]


def _default_quiet_hours() -> list[TimeWindow]:
    return [TimeWindow(start="22:00", end="07:00")]


class Settings(BaseModel):
    """Persistable bell settings.

    Attributes
    ----------
    active_windows:
        Same-day windows where bells may ring (1-10 entries, no overlaps).
    quiet_hours:
        Windows where bells never ring; may wrap past midnight. May be empty.
    bell_density:
        Target density band (low/medium/high).
    minimum_interval:
        Minutes between consecutive bells.
    sound_enabled / vibration_enabled / sound_file:
        Delivery preferences passed through to notification collaborators.
    """

    active_windows: list[TimeWindow] = Field(default_factory=_default_active_windows)
    quiet_hours: list[TimeWindow] = Field(default_factory=_default_quiet_hours)
    bell_density: BellDensity = BellDensity.MEDIUM
    minimum_interval: int = 45
    sound_enabled: bool = True
    vibration_enabled: bool = True
    sound_file: str | None = None

    @field_validator("active_windows")
    @classmethod
    def _active_windows_valid(cls, value: list[TimeWindow]) -> list[TimeWindow]:
        errors = check_time_windows(value)
        if errors:
            raise ValueError(f"Invalid active windows: {', '.join(errors)}")
        return value

    @field_validator("quiet_hours")
    @classmethod
    def _quiet_hours_valid(cls, value: list[TimeWindow]) -> list[TimeWindow]:
        errors = check_time_windows(value, allow_overnight=True, require_nonempty=False)
        if errors:
            raise ValueError(f"Invalid quiet hours: {', '.join(errors)}")
        return value

    @field_validator("minimum_interval")
    @classmethod
    def _interval_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("minimum_interval must be positive")
        return value


class SettingsValidation(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


def default_settings() -> Settings:
    return Settings()


def validate_settings(data: Mapping[str, Any]) -> SettingsValidation:
    """Collect errors and warnings for a partial settings mapping without raising.

    Density, interval and window lists are checked when present. When active windows
    and quiet hours are lists and density and interval are usable, the schedule
    feasibility warnings are appended as well.
    """
    errors: list[str] = []
    warnings: list[str] = []

    density = data.get("bell_density")
    if density is not None:
        try:
            bell_count_for_density(density)
        except MindbellValueError as exc:
            errors.append(str(exc))

    active = data.get("active_windows")
    if active is not None:
        errors.extend(check_time_windows(active))
    quiet = data.get("quiet_hours")
    if quiet is not None:
        errors.extend(check_time_windows(quiet, allow_overnight=True, require_nonempty=False))

    interval = coerce_interval(data.get("minimum_interval", 45))
    if interval is None:
        errors.append(INTERVAL_NOT_A_NUMBER)
    elif interval <= 0:
        errors.append("minimum_interval must be positive")

    if (
        density is not None
        and interval is not None
        and window_list(active) is not None
        and window_list(quiet) is not None
    ):
        feasibility = validate_schedule_params(
            density=density,
            active_windows=active,
            quiet_hours=quiet,
            minimum_interval=interval,
        )
        warnings.extend(w for w in feasibility.warnings if w not in warnings)

    return SettingsValidation(valid=not errors, errors=errors, warnings=warnings)


def generate_from_settings(
    settings: Settings,
    day: date,
    *,
    rng: _random.Random | None = None,
    seed: int | None = None,
    scheduler: BellScheduler | None = None,
) -> list[BellEvent]:
    """Generate ``day``'s bells from stored settings."""
    scheduler = scheduler or BellScheduler()
    return scheduler.generate_daily_schedule(
        day,
        settings.bell_density,
        settings.active_windows,
        settings.quiet_hours,
        settings.minimum_interval,
        rng=rng,
        seed=seed,
    )


__all__ = [
    "Settings",
    "SettingsValidation",
    "default_settings",
    "validate_settings",
    "generate_from_settings",
]

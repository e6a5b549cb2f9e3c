"""Stateless scheduler facade shared by the CLI and embedding applications."""

from __future__ import annotations

import random as _random
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date, tzinfo as TzInfo
from types import MappingProxyType
from typing import Any

from mindbell.core.errors import MindbellValueError
from mindbell.scheduling import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MINIMUM_INTERVAL,
    DENSITY_BELL_COUNTS,
    BellDensity,
    BellEvent,
    available_minutes,
    bell_count_for_density,
    coerce_windows,
    generate_daily_schedule,
)
from mindbell.validation import ScheduleValidation, validate_schedule_params


def _frozen_counts(counts: Mapping[BellDensity | str, int]) -> Mapping[BellDensity, int]:
    table = {BellDensity(key): int(value) for key, value in counts.items()}
    missing = set(BellDensity) - set(table)
    if missing:
        names = ", ".join(sorted(density.value for density in missing))
        raise MindbellValueError(f"density_counts is missing entries for: {names}")
    if any(value < 0 for value in table.values()):
        raise MindbellValueError("density_counts must be non-negative")
    return MappingProxyType(table)


@dataclass(frozen=True, slots=True)
class BellScheduler:
    """Configuration-only scheduler; holds no per-call state.

    Parameters
    ----------
    minimum_interval:
        Default spacing in minutes when a call does not supply one.
    max_attempts:
        Candidate draws per bell before that bell is skipped.
    density_counts:
        Density-to-bell-count mapping (defaults to low=4, medium=8, high=12).

    Instances are immutable, so one scheduler can serve concurrent callers; each
    call builds its own slots and should receive its own random generator.
    """

    minimum_interval: float = DEFAULT_MINIMUM_INTERVAL
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    density_counts: Mapping[BellDensity, int] = field(
        default_factory=lambda: MappingProxyType(dict(DENSITY_BELL_COUNTS))
    )

    def __post_init__(self) -> None:
        if self.minimum_interval < 0:
            raise MindbellValueError("minimum_interval must be non-negative")
        if self.max_attempts < 1:
            raise MindbellValueError("max_attempts must be >= 1")
        object.__setattr__(self, "density_counts", _frozen_counts(self.density_counts))

    def bell_count(self, density: BellDensity | str) -> int:
        return bell_count_for_density(density, self.density_counts)

    def available_minutes(
        self, day: date, active_windows: Iterable[Any], quiet_hours: Iterable[Any] = ()
    ) -> int:
        return available_minutes(day, coerce_windows(active_windows), coerce_windows(quiet_hours))

    def generate_daily_schedule(
        self,
        day: date,
        density: BellDensity | str,
        active_windows: Sequence[Any],
        quiet_hours: Sequence[Any] = (),
        minimum_interval: float | None = None,
        *,
        rng: _random.Random | None = None,
        seed: int | None = None,
        tzinfo: TzInfo | None = None,
    ) -> list[BellEvent]:
        """Delegate to :func:`mindbell.scheduling.generate_daily_schedule` with this configuration."""
        return generate_daily_schedule(
            day,
            density,
            active_windows,
            quiet_hours,
            self.minimum_interval if minimum_interval is None else minimum_interval,
            rng=rng,
            seed=seed,
            max_attempts=self.max_attempts,
            tzinfo=tzinfo,
            density_counts=self.density_counts,
        )

    def validate(
        self,
        *,
        density: BellDensity | str,
        active_windows: Iterable[Any],
        quiet_hours: Iterable[Any] = (),
        minimum_interval: float | None = None,
        day: date | None = None,
    ) -> ScheduleValidation:
        return validate_schedule_params(
            density=density,
            active_windows=active_windows,
            quiet_hours=quiet_hours,
            minimum_interval=self.minimum_interval if minimum_interval is None else minimum_interval,
            day=day,
            density_counts=self.density_counts,
        )


__all__ = ["BellScheduler"]

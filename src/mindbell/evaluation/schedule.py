"""Tabular views and spacing metrics for generated bell schedules."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any

import pandas as pd

from mindbell.scheduling import BellEvent

SCHEDULE_COLUMNS: tuple[str, ...] = (
    "bell_id",
    "scheduled_time",
    "time_of_day",
    "status",
    "gap_minutes",
)


def schedule_dataframe(events: Sequence[BellEvent]) -> pd.DataFrame:
    """Return one row per bell in time order; ``gap_minutes`` is NaN for the first bell."""
    if not events:
        return pd.DataFrame(columns=list(SCHEDULE_COLUMNS))
    ordered = sorted(events, key=lambda event: event.scheduled_time)
    df = pd.DataFrame(
        {
            "bell_id": [event.id for event in ordered],
            "scheduled_time": pd.to_datetime([event.scheduled_time for event in ordered]),
            "time_of_day": [event.scheduled_time.strftime("%H:%M:%S") for event in ordered],
            "status": [event.status.value for event in ordered],
        }
    )
    df["gap_minutes"] = df["scheduled_time"].diff().dt.total_seconds() / 60.0
    return df.reindex(columns=list(SCHEDULE_COLUMNS))


@dataclass(slots=True)
class ScheduleSummary:
    """Headline numbers for one generated day."""

    bells: int
    first: datetime | None
    last: datetime | None
    min_gap_minutes: float | None
    mean_gap_minutes: float | None
    spacing_violations: int

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        for key in ("first", "last"):
            if data[key] is not None:
                data[key] = data[key].isoformat()
        return data


def schedule_summary(
    events: Sequence[BellEvent], minimum_interval: float | None = None
) -> ScheduleSummary:
    """Summarise spacing; gaps shorter than ``minimum_interval`` count as violations."""
    times = sorted(event.scheduled_time for event in events)
    gaps = [(later - earlier).total_seconds() / 60.0 for earlier, later in zip(times, times[1:])]
    violations = 0
    if minimum_interval is not None:
        violations = sum(1 for gap in gaps if gap < minimum_interval)
    return ScheduleSummary(
        bells=len(times),
        first=times[0] if times else None,
        last=times[-1] if times else None,
        min_gap_minutes=min(gaps) if gaps else None,
        mean_gap_minutes=sum(gaps) / len(gaps) if gaps else None,
        spacing_violations=violations,
    )


__all__ = ["SCHEDULE_COLUMNS", "ScheduleSummary", "schedule_dataframe", "schedule_summary"]

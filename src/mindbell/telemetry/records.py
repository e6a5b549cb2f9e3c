"""Structured JSONL records for schedule generation runs."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from datetime import date, datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any
from uuid import uuid4

from mindbell.scheduling import BellDensity, BellEvent

SCHEMA_VERSION = "1.0"


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def append_jsonl(path: str | Path, record: Mapping[str, Any]) -> None:
    """Append ``record`` as one compact JSON line, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        json.dump(record, handle, ensure_ascii=False, separators=(",", ":"), default=_json_default)
        handle.write("\n")


def schedule_run_record(
    *,
    day: date,
    density: BellDensity | str,
    events: Sequence[BellEvent],
    requested: int,
    available_minutes: int,
    minimum_interval: float,
    seed: int | None = None,
    context: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build the telemetry record for one generated day."""
    return {
        "record_type": "schedule",
        "schema_version": SCHEMA_VERSION,
        "run_id": uuid4().hex,
        "timestamp": _iso_now(),
        "date": day.isoformat(),
        "density": BellDensity(density).value,
        "seed": seed,
        "minimum_interval": minimum_interval,
        "available_minutes": available_minutes,
        "requested": requested,
        "placed": len(events),
        "bell_times": [event.scheduled_time.isoformat() for event in events],
        "context": dict(context or {}),
    }


__all__ = ["SCHEMA_VERSION", "append_jsonl", "schedule_run_record"]

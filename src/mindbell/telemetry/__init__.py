"""Telemetry helpers for recording schedule generation runs."""

from .records import SCHEMA_VERSION, append_jsonl, schedule_run_record

__all__ = ["SCHEMA_VERSION", "append_jsonl", "schedule_run_record"]

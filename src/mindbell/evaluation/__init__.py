"""Schedule reporting helpers."""

from .schedule import SCHEDULE_COLUMNS, ScheduleSummary, schedule_dataframe, schedule_summary

__all__ = ["SCHEDULE_COLUMNS", "ScheduleSummary", "schedule_dataframe", "schedule_summary"]

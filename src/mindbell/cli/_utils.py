"""CLI helper utilities for mindbell."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date

from mindbell.scheduling import TimeWindow
from mindbell.validation import check_time_windows


def parse_window_args(
    window_args: Sequence[str] | None, *, allow_overnight: bool = False
) -> list[TimeWindow]:
    """Parse ``HH:MM-HH:MM`` strings into windows and apply the settings window rules.

    Only quiet hours should pass ``allow_overnight``. Raises ``ValueError`` with every
    problem found so the CLI can report them as one bad parameter.
    """
    windows: list[TimeWindow] = []
    for arg in window_args or ():
        try:
            windows.append(TimeWindow.coerce(arg))
        except ValueError as exc:
            raise ValueError(f"Time window must be in HH:MM-HH:MM format (got '{arg}')") from exc
    errors = check_time_windows(windows, allow_overnight=allow_overnight, require_nonempty=False)
    if errors:
        raise ValueError("; ".join(errors))
    return windows


def parse_day(value: str | None) -> date:
    """Parse ``YYYY-MM-DD`` (or ``today``/empty) into a date."""
    if value is None or value.strip().lower() in {"", "today"}:
        return date.today()
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise ValueError(f"Date must be in YYYY-MM-DD format (got '{value}')") from exc


def configure_logging(verbose: bool) -> None:
    """Route mindbell log records through rich; DEBUG when ``verbose``."""
    from rich.logging import RichHandler

    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger("mindbell")
    logger.setLevel(level)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(RichHandler(show_path=False, markup=False))


__all__ = ["parse_window_args", "parse_day", "configure_logging"]

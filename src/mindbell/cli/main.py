from __future__ import annotations

import random
from datetime import timedelta
from pathlib import Path
from typing import Any

import click
import pandas as pd
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mindbell.cli._utils import configure_logging, parse_day, parse_window_args
from mindbell.core.errors import MindbellValueError
from mindbell.evaluation import schedule_dataframe, schedule_summary
from mindbell.scheduler import BellScheduler
from mindbell.scheduling import BellDensity, BellEvent
from mindbell.settings import (
    Settings,
    default_settings,
    dump_settings,
    load_settings,
    read_settings_data,
    validate_settings,
)
from mindbell.telemetry import append_jsonl, schedule_run_record
from mindbell.validation import validate_schedule_params

app = typer.Typer(add_completion=False, no_args_is_help=True, help="Mindful bell schedule tools.")
console = Console()
DENSITY_CHOICE = click.Choice([density.value for density in BellDensity], case_sensitive=False)


def _enable_rich_tracebacks():
    """Enable rich tracebacks with local variables."""
    import rich.traceback as _rt

    _rt.install(show_locals=True, width=140, extra_lines=2)


def _load_settings_or_exit(path: Path | None) -> Settings:
    if path is None:
        return default_settings()
    try:
        return load_settings(path)
    except (ValidationError, MindbellValueError) as exc:
        console.print(f"[red]Invalid settings file {path}:[/red] {escape(str(exc))}")
        raise typer.Exit(1)


def _print_day(day_label: str, events: list[BellEvent], minimum_interval: float) -> None:
    table = Table(title=f"Bells for {day_label}")
    table.add_column("#", justify="right")
    table.add_column("Time")
    table.add_column("Gap (min)", justify="right")
    table.add_column("Id")
    previous = None
    for index, event in enumerate(events, start=1):
        gap = ""
        if previous is not None:
            gap = f"{(event.scheduled_time - previous).total_seconds() / 60.0:.1f}"
        table.add_row(str(index), event.scheduled_time.strftime("%H:%M:%S"), gap, event.id[:8])
        previous = event.scheduled_time
    console.print(table)
    summary = schedule_summary(events, minimum_interval)
    if summary.spacing_violations:
        console.print(f"[yellow]{summary.spacing_violations} gap(s) below {minimum_interval} min[/yellow]")


@app.command()
def schedule(
    settings_path: Path | None = typer.Option(
        None, "--settings", "-s", help="Settings file (YAML/JSON/TOML).", exists=True, dir_okay=False
    ),
    day: str | None = typer.Option(None, "--date", help="Target date (YYYY-MM-DD). Defaults to today."),
    days: int = typer.Option(1, "--days", min=1, help="Generate this many consecutive days."),
    density: str | None = typer.Option(
        None,
        "--density",
        help="Override bell density (low|medium|high).",
        show_choices=True,
        click_type=DENSITY_CHOICE,
    ),
    window: list[str] | None = typer.Option(
        None, "--window", "-w", help="Active window HH:MM-HH:MM (repeatable). Replaces settings."
    ),
    quiet: list[str] | None = typer.Option(
        None, "--quiet", "-q", help="Quiet hours HH:MM-HH:MM (repeatable). Replaces settings."
    ),
    no_quiet: bool = typer.Option(False, "--no-quiet", help="Ignore configured quiet hours."),
    interval: int | None = typer.Option(None, "--interval", min=0, help="Minimum minutes between bells."),
    seed: int | None = typer.Option(None, "--seed", help="RNG seed; printed when omitted."),
    out: Path | None = typer.Option(None, "--out", help="Write the schedule to this CSV path."),
    telemetry_log: Path | None = typer.Option(
        None,
        "--telemetry-log",
        help="Append one JSONL record per generated day.",
        writable=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging and rich tracebacks."),
):
    """Generate bell schedules from settings and print them."""
    if verbose:
        _enable_rich_tracebacks()
    configure_logging(verbose)

    settings = _load_settings_or_exit(settings_path)
    try:
        start_day = parse_day(day)
        active = parse_window_args(window) if window else list(settings.active_windows)
        quiet_hours = (
            parse_window_args(quiet, allow_overnight=True) if quiet else list(settings.quiet_hours)
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    if no_quiet:
        quiet_hours = []
    chosen_density = BellDensity(density.lower()) if density else settings.bell_density
    minimum_interval = settings.minimum_interval if interval is None else interval

    if seed is None:
        seed = random.SystemRandom().randrange(2**31)
    console.print(f"Seed: {seed}")
    rng = random.Random(seed)
    scheduler = BellScheduler(minimum_interval=minimum_interval)

    frames: list[pd.DataFrame] = []
    for offset in range(days):
        current = start_day + timedelta(days=offset)
        events = scheduler.generate_daily_schedule(
            current, chosen_density, active, quiet_hours, rng=rng
        )
        minutes = scheduler.available_minutes(current, active, quiet_hours)
        target = scheduler.bell_count(chosen_density)
        requested = target
        if minimum_interval and minutes < target * minimum_interval:
            requested = minutes // minimum_interval
        _print_day(current.isoformat(), events, minimum_interval)
        console.print(
            f"Placed {len(events)} of {requested} bell(s); {minutes} available minute(s)."
        )
        if out is not None:
            frame = schedule_dataframe(events)
            frame.insert(0, "date", current.isoformat())
            frames.append(frame)
        if telemetry_log is not None:
            append_jsonl(
                telemetry_log,
                schedule_run_record(
                    day=current,
                    density=chosen_density,
                    events=events,
                    requested=requested,
                    available_minutes=minutes,
                    minimum_interval=minimum_interval,
                    seed=seed,
                    context={"command": "schedule", "day_offset": offset},
                ),
            )

    if out is not None:
        out.parent.mkdir(parents=True, exist_ok=True)
        pd.concat(frames, ignore_index=True).to_csv(out, index=False)
        console.print(f"Saved schedule to {out}")


@app.command()
def validate(
    settings_path: Path | None = typer.Option(
        None, "--settings", "-s", help="Settings file (YAML/JSON/TOML).", exists=True, dir_okay=False
    ),
    window: list[str] | None = typer.Option(
        None, "--window", "-w", help="Active window HH:MM-HH:MM (repeatable). Replaces settings."
    ),
    quiet: list[str] | None = typer.Option(
        None, "--quiet", "-q", help="Quiet hours HH:MM-HH:MM (repeatable). Replaces settings."
    ),
    density: str | None = typer.Option(
        None,
        "--density",
        help="Override bell density (low|medium|high).",
        show_choices=True,
        click_type=DENSITY_CHOICE,
    ),
    interval: int | None = typer.Option(None, "--interval", help="Minimum minutes between bells."),
):
    """Check settings and estimate whether the bell density fits."""
    data: dict[str, Any] = default_settings().model_dump(mode="json")
    if settings_path is not None:
        try:
            data.update(read_settings_data(settings_path))
        except MindbellValueError as exc:
            console.print(f"[red]Could not read {settings_path}:[/red] {escape(str(exc))}")
            raise typer.Exit(1)
    if window:
        data["active_windows"] = list(window)
    if quiet:
        data["quiet_hours"] = list(quiet)
    if density:
        data["bell_density"] = density.lower()
    if interval is not None:
        data["minimum_interval"] = interval

    feasibility = validate_schedule_params(
        density=data.get("bell_density", BellDensity.MEDIUM.value),
        active_windows=data.get("active_windows") or [],
        quiet_hours=data.get("quiet_hours") or [],
        minimum_interval=data.get("minimum_interval"),
    )
    settings_check = validate_settings(data)

    t = Table(title="Schedule feasibility")
    t.add_column("Check")
    t.add_column("Value")
    t.add_row("Valid", "yes" if feasibility.valid and settings_check.valid else "no")
    t.add_row("Estimated bells/day", str(feasibility.estimated_bells_per_day))
    t.add_row("Available minutes/day", str(feasibility.available_minutes_per_day))
    console.print(t)
    for error in settings_check.errors:
        console.print(f"[red]error:[/red] {escape(error)}")
    for warning in dict.fromkeys(feasibility.warnings + settings_check.warnings):
        console.print(f"[yellow]warning:[/yellow] {escape(warning)}")
    if not (feasibility.valid and settings_check.valid):
        raise typer.Exit(1)


@app.command("init-settings")
def init_settings(
    path: Path = typer.Argument(..., help="Destination settings YAML."),
    overwrite: bool = typer.Option(False, "--overwrite", help="Replace an existing file."),
):
    """Write the default settings to a YAML file."""
    if path.exists() and not overwrite:
        console.print(f"[red]{path} already exists[/red] (use --overwrite to replace it)")
        raise typer.Exit(1)
    dump_settings(default_settings(), path)
    console.print(f"Wrote default settings to {path}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()

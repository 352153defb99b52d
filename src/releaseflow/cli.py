"""Command-line interface for releaseflow."""

from __future__ import annotations

import csv
from datetime import date
from pathlib import Path
from typing import Annotated

import typer

from .config import UnifiedConfig, discover_config
from .exceptions import ReleaseFlowError
from .gantt import render_mermaid
from .loader import load_release
from .logger import setup_logger
from .models import Release
from .scheduler import ReleaseSchedule, schedule_release

app = typer.Typer(
    name="releaseflow",
    help="Release planning - capacity-aware Gantt scheduling of release tasks",
    add_completion=False,
)

ReleaseFileArg = Annotated[
    Path, typer.Argument(help="Release data file (JSON export or YAML)")
]
ReleaseIdOption = Annotated[
    str | None,
    typer.Option("--release", "-r", help="Release id (default: the active release)"),
]


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=placements, 2=checks, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: releaseflow_config.yaml)",
        ),
    ] = None,
) -> None:
    """Global options for releaseflow commands."""
    setup_logger(verbose)
    ctx.obj = {"config_path": config}


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(1)


def _load(
    ctx: typer.Context, file: Path, release_id: str | None
) -> tuple[Release, UnifiedConfig]:
    """Load the release and the effective configuration, exiting on errors."""
    config_path = ctx.obj.get("config_path") if ctx.obj else None
    try:
        config = discover_config(file, config_path)
        release = load_release(file, release_id)
    except ReleaseFlowError as e:
        raise _fail(str(e)) from None
    return release, config


def _parse_date_option(date_str: str | None, option_name: str) -> date | None:
    """Parse a YYYY-MM-DD CLI option, exiting with an error on bad input."""
    if date_str is None:
        return None
    try:
        return date.fromisoformat(date_str)
    except ValueError:
        raise _fail(
            f"Invalid date '{date_str}' for --{option_name}. Use YYYY-MM-DD format."
        ) from None


def _display_schedule(release: Release, result: ReleaseSchedule) -> None:
    typer.echo(f"Schedule for {release.name} (starts {release.start_date})")
    typer.echo("=" * 80)
    typer.echo("")

    for task in result.tasks:
        typer.echo(f"{task.name} ({task.task_id})")
        if task.is_scheduled:
            typer.echo(f"  Start:    {task.start_date}")
            typer.echo(f"  End:      {task.end_date}")
        else:
            assert task.unscheduled_reason is not None
            typer.echo(f"  Unscheduled: {task.unscheduled_reason.value}")
        typer.echo(f"  Assignee: {task.assigned_employee or '-'}")
        typer.echo(f"  Progress: {task.progress}%")
        if task.dependencies:
            typer.echo(f"  Blocked by: {', '.join(task.dependencies)}")
        typer.echo("")

    if result.employee_loads:
        typer.echo("Team load")
        for load in result.employee_loads:
            typer.echo(
                f"  {load.name}: {load.hours_allocated:g}h of {load.hours_available:g}h "
                f"({load.utilization:.0%})"
            )
        typer.echo("")

    if result.release_date is not None:
        typer.echo(f"Projected release date: {result.release_date}")
    else:
        typer.echo("Projected release date: unavailable (some tasks cannot be scheduled)")
    if release.target_end_date is not None:
        typer.echo(f"Target end date:        {release.target_end_date}")


def _export_schedule_csv(result: ReleaseSchedule, output_path: Path) -> None:
    with output_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(
            ["task_id", "task_name", "assignee", "start_date", "end_date", "progress", "reason"]
        )
        for task in result.tasks:
            writer.writerow(
                [
                    task.task_id,
                    task.name,
                    task.assigned_employee or "",
                    task.start_date.isoformat() if task.start_date else "",
                    task.end_date.isoformat() if task.end_date else "",
                    task.progress,
                    task.unscheduled_reason.value if task.unscheduled_reason else "",
                ]
            )


@app.command()
def schedule(
    ctx: typer.Context,
    file: ReleaseFileArg,
    release_id: ReleaseIdOption = None,
    output_csv: Annotated[
        Path | None,
        typer.Option("--output-csv", help="Write the schedule to a CSV file"),
    ] = None,
) -> None:
    """Compute the schedule of a release and display it."""
    release, config = _load(ctx, file, release_id)
    result = schedule_release(release, config.scheduler)

    if output_csv:
        _export_schedule_csv(result, output_csv)
        typer.echo(f"Schedule exported to {output_csv}")
    else:
        _display_schedule(release, result)

    if result.warnings:
        typer.echo("\nWarnings:", err=True)
        for warning in result.warnings:
            typer.echo(f"  - {warning}", err=True)


@app.command()
def gantt(  # noqa: PLR0913 - CLI command needs multiple options
    ctx: typer.Context,
    file: ReleaseFileArg,
    release_id: ReleaseIdOption = None,
    title: Annotated[
        str | None, typer.Option("--title", help="Chart title (default: release name)")
    ] = None,
    axis_format: Annotated[
        str | None, typer.Option("--axis-format", help="Mermaid axisFormat, e.g. '%b %d'")
    ] = None,
    tick_interval: Annotated[
        str | None, typer.Option("--tick-interval", help="Mermaid tickInterval, e.g. '1week'")
    ] = None,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Output file path")] = None,
) -> None:
    """Render the schedule of a release as a Mermaid Gantt chart."""
    release, config = _load(ctx, file, release_id)
    result = schedule_release(release, config.scheduler)

    mermaid_output = render_mermaid(
        release,
        result,
        title=title or config.gantt.title,
        axis_format=axis_format or config.gantt.axis_format,
        tick_interval=tick_interval or config.gantt.tick_interval,
    )

    if output:
        # Markdown files get a fenced block so they render in place
        if output.suffix.lower() == ".md":
            content = f"```mermaid\n{mermaid_output}\n```\n"
        else:
            content = mermaid_output
        output.write_text(content, encoding="utf-8")
        typer.echo(f"Gantt chart written to {output}")
    else:
        typer.echo(mermaid_output)


@app.command()
def team(
    ctx: typer.Context,
    file: ReleaseFileArg,
    release_id: ReleaseIdOption = None,
    on: Annotated[
        str | None,
        typer.Option("--on", help="Show capacity on this date (YYYY-MM-DD, default: today)"),
    ] = None,
) -> None:
    """List the team of a release with each member's capacity on a date."""
    day = _parse_date_option(on, "on") or date.today()  # noqa: DTZ011
    release, _ = _load(ctx, file, release_id)

    if not release.employees:
        typer.echo("No team members defined.")
        return

    for employee in release.employees:
        period = employee.capacity_on(day)
        if period is None:
            capacity = "no capacity defined"
        elif period.hours_per_day == 0:
            capacity = f"unavailable ({period.description or 'vacation'})"
        else:
            capacity = f"{period.hours_per_day:g}h/day"
            if period.description:
                capacity += f" ({period.description})"
        position = f", {employee.position}" if employee.position else ""
        typer.echo(f"{employee.name}{position}: {capacity}")
        typer.echo(f"  {len(employee.capacity_periods)} capacity period(s) defined")


def main() -> int:
    """Main entry point."""
    app()
    return 0


if __name__ == "__main__":
    main()

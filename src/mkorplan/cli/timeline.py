"""Timeline commands: render the fleet calendar and edit unit rows."""

from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path

import typer
from rich.table import Table

from mkorplan.cli._utils import (
    cli_errors,
    console,
    get_config,
    open_registry,
    parse_date,
    resolve_unit,
    stage_cell,
)
from mkorplan.planning import segments_dataframe, timeline_grid
from mkorplan.scheduling import reorder_units, resize_stage, shift_start
from mkorplan.scheduling.timeline import STAGE_LABELS, calendar_days, segment_for_day

timeline_app = typer.Typer(add_completion=False, no_args_is_help=True, help="Fleet timeline.")


@timeline_app.command("show")
def show(
    ctx: typer.Context,
    start: str | None = typer.Option(None, "--start", help="First day shown (defaults to earliest unit start)."),
    end: str | None = typer.Option(None, "--end", help="Last day shown (defaults to start + horizon_days - 1)."),
    out_csv: Path | None = typer.Option(None, "--out-csv", help="Write the unit-by-day grid as CSV."),
    out_segments: Path | None = typer.Option(
        None, "--out-segments", help="Write the per-unit segment breakdown as CSV."
    ),
) -> None:
    """Render each unit's staged timeline as a day grid."""
    config = get_config(ctx)
    with cli_errors():
        units = list(open_registry(config).list_units())
    if not units:
        console.print("No units yet. Add a delivery with [bold]mkorplan inventory add[/].")
        raise typer.Exit(0)

    first = parse_date(start, option="--start") if start else min(u.start for u in units)
    last = (
        parse_date(end, option="--end")
        if end
        else first + timedelta(days=config.horizon_days - 1)
    )
    if last < first:
        raise typer.BadParameter("--end must not precede --start")
    days: list[date] = calendar_days(first, last)

    table = Table(title=f"MKOR timeline {first.isoformat()} .. {last.isoformat()}")
    table.add_column("Unit", no_wrap=True)
    table.add_column("Days", justify="right")
    for day in days:
        table.add_column(day.strftime("%d.%m"), justify="center", no_wrap=True)
    for unit in units:
        segments = unit.segments()
        cells = []
        for day in days:
            cell = segment_for_day(segments, day)
            cells.append(stage_cell(cell.stage if cell else None, bool(cell and cell.is_first)))
        table.add_row(unit.name, str(unit.total_days), *cells)
    console.print(table)
    console.print("Stages: " + ", ".join(STAGE_LABELS.values()))

    if out_csv:
        out_csv.parent.mkdir(parents=True, exist_ok=True)
        timeline_grid(units, first, last).to_csv(out_csv)
        console.print(f"Wrote timeline grid to {out_csv}")
    if out_segments:
        out_segments.parent.mkdir(parents=True, exist_ok=True)
        segments_dataframe(units).to_csv(out_segments, index=False)
        console.print(f"Wrote segments to {out_segments}")


@timeline_app.command("resize")
def resize(
    ctx: typer.Context,
    unit_ref: str = typer.Argument(..., help="Unit id or name."),
    stage_index: int = typer.Argument(..., help="Zero-based slot in the duration sequence."),
    days: int = typer.Argument(..., help="New stage length in days (values below 1 become 1)."),
) -> None:
    """Change one stage's duration on a unit's timeline row."""
    registry = open_registry(get_config(ctx))
    with cli_errors():
        units = registry.list_units()
        unit = resolve_unit(units, unit_ref)
        updated = resize_stage(units, unit.id, stage_index, days)
        registry.save_units(updated)
    new_unit = next(u for u in updated if u.id == unit.id)
    console.print(
        f"[green]Resized[/] {unit.name} stage {stage_index}: "
        f"{unit.durations[stage_index]} -> {new_unit.durations[stage_index]} days "
        f"(cycle {new_unit.total_days} days)"
    )


@timeline_app.command("shift")
def shift(
    ctx: typer.Context,
    unit_ref: str = typer.Argument(..., help="Unit id or name."),
    new_start: str = typer.Argument(..., help="New anchor date (YYYY-MM-DD)."),
) -> None:
    """Move a unit's timeline row to a new start date."""
    when = parse_date(new_start, option="new_start")
    registry = open_registry(get_config(ctx))
    with cli_errors():
        units = registry.list_units()
        unit = resolve_unit(units, unit_ref)
        registry.save_units(shift_start(units, unit.id, when))
    console.print(f"[green]Shifted[/] {unit.name}: {unit.start.isoformat()} -> {when.isoformat()}")


@timeline_app.command("reorder")
def reorder(
    ctx: typer.Context,
    unit_ref: str = typer.Argument(..., help="Unit to move."),
    over_ref: str = typer.Argument(..., help="Unit whose position it takes."),
) -> None:
    """Move a unit row to another row's position in the display order."""
    registry = open_registry(get_config(ctx))
    with cli_errors():
        units = registry.list_units()
        active = resolve_unit(units, unit_ref)
        over = resolve_unit(units, over_ref)
        updated = reorder_units(units, active.id, over.id)
        registry.save_units(updated)
    console.print("Order: " + ", ".join(unit.name for unit in updated))

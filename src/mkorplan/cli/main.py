from __future__ import annotations

from pathlib import Path

import typer

from mkorplan.cli._utils import (
    cli_errors,
    console,
    dataframe_table,
    get_config,
    open_registry,
    parse_date,
    resolve_unit,
)
from mkorplan.cli.planning import plan_app
from mkorplan.cli.telemetry import telemetry_app
from mkorplan.cli.timeline import timeline_app
from mkorplan.config import load_config
from mkorplan.fleet import dump_fleet, load_fleet, seed_registry, snapshot_from
from mkorplan.planning import (
    catalog_dataframe,
    fleet_dataframe,
    inventory_dataframe,
    jobs_dataframe,
    receive_inventory,
    retire_unit,
    totals_dataframe,
)

app = typer.Typer(add_completion=False, no_args_is_help=True)
catalog_app = typer.Typer(add_completion=False, no_args_is_help=True, help="Diameter spec catalog.")
inventory_app = typer.Typer(add_completion=False, no_args_is_help=True, help="Deliveries and stock.")
units_app = typer.Typer(add_completion=False, no_args_is_help=True, help="Registered MKOR units.")
app.add_typer(catalog_app, name="catalog")
app.add_typer(inventory_app, name="inventory")
app.add_typer(units_app, name="units")
app.add_typer(plan_app, name="plan")
app.add_typer(timeline_app, name="timeline")
app.add_typer(telemetry_app, name="telemetry")


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Planner YAML config (defaults to ./mkorplan.yaml if present)."
    ),
) -> None:
    """Track MKOR deliveries and schedule unit jobs on a shared calendar."""
    with cli_errors():
        try:
            ctx.obj = load_config(config)
        except FileNotFoundError as exc:
            raise typer.BadParameter(f"Config file not found: {exc}") from exc


@catalog_app.command("show")
def catalog_show(ctx: typer.Context) -> None:
    """Print cycle, working and maintenance days plus transport counts per diameter."""
    config = get_config(ctx)
    with cli_errors():
        catalog = config.catalog()
    console.print(dataframe_table(catalog_dataframe(catalog), title="Technical characteristics"))
    for spec in catalog.values():
        durations = ", ".join(str(d) for d in spec.stage_durations())
        console.print(f"[dim]{spec.label} scheduled stages (days): {durations}[/]")


@inventory_app.command("add")
def inventory_add(
    ctx: typer.Context,
    diameter: int = typer.Argument(..., help="Diameter class, e.g. 200."),
    count: int = typer.Argument(1, min=1, help="Number of delivered units."),
    available_from: str = typer.Option(..., "--date", "-d", help="Delivery date (YYYY-MM-DD)."),
) -> None:
    """Record a delivery and create its units."""
    when = parse_date(available_from, option="--date")
    registry = open_registry(get_config(ctx))
    with cli_errors():
        result = receive_inventory(registry, diameter, count, when, catalog=registry.catalog)
    names = ", ".join(unit.name for unit in result.units)
    console.print(f"[green]Received[/] {count} x DN-{diameter} on {when.isoformat()}: {names}")


@inventory_app.command("list")
def inventory_list(
    ctx: typer.Context,
    out_csv: Path | None = typer.Option(None, "--out-csv", help="Write the inventory table as CSV."),
) -> None:
    """Show deliveries sorted by diameter and date, plus unit totals per diameter."""
    registry = open_registry(get_config(ctx))
    with cli_errors():
        snapshot = snapshot_from(registry)
    frame = inventory_dataframe(snapshot.inventory)
    console.print(dataframe_table(frame, title="Inventory"))
    console.print(dataframe_table(totals_dataframe(snapshot.units, registry.catalog), title="Units per diameter"))
    if out_csv:
        out_csv.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(out_csv, index=False)
        console.print(f"Wrote inventory to {out_csv}")


@inventory_app.command("remove-unit")
def inventory_remove_unit(
    ctx: typer.Context,
    unit_ref: str = typer.Argument(..., help="Unit id or name."),
) -> None:
    """Delete a unit and consume it from its delivery batch."""
    registry = open_registry(get_config(ctx))
    with cli_errors():
        unit = resolve_unit(registry.list_units(), unit_ref)
        retire_unit(registry, unit)
    console.print(f"[green]Removed[/] {unit.name} (delivered {unit.available_from.isoformat()})")


@inventory_app.command("import")
def inventory_import(
    ctx: typer.Context,
    fleet_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Fleet YAML file."),
) -> None:
    """Seed the registry from a fleet YAML snapshot."""
    registry = open_registry(get_config(ctx))
    with cli_errors():
        snapshot = load_fleet(fleet_path)
        seed_registry(registry, snapshot)
    console.print(
        f"[green]Imported[/] {len(snapshot.inventory)} batch(es) and {len(snapshot.units)} unit(s)"
    )


@inventory_app.command("export")
def inventory_export(
    ctx: typer.Context,
    out: Path = typer.Argument(..., dir_okay=False, help="Destination YAML path."),
) -> None:
    """Dump the registry (inventory and units with jobs) to a fleet YAML snapshot."""
    registry = open_registry(get_config(ctx))
    with cli_errors():
        path = dump_fleet(snapshot_from(registry), out)
    console.print(f"Wrote fleet snapshot to {path}")


@units_app.command("list")
def units_list(
    ctx: typer.Context,
    jobs: bool = typer.Option(False, "--jobs", help="List every recorded job instead of units."),
    out_csv: Path | None = typer.Option(None, "--out-csv", help="Write the table as CSV."),
) -> None:
    """Show the fleet in display order with delivery and job start dates."""
    registry = open_registry(get_config(ctx))
    with cli_errors():
        units = registry.list_units()
    frame = jobs_dataframe(units) if jobs else fleet_dataframe(units)
    console.print(dataframe_table(frame, title="Jobs" if jobs else "MKOR fleet"))
    if out_csv:
        out_csv.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(out_csv, index=False)
        console.print(f"Wrote {len(frame)} row(s) to {out_csv}")


if __name__ == "__main__":
    app()

"""Job-planning CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import typer

from mkorplan.cli._utils import cli_errors, console, get_config, open_registry, parse_date, resolve_unit
from mkorplan.fleet import UnitCandidate
from mkorplan.planning import JobPlanner, base_name

plan_app = typer.Typer(add_completion=False, no_args_is_help=True, help="Plan jobs on units.")


@plan_app.command("job")
def plan_job(
    ctx: typer.Context,
    start: str = typer.Argument(..., help="Proposed job start (YYYY-MM-DD)."),
    unit_ref: str | None = typer.Option(None, "--unit", "-u", help="Registered unit id or name."),
    batch_id: str | None = typer.Option(
        None, "--batch", "-b", help="Plan on a unit from this inventory batch instead of --unit."
    ),
    out_json: Path | None = typer.Option(None, "--out-json", help="Write the outcome as JSON."),
) -> None:
    """Validate and record a new job; exits with code 1 when the proposal is rejected."""
    if (unit_ref is None) == (batch_id is None):
        raise typer.BadParameter("Pass exactly one of --unit or --batch.")
    when = parse_date(start, option="start")
    config = get_config(ctx)
    registry = open_registry(config)
    planner = JobPlanner(
        registry,
        registry.catalog,
        telemetry_log=config.telemetry_log,
        context={"command": "plan job", "registry_path": str(config.registry_path)},
    )
    with cli_errors():
        if unit_ref is not None:
            candidate = UnitCandidate.from_unit(resolve_unit(registry.list_units(), unit_ref))
        else:
            batch = next((b for b in registry.list_inventory() if b.id == batch_id), None)
            if batch is None:
                raise typer.BadParameter(f"Unknown inventory batch '{batch_id}'.")
            candidate = UnitCandidate(
                name=base_name(batch.diameter),
                diameter=batch.diameter,
                available_from=batch.available_from,
            )
        outcome = planner.plan(candidate, when)

    if out_json:
        out_json.parent.mkdir(parents=True, exist_ok=True)
        out_json.write_text(json.dumps(outcome.summary(), indent=2))

    if not outcome.accepted:
        console.print(f"[yellow]Rejected[/]: {outcome.reason.value if outcome.reason else 'unknown'}")
        if outcome.error is not None:
            console.print(f"[dim]{outcome.error}[/]")
        raise typer.Exit(1)

    occupied = outcome.job.occupied() if outcome.job else None
    span = f"{occupied[0].isoformat()}..{occupied[1].isoformat()}" if occupied else "0 days"
    created = " (new unit)" if outcome.created_unit else ""
    console.print(f"[bold green]Accepted[/]: {outcome.unit.name}{created} occupied {span}")

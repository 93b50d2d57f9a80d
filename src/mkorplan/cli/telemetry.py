from __future__ import annotations

from pathlib import Path

import typer
from rich.table import Table

from mkorplan.cli._utils import console, get_config
from mkorplan.telemetry import tail_jsonl

telemetry_app = typer.Typer(add_completion=False, no_args_is_help=True, help="Planning telemetry utilities.")


@telemetry_app.command("tail")
def tail(
    ctx: typer.Context,
    limit: int = typer.Option(20, "--limit", "-n", min=1, help="Number of recent records to show."),
    log_path: Path | None = typer.Option(None, "--log", help="Override the configured telemetry JSONL."),
) -> None:
    """Show the most recent planning attempts."""
    path = log_path or get_config(ctx).telemetry_log
    if path is None or not path.exists():
        typer.echo(f"No telemetry log found at {path}. Nothing to show.")
        raise typer.Exit(0)
    records = tail_jsonl(path, limit)
    table = Table(title=f"Planning attempts ({path})")
    for column in ("finished_at", "unit", "start", "status", "reason"):
        table.add_column(column)
    for record in records:
        table.add_row(
            str(record.get("finished_at") or ""),
            str(record.get("unit") or ""),
            str(record.get("start") or ""),
            str(record.get("status") or ""),
            str(record.get("reason") or record.get("error") or ""),
        )
    console.print(table)

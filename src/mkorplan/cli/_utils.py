"""CLI helper utilities for mkorplan."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from datetime import date

import pandas as pd
import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from mkorplan.config import PlannerConfig, load_config
from mkorplan.core.errors import MKORValueError, RegistryUnavailable
from mkorplan.core.types import as_date
from mkorplan.fleet import SQLiteRegistry, Unit
from mkorplan.scheduling.timeline import STAGE_LABELS, StageKind

console = Console()

STAGE_STYLES: dict[StageKind, str] = {
    StageKind.TRANSIT: "white on blue",
    StageKind.LOADING: "black on yellow",
    StageKind.WORKING: "white on green",
    StageKind.REPAIR: "white on red",
}


def parse_date(value: str, *, option: str = "date") -> date:
    try:
        return as_date(value)
    except (TypeError, ValueError) as exc:
        raise typer.BadParameter(f"{option} must be an ISO date (YYYY-MM-DD), got {value!r}") from exc


def get_config(ctx: typer.Context) -> PlannerConfig:
    """Config stored by the root callback (loaded lazily for sub-app invocations)."""
    obj = ctx.find_root().obj
    if isinstance(obj, PlannerConfig):
        return obj
    config = load_config()
    ctx.find_root().obj = config
    return config


def open_registry(config: PlannerConfig) -> SQLiteRegistry:
    return SQLiteRegistry(config.registry_path, catalog=config.catalog())


@contextmanager
def cli_errors() -> Iterator[None]:
    """Translate planner errors into Typer exits with a readable message."""
    try:
        yield
    except RegistryUnavailable as exc:
        console.print(f"[red]Registry unavailable:[/] {exc}")
        raise typer.Exit(1) from exc
    except MKORValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def resolve_unit(units: Sequence[Unit], ref: str) -> Unit:
    """Find a unit by id, or by name when the name is unambiguous."""
    for unit in units:
        if unit.id == ref:
            return unit
    matches = [unit for unit in units if unit.name == ref]
    if not matches:
        raise typer.BadParameter(f"Unknown unit '{ref}'.")
    if len(matches) > 1:
        ids = ", ".join(f"{u.id} ({u.available_from.isoformat()})" for u in matches)
        raise typer.BadParameter(f"Unit name '{ref}' is ambiguous; use one of the ids: {ids}")
    return matches[0]


def dataframe_table(frame: pd.DataFrame, title: str | None = None) -> Table:
    table = Table(title=title)
    for column in frame.columns:
        table.add_column(str(column))
    for row in frame.itertuples(index=False):
        table.add_row(*("" if pd.isna(value) else str(value) for value in row))
    return table


def stage_cell(stage: StageKind | None, is_first: bool) -> Text:
    if stage is None:
        return Text("")
    label = STAGE_LABELS[stage][:3] if is_first else " "
    return Text(f"{label:^5}", style=STAGE_STYLES[stage])

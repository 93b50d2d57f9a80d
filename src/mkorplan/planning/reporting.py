"""Tabular views of the catalog, inventory and fleet timeline."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

import pandas as pd

from mkorplan.catalog import SpecCatalog
from mkorplan.core.types import DateLike
from mkorplan.fleet.contract import InventoryBatch, Unit
from mkorplan.scheduling.timeline import calendar_days, segment_for_day

from .inventory import sorted_inventory, totals_by_diameter

__all__ = [
    "catalog_dataframe",
    "inventory_dataframe",
    "fleet_dataframe",
    "jobs_dataframe",
    "totals_dataframe",
    "segments_dataframe",
    "timeline_grid",
]

_CATALOG_COLUMNS = [
    "diameter",
    "label",
    "operational_cycle",
    "working_period",
    "maintenance_time",
    "tractors",
    "trailers",
    "low_loaders",
]


def catalog_dataframe(catalog: SpecCatalog) -> pd.DataFrame:
    """Technical summary per diameter (cycle, working and maintenance days, transport)."""
    rows = [
        {
            "diameter": spec.diameter,
            "label": spec.label,
            "operational_cycle": spec.operational_cycle,
            "working_period": spec.working_period,
            "maintenance_time": spec.maintenance_time,
            "tractors": spec.tractors,
            "trailers": spec.trailers,
            "low_loaders": spec.low_loaders,
        }
        for spec in catalog.values()
    ]
    return pd.DataFrame(rows, columns=_CATALOG_COLUMNS)


def inventory_dataframe(inventory: Sequence[InventoryBatch]) -> pd.DataFrame:
    rows = [
        {
            "id": batch.id,
            "diameter": batch.diameter,
            "count": batch.count,
            "available_from": batch.available_from,
        }
        for batch in sorted_inventory(inventory)
    ]
    return pd.DataFrame(rows, columns=["id", "diameter", "count", "available_from"])


def fleet_dataframe(units: Sequence[Unit]) -> pd.DataFrame:
    """One row per unit: name, delivery date, job start dates and cycle length."""
    rows = [
        {
            "id": unit.id,
            "name": unit.name,
            "diameter": unit.diameter,
            "available_from": unit.available_from,
            "start": unit.start,
            "total_days": unit.total_days,
            "job_count": len(unit.jobs),
            "job_starts": ", ".join(job.start.isoformat() for job in unit.jobs),
        }
        for unit in units
    ]
    return pd.DataFrame(
        rows,
        columns=[
            "id",
            "name",
            "diameter",
            "available_from",
            "start",
            "total_days",
            "job_count",
            "job_starts",
        ],
    )


def jobs_dataframe(units: Sequence[Unit]) -> pd.DataFrame:
    rows = []
    for unit in units:
        for seq, job in enumerate(unit.jobs):
            occupied = job.occupied()
            rows.append(
                {
                    "unit": unit.name,
                    "seq": seq,
                    "start": job.start,
                    "end": occupied[1] if occupied else None,
                    "total_days": job.total_days,
                }
            )
    return pd.DataFrame(rows, columns=["unit", "seq", "start", "end", "total_days"])


def totals_dataframe(units: Sequence[Unit], catalog: SpecCatalog) -> pd.DataFrame:
    totals = totals_by_diameter(units, catalog.diameters())
    return pd.DataFrame(
        [{"diameter": d, "label": f"DN-{d}", "units": n} for d, n in totals.items()],
        columns=["diameter", "label", "units"],
    )


def segments_dataframe(units: Sequence[Unit]) -> pd.DataFrame:
    """Segment breakdown of every unit's active timeline row."""
    rows = [
        {
            "unit_id": unit.id,
            "unit": unit.name,
            "index": segment.index,
            "stage": segment.stage.value,
            "start": segment.start,
            "end": segment.end,
            "duration": segment.duration,
        }
        for unit in units
        for segment in unit.segments()
    ]
    return pd.DataFrame(
        rows, columns=["unit_id", "unit", "index", "stage", "start", "end", "duration"]
    )


def timeline_grid(units: Sequence[Unit], start: DateLike, end: DateLike) -> pd.DataFrame:
    """Unit-by-day grid of stage names (empty string where the unit is idle).

    Rows follow the fleet display order; columns are every day in ``[start, end]``.
    """
    days: list[date] = calendar_days(start, end)
    data: dict[date, list[str]] = {day: [] for day in days}
    for unit in units:
        segments = unit.segments()
        for day in days:
            cell = segment_for_day(segments, day)
            data[day].append(cell.stage.value if cell else "")
    frame = pd.DataFrame(data, index=[unit.name for unit in units], columns=days)
    frame.index.name = "unit"
    return frame

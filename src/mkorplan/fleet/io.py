"""Fleet snapshot loading and export (YAML)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from mkorplan.core.errors import MKORValueError
from mkorplan.fleet.contract import FleetSnapshot, Registry

__all__ = ["load_fleet", "dump_fleet", "seed_registry"]


def load_fleet(path: str | Path) -> FleetSnapshot:
    """Load a ``FleetSnapshot`` from a YAML document with ``units``/``inventory`` lists.

    Unit ``id`` and batch ``id`` fields are optional; positional ids are generated
    when missing so hand-written fixtures stay short.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise MKORValueError(f"{path} must contain a mapping with 'units' and 'inventory'")
    units: list[dict[str, Any]] = []
    for index, entry in enumerate(data.get("units") or []):
        record = dict(entry)
        record.setdefault("id", f"unit-{index + 1}")
        units.append(record)
    inventory: list[dict[str, Any]] = []
    for index, entry in enumerate(data.get("inventory") or []):
        record = dict(entry)
        record.setdefault("id", f"batch-{index + 1}")
        inventory.append(record)
    try:
        return FleetSnapshot.model_validate({"units": units, "inventory": inventory})
    except ValidationError as exc:
        raise MKORValueError(f"invalid fleet file {path}: {exc}") from exc


def dump_fleet(snapshot: FleetSnapshot, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = snapshot.model_dump(mode="json")
    with path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(payload, handle, sort_keys=False, allow_unicode=True)
    return path


def seed_registry(registry: Registry, snapshot: FleetSnapshot) -> None:
    """Replay a snapshot into ``registry`` through its public contract.

    Jobs are re-appended, so their durations are resolved from the registry catalog.
    """
    for batch in snapshot.inventory:
        registry.create_inventory_batch(batch.diameter, batch.count, batch.available_from)
    for unit in snapshot.units:
        created = registry.create_unit(unit.name, unit.diameter, unit.available_from, unit.durations)
        for job in unit.jobs:
            registry.append_job(created.id, job.start)
    if any(unit.start != unit.available_from for unit in snapshot.units):
        current = {(u.name, u.available_from): u for u in registry.list_units()}
        registry.save_units(
            [
                current[(unit.name, unit.available_from)].model_copy(update={"start": unit.start})
                for unit in snapshot.units
                if (unit.name, unit.available_from) in current
            ]
        )

"""Inventory receipts and unit retirement through the registry contract."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from mkorplan.catalog import SpecCatalog, load_default_catalog
from mkorplan.core.errors import MKORValueError
from mkorplan.core.types import DateLike, as_date
from mkorplan.fleet.contract import InventoryBatch, Registry, Unit, UnitCandidate
from mkorplan.planning.workflow import base_name

__all__ = [
    "ReceiptResult",
    "receive_inventory",
    "retire_unit",
    "update_batch_count",
    "sorted_inventory",
    "totals_by_diameter",
    "receipt_unit_names",
]


@dataclass(frozen=True)
class ReceiptResult:
    """Batch and units created by :func:`receive_inventory`."""

    batch: InventoryBatch
    units: tuple[Unit, ...]


def receipt_unit_names(diameter: int, count: int) -> list[str]:
    """Names given to units created by one receipt: ``DN-d``, ``DN-d-2``, ``DN-d-3``..."""
    root = base_name(diameter)
    return [root if i == 0 else f"{root}-{i + 1}" for i in range(count)]


def receive_inventory(
    registry: Registry,
    diameter: int,
    count: int,
    available_from: DateLike,
    catalog: SpecCatalog | None = None,
) -> ReceiptResult:
    """Record a delivery and create one unit per delivered installation.

    Each unit starts with the catalog's whole-day stage plan for ``diameter``.
    """
    if count < 1:
        raise MKORValueError("count must be >= 1")
    catalog = catalog or load_default_catalog()
    durations = catalog.durations_for(diameter)
    when = as_date(available_from)
    batch = registry.create_inventory_batch(diameter, count, when)
    units = [
        registry.create_unit(name, diameter, when, durations)
        for name in receipt_unit_names(diameter, count)
    ]
    return ReceiptResult(batch, tuple(units))


def retire_unit(registry: Registry, candidate: Unit | UnitCandidate) -> bool:
    """Remove one unit and consume it from the batch it was delivered in.

    The batch matching ``(diameter, available_from)`` is decremented (delete and
    re-create, the contract has no update) or deleted when it held a single unit.
    Returns True when a registry unit was deleted.
    """
    if isinstance(candidate, Unit):
        candidate = UnitCandidate.from_unit(candidate)
    batch = next(
        (
            item
            for item in registry.list_inventory()
            if item.diameter == candidate.diameter
            and item.available_from == candidate.available_from
        ),
        None,
    )
    if batch is not None:
        registry.delete_inventory_batch(batch.id)
        if batch.count > 1:
            registry.create_inventory_batch(batch.diameter, batch.count - 1, batch.available_from)
    unit = next((u for u in registry.list_units() if candidate.matches(u)), None)
    if unit is None:
        return False
    registry.delete_unit(unit.id)
    return True


def update_batch_count(
    inventory: Sequence[InventoryBatch], batch_id: str, count: int
) -> tuple[InventoryBatch, ...]:
    """Return ``inventory`` with one batch's count replaced (``count <= 0`` removes it)."""
    if count <= 0:
        return tuple(b for b in inventory if b.id != batch_id)
    return tuple(
        b.model_copy(update={"count": count}) if b.id == batch_id else b for b in inventory
    )


def sorted_inventory(inventory: Sequence[InventoryBatch]) -> list[InventoryBatch]:
    return sorted(inventory, key=lambda b: (b.diameter, b.available_from))


def totals_by_diameter(units: Sequence[Unit], diameters: Sequence[int]) -> dict[int, int]:
    """Unit counts per catalog diameter (zero for diameters with no units)."""
    counts = Counter(unit.diameter for unit in units)
    return {diameter: counts.get(diameter, 0) for diameter in diameters}

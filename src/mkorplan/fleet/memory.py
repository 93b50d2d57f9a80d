"""In-process registry used by tests and one-shot CLI runs."""

from __future__ import annotations

from collections.abc import Sequence
from uuid import uuid4

from mkorplan.catalog import SpecCatalog, load_default_catalog
from mkorplan.core.errors import MKORValueError
from mkorplan.core.types import DateLike, as_date
from mkorplan.fleet.contract import FleetSnapshot, InventoryBatch, Job, Unit

__all__ = ["InMemoryRegistry"]


def _new_id() -> str:
    return uuid4().hex


class InMemoryRegistry:
    """Registry that keeps inventory and units in ordered Python lists.

    Parameters
    ----------
    catalog:
        Spec catalog used to resolve job durations in :meth:`append_job`.
    snapshot:
        Optional initial contents (e.g., loaded from a YAML fleet file).
    """

    def __init__(
        self, catalog: SpecCatalog | None = None, snapshot: FleetSnapshot | None = None
    ) -> None:
        self.catalog = catalog or load_default_catalog()
        self._inventory: list[InventoryBatch] = list(snapshot.inventory) if snapshot else []
        self._units: list[Unit] = list(snapshot.units) if snapshot else []

    def list_inventory(self) -> Sequence[InventoryBatch]:
        return tuple(self._inventory)

    def create_inventory_batch(
        self, diameter: int, count: int, available_from: DateLike
    ) -> InventoryBatch:
        self.catalog[diameter]  # raises UnknownDiameter
        batch = InventoryBatch(
            id=_new_id(), diameter=diameter, count=count, available_from=as_date(available_from)
        )
        self._inventory.append(batch)
        return batch

    def delete_inventory_batch(self, batch_id: str) -> None:
        self._inventory = [b for b in self._inventory if b.id != batch_id]

    def list_units(self) -> Sequence[Unit]:
        return tuple(self._units)

    def create_unit(
        self, name: str, diameter: int, available_from: DateLike, durations: Sequence[int]
    ) -> Unit:
        unit = Unit(
            id=_new_id(),
            name=name,
            diameter=diameter,
            available_from=as_date(available_from),
            durations=tuple(durations),
        )
        self._units.append(unit)
        return unit

    def delete_unit(self, unit_id: str) -> None:
        self._units = [u for u in self._units if u.id != unit_id]

    def append_job(self, unit_id: str, start: DateLike) -> Job:
        for position, unit in enumerate(self._units):
            if unit.id == unit_id:
                job = Job(start=as_date(start), durations=self.catalog.durations_for(unit.diameter))
                self._units[position] = unit.model_copy(update={"jobs": unit.jobs + (job,)})
                return job
        raise MKORValueError(f"unknown unit id: {unit_id}")

    def save_units(self, units: Sequence[Unit]) -> None:
        """Persist timeline edits; stored jobs are kept and unknown ids are ignored."""
        stored = {unit.id: unit for unit in self._units}
        saved = [
            unit.model_copy(update={"jobs": stored[unit.id].jobs})
            for unit in units
            if unit.id in stored
        ]
        saved_ids = {unit.id for unit in saved}
        self._units = saved + [unit for unit in self._units if unit.id not in saved_ids]

    def snapshot(self) -> FleetSnapshot:
        return FleetSnapshot(units=tuple(self._units), inventory=tuple(self._inventory))

"""Pydantic records exchanged with the unit/inventory registry."""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import date
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from mkorplan.scheduling.timeline import Segment, build_segments, occupied_range


def _non_negative_durations(value: Sequence[float]) -> tuple[int, ...]:
    if any(v < 0 for v in value):
        raise ValueError("stage durations must be non-negative")
    return tuple(int(math.ceil(v)) for v in value)


class Job(BaseModel):
    """One scheduled work assignment on a unit.

    Attributes
    ----------
    start:
        First day of the job (inclusive).
    durations:
        Whole-day stage durations copied from the catalog when the job was recorded.
        Later catalog edits never reach jobs already on the books.
    """

    model_config = ConfigDict(frozen=True)

    start: date
    durations: tuple[int, ...]

    @field_validator("durations", mode="before")
    @classmethod
    def _durations_non_negative(cls, value: Sequence[int]) -> tuple[int, ...]:
        return _non_negative_durations(value)

    @property
    def total_days(self) -> int:
        return sum(self.durations)

    def occupied(self) -> tuple[date, date] | None:
        return occupied_range(self.start, self.durations)


class InventoryBatch(BaseModel):
    """A recorded delivery of ``count`` units of one diameter."""

    model_config = ConfigDict(frozen=True)

    id: str
    diameter: int
    count: int
    available_from: date

    @field_validator("count")
    @classmethod
    def _count_positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("InventoryBatch.count must be >= 1")
        return value


class Unit(BaseModel):
    """One physical MKOR installation and its staged timeline.

    Attributes
    ----------
    id:
        Registry identifier.
    name:
        Display name, unique per diameter (``DN-200``, ``DN-200 (2)``, ...).
    diameter:
        Diameter class keying the spec catalog.
    available_from:
        Delivery date; no job may start before it.
    start:
        Timeline anchor date. Defaults to ``available_from``.
    durations:
        Active stage-duration sequence used to draw the unit's timeline row.
    jobs:
        Recorded jobs in insertion order.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    diameter: int
    available_from: date
    start: date
    durations: tuple[int, ...] = ()
    jobs: tuple[Job, ...] = ()

    @field_validator("durations", mode="before")
    @classmethod
    def _durations_non_negative(cls, value: Sequence[int]) -> tuple[int, ...]:
        return _non_negative_durations(value)

    @model_validator(mode="before")
    @classmethod
    def _default_start(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("start") is None:
            data = {**data, "start": data.get("available_from")}
        return data

    @property
    def total_days(self) -> int:
        return sum(self.durations)

    def segments(self) -> tuple[Segment, ...]:
        return build_segments(self.start, self.durations)


class UnitCandidate(BaseModel):
    """Identity of a unit proposed for a new job (may not exist in the registry yet)."""

    model_config = ConfigDict(frozen=True)

    name: str
    diameter: int
    available_from: date

    @classmethod
    def from_unit(cls, unit: Unit) -> "UnitCandidate":
        return cls(name=unit.name, diameter=unit.diameter, available_from=unit.available_from)

    def matches(self, unit: Unit) -> bool:
        return unit.name == self.name and unit.available_from == self.available_from


class FleetSnapshot(BaseModel):
    """Immutable read-side view of the registry handed to core operations."""

    model_config = ConfigDict(frozen=True)

    units: tuple[Unit, ...] = ()
    inventory: tuple[InventoryBatch, ...] = ()

    def unit(self, unit_id: str) -> Unit | None:
        return next((u for u in self.units if u.id == unit_id), None)

    def units_for_diameter(self, diameter: int) -> list[Unit]:
        return [u for u in self.units if u.diameter == diameter]

    def find_unit(self, candidate: UnitCandidate) -> Unit | None:
        return next((u for u in self.units if candidate.matches(u)), None)

    def with_units(self, units: Sequence[Unit]) -> "FleetSnapshot":
        return self.model_copy(update={"units": tuple(units)})

    def with_inventory(self, inventory: Sequence[InventoryBatch]) -> "FleetSnapshot":
        return self.model_copy(update={"inventory": tuple(inventory)})


class Registry(Protocol):
    """Request/response contract of the unit and inventory store."""

    def list_inventory(self) -> Sequence[InventoryBatch]: ...

    def create_inventory_batch(
        self, diameter: int, count: int, available_from: date
    ) -> InventoryBatch: ...

    def delete_inventory_batch(self, batch_id: str) -> None: ...

    def list_units(self) -> Sequence[Unit]: ...

    def create_unit(
        self, name: str, diameter: int, available_from: date, durations: Sequence[int]
    ) -> Unit: ...

    def delete_unit(self, unit_id: str) -> None: ...

    def append_job(self, unit_id: str, start: date) -> Job: ...

    def save_units(self, units: Sequence[Unit]) -> None: ...


def snapshot_from(registry: Registry) -> FleetSnapshot:
    """Fetch a fresh read-side snapshot from ``registry``."""
    return FleetSnapshot(
        units=tuple(registry.list_units()),
        inventory=tuple(registry.list_inventory()),
    )


__all__ = [
    "Job",
    "InventoryBatch",
    "Unit",
    "UnitCandidate",
    "FleetSnapshot",
    "Registry",
    "snapshot_from",
]

"""Diameter-class spec catalog (stage durations and transport counts)."""

from __future__ import annotations

import json
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

from mkorplan.core.errors import MKORValueError, UnknownDiameter

DATA_PATH = Path(__file__).resolve().parents[3] / "data/diameter_specs.json"

STAGE_FIELDS: tuple[str, ...] = (
    "transit_to_object",
    "unloading_time",
    "working_period",
    "loading_time",
    "transit_to_maintenance",
    "maintenance_time",
)


@dataclass(frozen=True)
class DiameterSpec:
    """
    Reference stage plan for one MKOR diameter class.

    Attributes
    ----------
    diameter:
        Nominal pipe diameter class (e.g., ``200`` for DN-200).
    transit_to_object, unloading_time, working_period, loading_time,
    transit_to_maintenance, maintenance_time:
        Stage durations in (possibly fractional) days, in lifecycle order.
    tractors, trailers, low_loaders:
        Descriptive transport counts. These are catalog data only and are never scheduled.
    """

    diameter: int
    transit_to_object: float
    unloading_time: float
    working_period: float
    loading_time: float
    transit_to_maintenance: float
    maintenance_time: float
    tractors: int = 0
    trailers: int = 0
    low_loaders: int = 0

    def __post_init__(self) -> None:
        for name in STAGE_FIELDS:
            if getattr(self, name) < 0:
                raise MKORValueError(f"DN-{self.diameter}: {name} must be non-negative")

    @property
    def raw_durations(self) -> tuple[float, ...]:
        return tuple(float(getattr(self, name)) for name in STAGE_FIELDS)

    @property
    def operational_cycle(self) -> float:
        """float: Nominal cycle length (sum of the raw stage durations, days)."""

        return sum(self.raw_durations)

    def stage_durations(self) -> tuple[int, ...]:
        """Return the stage durations rounded up to whole scheduling days."""

        return tuple(int(math.ceil(value)) for value in self.raw_durations)

    @property
    def label(self) -> str:
        return f"DN-{self.diameter}"


class SpecCatalog(Mapping[int, DiameterSpec]):
    """Read-only mapping from diameter class to :class:`DiameterSpec`."""

    def __init__(self, specs: Sequence[DiameterSpec]) -> None:
        entries: dict[int, DiameterSpec] = {}
        for spec in specs:
            if spec.diameter in entries:
                raise MKORValueError(f"duplicate catalog entry for DN-{spec.diameter}")
            entries[spec.diameter] = spec
        self._entries = dict(sorted(entries.items()))

    def __getitem__(self, diameter: int) -> DiameterSpec:
        try:
            return self._entries[int(diameter)]
        except KeyError:
            raise UnknownDiameter(int(diameter)) from None

    def __iter__(self):
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def diameters(self) -> list[int]:
        return list(self._entries)

    def durations_for(self, diameter: int) -> tuple[int, ...]:
        """Whole-day stage durations for ``diameter`` (raises ``UnknownDiameter``)."""

        return self[diameter].stage_durations()


def _parse_spec(entry: Mapping[str, Any]) -> DiameterSpec:
    return DiameterSpec(
        diameter=int(entry["diameter"]),
        transit_to_object=float(entry["transit_to_object"]),
        unloading_time=float(entry["unloading_time"]),
        working_period=float(entry["working_period"]),
        loading_time=float(entry["loading_time"]),
        transit_to_maintenance=float(entry["transit_to_maintenance"]),
        maintenance_time=float(entry["maintenance_time"]),
        tractors=int(entry.get("tractors", 0)),
        trailers=int(entry.get("trailers", 0)),
        low_loaders=int(entry.get("low_loaders", 0)),
    )


def load_catalog(path: str | Path) -> SpecCatalog:
    """
    Load a spec catalog from a JSON array of diameter entries.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    MKORValueError
        If an entry has negative durations or a diameter appears twice.
    """

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing diameter spec data: {path}")
    with path.open(encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, list):
        raise MKORValueError(f"{path} must contain a JSON array of diameter specs")
    return SpecCatalog([_parse_spec(entry) for entry in data])


@lru_cache(maxsize=1)
def load_default_catalog() -> SpecCatalog:
    """Load the bundled ``data/diameter_specs.json`` catalog (cached per process)."""

    return load_catalog(DATA_PATH)


__all__ = [
    "DATA_PATH",
    "STAGE_FIELDS",
    "DiameterSpec",
    "SpecCatalog",
    "load_catalog",
    "load_default_catalog",
]

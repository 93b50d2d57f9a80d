"""Unit and inventory records plus the registry contract and its implementations."""

from .contract import (
    FleetSnapshot,
    InventoryBatch,
    Job,
    Registry,
    Unit,
    UnitCandidate,
    snapshot_from,
)
from .io import dump_fleet, load_fleet, seed_registry
from .memory import InMemoryRegistry
from .sqlite_store import SQLiteRegistry

__all__ = [
    "FleetSnapshot",
    "InventoryBatch",
    "Job",
    "Registry",
    "Unit",
    "UnitCandidate",
    "snapshot_from",
    "load_fleet",
    "dump_fleet",
    "seed_registry",
    "InMemoryRegistry",
    "SQLiteRegistry",
]

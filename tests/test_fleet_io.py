from datetime import date
from pathlib import Path

import pytest

from mkorplan.core import MKORValueError
from mkorplan.fleet import InMemoryRegistry, dump_fleet, load_fleet, seed_registry

FLEET_YAML = """
inventory:
  - diameter: 200
    count: 2
    available_from: 2024-01-01
units:
  - name: DN-200
    diameter: 200
    available_from: 2024-01-01
    durations: [2, 1, 5, 1, 2, 3]
    jobs:
      - start: 2024-01-03
        durations: [2, 1, 5, 1, 2, 3]
  - name: DN-200-2
    diameter: 200
    available_from: 2024-01-01
    start: 2024-01-20
    durations: [2, 1, 5, 1, 2, 3]
"""


@pytest.fixture
def fleet_path(tmp_path: Path) -> Path:
    path = tmp_path / "fleet.yaml"
    path.write_text(FLEET_YAML)
    return path


def test_load_fleet_generates_ids_and_defaults(fleet_path):
    snapshot = load_fleet(fleet_path)
    assert [u.id for u in snapshot.units] == ["unit-1", "unit-2"]
    assert snapshot.inventory[0].id == "batch-1"
    assert snapshot.units[0].start == date(2024, 1, 1)
    assert snapshot.units[1].start == date(2024, 1, 20)
    assert snapshot.units[0].jobs[0].start == date(2024, 1, 3)


def test_dump_then_load_preserves_contents(fleet_path, tmp_path):
    snapshot = load_fleet(fleet_path)
    out = dump_fleet(snapshot, tmp_path / "export" / "fleet.yaml")
    assert load_fleet(out) == snapshot


def test_seed_registry_replays_snapshot(fleet_path, catalog):
    registry = InMemoryRegistry(catalog)
    seed_registry(registry, load_fleet(fleet_path))
    units = registry.list_units()
    assert [u.name for u in units] == ["DN-200", "DN-200-2"]
    assert units[1].start == date(2024, 1, 20)
    assert len(units[0].jobs) == 1
    assert registry.list_inventory()[0].count == 2


def test_invalid_fleet_file(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("units:\n  - name: DN-200\n    diameter: 200\n")
    with pytest.raises(MKORValueError):
        load_fleet(path)

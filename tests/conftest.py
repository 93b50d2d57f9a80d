from datetime import date
from pathlib import Path

import pytest
import yaml

from mkorplan.catalog import load_default_catalog
from mkorplan.fleet import InMemoryRegistry, Unit

DN200_DAYS = (2, 1, 5, 1, 2, 3)


@pytest.fixture
def catalog():
    return load_default_catalog()


@pytest.fixture
def registry(catalog):
    return InMemoryRegistry(catalog)


@pytest.fixture
def make_unit():
    def _make(uid: str, name: str | None = None, *, diameter: int = 200, delivered=date(2024, 1, 1), durations=DN200_DAYS, **extra):
        return Unit(
            id=uid,
            name=name or uid,
            diameter=diameter,
            available_from=delivered,
            durations=durations,
            **extra,
        )

    return _make


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "mkorplan.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "registry_path": "registry.sqlite",
                "telemetry_log": "telemetry/planning.jsonl",
                "horizon_days": 14,
            }
        )
    )
    return path

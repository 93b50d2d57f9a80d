import json

import pytest

from mkorplan.catalog import DiameterSpec, SpecCatalog, load_catalog
from mkorplan.core import MKORValueError, UnknownDiameter


def test_default_catalog_rounds_stages_up_to_whole_days(catalog):
    spec = catalog[200]
    assert spec.raw_durations == (2.0, 0.5, 5.0, 0.5, 2.0, 3.0)
    assert spec.stage_durations() == (2, 1, 5, 1, 2, 3)
    assert spec.operational_cycle == pytest.approx(13.0)
    assert sum(catalog.durations_for(200)) == 14


def test_catalog_lists_diameters_in_ascending_order(catalog):
    assert catalog.diameters() == sorted(catalog.diameters())
    assert 200 in catalog and len(catalog) == len(catalog.diameters())


def test_unknown_diameter_raises(catalog):
    with pytest.raises(UnknownDiameter):
        catalog[999]
    assert isinstance(UnknownDiameter(999), MKORValueError)


def test_negative_stage_rejected():
    with pytest.raises(MKORValueError):
        DiameterSpec(200, -1.0, 0, 0, 0, 0, 0)


def test_duplicate_diameters_rejected():
    spec = DiameterSpec(200, 1, 1, 1, 1, 1, 1)
    with pytest.raises(MKORValueError):
        SpecCatalog([spec, spec])


def test_load_custom_catalog(tmp_path):
    path = tmp_path / "specs.json"
    path.write_text(
        json.dumps(
            [
                {
                    "diameter": 150,
                    "transit_to_object": 1.2,
                    "unloading_time": 0,
                    "working_period": 3,
                    "loading_time": 0,
                    "transit_to_maintenance": 1,
                    "maintenance_time": 0.1,
                    "tractors": 1,
                }
            ]
        )
    )
    custom = load_catalog(path)
    assert custom.durations_for(150) == (2, 0, 3, 0, 1, 1)
    assert custom[150].trailers == 0


def test_missing_catalog_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_catalog(tmp_path / "missing.json")

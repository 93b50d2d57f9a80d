from datetime import date

import pytest
from pydantic import ValidationError

from mkorplan.core import MKORValueError, RegistryUnavailable, UnknownDiameter
from mkorplan.fleet import FleetSnapshot, InMemoryRegistry, InventoryBatch, Job, SQLiteRegistry, Unit, snapshot_from


@pytest.fixture(params=["memory", "sqlite"])
def any_registry(request, tmp_path, catalog):
    if request.param == "memory":
        return InMemoryRegistry(catalog)
    return SQLiteRegistry(tmp_path / "registry.sqlite", catalog=catalog)


def test_registry_contract_roundtrip(any_registry, catalog):
    batch = any_registry.create_inventory_batch(200, 2, date(2024, 1, 1))
    unit = any_registry.create_unit("DN-200", 200, date(2024, 1, 1), catalog.durations_for(200))
    job = any_registry.append_job(unit.id, date(2024, 1, 5))

    assert job.durations == (2, 1, 5, 1, 2, 3)
    assert [b.id for b in any_registry.list_inventory()] == [batch.id]
    (stored,) = any_registry.list_units()
    assert stored.start == date(2024, 1, 1)
    assert stored.jobs == (job,)

    any_registry.delete_inventory_batch(batch.id)
    any_registry.delete_unit(unit.id)
    assert any_registry.list_inventory() == ()
    assert any_registry.list_units() == ()


def test_jobs_keep_durations_copied_at_append_time(any_registry, catalog):
    unit = any_registry.create_unit("DN-200", 200, date(2024, 1, 1), catalog.durations_for(200))
    any_registry.append_job(unit.id, date(2024, 1, 1))
    edited = any_registry.list_units()[0].model_copy(update={"durations": (9, 9, 9, 9, 9, 9)})
    any_registry.save_units([edited])
    (stored,) = any_registry.list_units()
    assert stored.durations == (9, 9, 9, 9, 9, 9)
    assert stored.jobs[0].durations == (2, 1, 5, 1, 2, 3)


def test_save_units_persists_order_and_anchor(any_registry, catalog):
    durations = catalog.durations_for(200)
    a = any_registry.create_unit("DN-200", 200, date(2024, 1, 1), durations)
    b = any_registry.create_unit("DN-200 (2)", 200, date(2024, 1, 1), durations)
    any_registry.save_units([b.model_copy(update={"start": date(2024, 2, 1)}), a])
    stored = any_registry.list_units()
    assert [u.id for u in stored] == [b.id, a.id]
    assert stored[0].start == date(2024, 2, 1)


def test_append_job_unknown_unit(any_registry):
    with pytest.raises(MKORValueError):
        any_registry.append_job("missing", date(2024, 1, 1))


def test_batch_for_unknown_diameter(any_registry):
    with pytest.raises(UnknownDiameter):
        any_registry.create_inventory_batch(123, 1, date(2024, 1, 1))


def test_sqlite_unreachable_path_raises_registry_unavailable(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    registry = SQLiteRegistry(blocker / "registry.sqlite")
    with pytest.raises(RegistryUnavailable):
        registry.list_units()


def test_records_validate_at_boundary():
    with pytest.raises(ValidationError):
        InventoryBatch(id="b", diameter=200, count=0, available_from=date(2024, 1, 1))
    with pytest.raises(ValidationError):
        Job(start=date(2024, 1, 1), durations=(1, -1))
    with pytest.raises(ValidationError):
        Job(start=date(2024, 1, 1), durations=(1, -0.5))
    assert Job(start=date(2024, 1, 1), durations=(0.5, 2.5)).durations == (1, 3)
    unit = Unit(id="u", name="DN-200", diameter=200, available_from="2024-01-01", durations=[1, 2])
    assert unit.start == date(2024, 1, 1)
    assert unit.durations == (1, 2)
    with pytest.raises(ValidationError):
        unit.name = "renamed"


def test_snapshot_lookups(registry, catalog):
    registry.create_unit("DN-200", 200, date(2024, 1, 1), catalog.durations_for(200))
    registry.create_unit("DN-300", 300, date(2024, 1, 1), catalog.durations_for(300))
    snapshot = snapshot_from(registry)
    assert isinstance(snapshot, FleetSnapshot)
    assert [u.name for u in snapshot.units_for_diameter(300)] == ["DN-300"]
    uid = snapshot.units[0].id
    assert snapshot.unit(uid).name == "DN-200"
    assert snapshot.unit("nope") is None
    assert snapshot.with_units(snapshot.units[1:]).units[0].name == "DN-300"


def test_memory_save_units_keeps_jobs_and_unlisted_units(registry, catalog):
    durations = catalog.durations_for(200)
    a = registry.create_unit("DN-200", 200, date(2024, 1, 1), durations)
    b = registry.create_unit("DN-200 (2)", 200, date(2024, 1, 1), durations)
    registry.append_job(a.id, date(2024, 1, 1))
    registry.save_units([a.model_copy(update={"start": date(2024, 3, 1)})])
    snapshot = registry.snapshot()
    assert [u.id for u in snapshot.units] == [a.id, b.id]
    assert snapshot.unit(a.id).start == date(2024, 3, 1)
    assert len(snapshot.unit(a.id).jobs) == 1

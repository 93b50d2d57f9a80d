from datetime import date

from mkorplan.fleet import InventoryBatch
from mkorplan.planning import (
    receipt_unit_names,
    receive_inventory,
    retire_unit,
    sorted_inventory,
    totals_by_diameter,
    update_batch_count,
)


def test_receipt_creates_batch_and_named_units(registry, catalog):
    result = receive_inventory(registry, 200, 3, "2024-02-01")
    assert result.batch.count == 3
    assert [u.name for u in result.units] == ["DN-200", "DN-200-2", "DN-200-3"]
    assert all(u.durations == catalog.durations_for(200) for u in result.units)
    assert all(u.available_from == date(2024, 2, 1) for u in result.units)
    assert len(registry.list_inventory()) == 1


def test_receipt_unit_names():
    assert receipt_unit_names(500, 1) == ["DN-500"]
    assert receipt_unit_names(500, 2) == ["DN-500", "DN-500-2"]


def test_retire_unit_decrements_then_deletes_batch(registry):
    result = receive_inventory(registry, 300, 2, "2024-03-01")
    assert retire_unit(registry, result.units[0])
    (batch,) = registry.list_inventory()
    assert batch.count == 1
    assert [u.name for u in registry.list_units()] == ["DN-300-2"]

    assert retire_unit(registry, result.units[1])
    assert registry.list_inventory() == ()
    assert registry.list_units() == ()


def test_retire_missing_unit_returns_false(registry, make_unit):
    assert not retire_unit(registry, make_unit("ghost", "DN-200"))


def _batch(bid, diameter, count, when):
    return InventoryBatch(id=bid, diameter=diameter, count=count, available_from=when)


def test_update_batch_count_and_sorting():
    inventory = (
        _batch("b1", 300, 2, date(2024, 1, 5)),
        _batch("b2", 200, 1, date(2024, 2, 1)),
        _batch("b3", 200, 4, date(2024, 1, 1)),
    )
    assert [b.id for b in sorted_inventory(inventory)] == ["b3", "b2", "b1"]
    updated = update_batch_count(inventory, "b1", 5)
    assert updated[0].count == 5 and inventory[0].count == 2
    assert [b.id for b in update_batch_count(inventory, "b2", 0)] == ["b1", "b3"]


def test_totals_by_diameter_includes_empty_classes(make_unit, catalog):
    units = [make_unit("a"), make_unit("b"), make_unit("c", diameter=300)]
    totals = totals_by_diameter(units, catalog.diameters())
    assert totals[200] == 2 and totals[300] == 1
    assert totals[700] == 0

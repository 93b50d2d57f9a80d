from collections import Counter
from datetime import date

import pytest

from mkorplan.core import MKORValueError
from mkorplan.fleet import Job
from mkorplan.scheduling import (
    move_unit,
    remove_unit,
    reorder_units,
    replace_unit,
    resize_stage,
    shift_start,
)


@pytest.fixture
def fleet(make_unit):
    return (make_unit("a"), make_unit("b"), make_unit("c", durations=(1, 1, 1)))


def test_reorder_moves_active_onto_over_position(fleet):
    reordered = reorder_units(fleet, "a", "c")
    assert [u.id for u in reordered] == ["b", "c", "a"]
    assert Counter(u.id for u in reordered) == Counter(u.id for u in fleet)
    by_id = {u.id: u for u in reordered}
    assert all(by_id[u.id] == u for u in fleet)


def test_reorder_unknown_or_same_id_is_noop(fleet):
    assert reorder_units(fleet, "a", "zzz") == fleet
    assert reorder_units(fleet, "a", "a") == fleet


def test_move_unit_by_index(fleet):
    assert [u.id for u in move_unit(fleet, 2, 0)] == ["c", "a", "b"]
    assert move_unit(fleet, 5, 0) == fleet
    assert move_unit((), 0, 0) == ()


def test_resize_replaces_slot_and_shifts_later_segments(fleet):
    resized = resize_stage(fleet, "a", 2, 8)
    unit = resized[0]
    assert unit.durations == (2, 1, 8, 1, 2, 3)
    assert unit.segments()[-1].end == date(2024, 1, 17)
    assert fleet[0].durations == (2, 1, 5, 1, 2, 3)  # input untouched


@pytest.mark.parametrize("value", [0, -4])
def test_resize_clamps_to_one_day(fleet, value):
    assert resize_stage(fleet, "b", 0, value)[1].durations[0] == 1


def test_resize_unknown_unit_is_noop_and_bad_index_raises(fleet):
    assert resize_stage(fleet, "nope", 0, 3) == fleet
    with pytest.raises(MKORValueError):
        resize_stage(fleet, "c", 3, 2)


def test_resize_does_not_revalidate_jobs(make_unit):
    unit = make_unit("a", jobs=(Job(start=date(2024, 1, 1), durations=(2, 1, 5, 1, 2, 3)),))
    resized = resize_stage([unit], "a", 2, 40)
    assert resized[0].jobs == unit.jobs


def test_shift_start_moves_anchor_only(fleet):
    shifted = shift_start(fleet, "b", "2024-03-01")
    assert shifted[1].start == date(2024, 3, 1)
    assert shifted[1].available_from == date(2024, 1, 1)
    assert shifted[1].segments()[0].start == date(2024, 3, 1)
    assert shift_start(fleet, "zzz", date(2024, 3, 1)) == fleet


def test_replace_and_remove(fleet):
    edited = fleet[1].model_copy(update={"name": "DN-200 (2)"})
    assert replace_unit(fleet, edited)[1].name == "DN-200 (2)"
    assert [u.id for u in remove_unit(fleet, "b")] == ["a", "c"]
    assert remove_unit(fleet, "zzz") == fleet

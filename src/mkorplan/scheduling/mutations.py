"""Pure edits to the fleet's timeline rows.

Every function takes a sequence of units and returns a new tuple; the input is never
modified. An unknown unit id leaves the sequence unchanged. Resizing and shifting are
direct edits and are not re-validated against recorded jobs.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from mkorplan.core.errors import MKORValueError
from mkorplan.core.types import DateLike, as_date

if TYPE_CHECKING:  # pragma: no cover
    from mkorplan.fleet.contract import Unit

__all__ = [
    "MIN_STAGE_DAYS",
    "move_unit",
    "reorder_units",
    "resize_stage",
    "shift_start",
    "replace_unit",
    "remove_unit",
]

MIN_STAGE_DAYS = 1


def _index_of(units: Sequence["Unit"], unit_id: str) -> int | None:
    return next((i for i, unit in enumerate(units) if unit.id == unit_id), None)


def move_unit(units: Sequence["Unit"], old_index: int, new_index: int) -> tuple["Unit", ...]:
    """Move the unit at ``old_index`` so it ends up at ``new_index``."""
    items = list(units)
    if not items:
        return ()
    if not (0 <= old_index < len(items)) or not (0 <= new_index < len(items)):
        return tuple(items)
    items.insert(new_index, items.pop(old_index))
    return tuple(items)


def reorder_units(units: Sequence["Unit"], active_id: str, over_id: str) -> tuple["Unit", ...]:
    """Drop the row ``active_id`` onto the position currently held by ``over_id``."""
    if active_id == over_id:
        return tuple(units)
    old_index = _index_of(units, active_id)
    new_index = _index_of(units, over_id)
    if old_index is None or new_index is None:
        return tuple(units)
    return move_unit(units, old_index, new_index)


def resize_stage(
    units: Sequence["Unit"], unit_id: str, stage_index: int, new_duration: int
) -> tuple["Unit", ...]:
    """Replace one slot of a unit's active duration sequence (clamped to >= 1 day)."""
    position = _index_of(units, unit_id)
    if position is None:
        return tuple(units)
    unit = units[position]
    if not 0 <= stage_index < len(unit.durations):
        raise MKORValueError(
            f"stage index {stage_index} out of range for {unit.name} "
            f"({len(unit.durations)} stages)"
        )
    durations = list(unit.durations)
    durations[stage_index] = max(MIN_STAGE_DAYS, int(new_duration))
    return _swap(units, position, unit.model_copy(update={"durations": tuple(durations)}))


def shift_start(units: Sequence["Unit"], unit_id: str, new_start: DateLike) -> tuple["Unit", ...]:
    position = _index_of(units, unit_id)
    if position is None:
        return tuple(units)
    unit = units[position]
    return _swap(units, position, unit.model_copy(update={"start": as_date(new_start)}))


def replace_unit(units: Sequence["Unit"], updated: "Unit") -> tuple["Unit", ...]:
    """Swap in an edited copy of a unit, matched by id."""
    position = _index_of(units, updated.id)
    if position is None:
        return tuple(units)
    return _swap(units, position, updated)


def remove_unit(units: Sequence["Unit"], unit_id: str) -> tuple["Unit", ...]:
    return tuple(unit for unit in units if unit.id != unit_id)


def _swap(units: Sequence["Unit"], position: int, unit: "Unit") -> tuple["Unit", ...]:
    items = list(units)
    items[position] = unit
    return tuple(items)

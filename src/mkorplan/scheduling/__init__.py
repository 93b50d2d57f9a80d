"""Scheduling core: timeline builder, availability checker and timeline mutator."""

from .availability import find_conflict, is_available, ranges_overlap
from .mutations import move_unit, remove_unit, reorder_units, replace_unit, resize_stage, shift_start
from .timeline import Segment, StageKind, build_segments, occupied_range

__all__ = [
    "Segment",
    "StageKind",
    "build_segments",
    "occupied_range",
    "find_conflict",
    "is_available",
    "ranges_overlap",
    "move_unit",
    "reorder_units",
    "resize_stage",
    "shift_start",
    "replace_unit",
    "remove_unit",
]

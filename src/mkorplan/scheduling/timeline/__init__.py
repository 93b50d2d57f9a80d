"""Timeline builder primitives."""

from .models import (
    SLOT_STAGES,
    STAGE_LABELS,
    DayCell,
    Segment,
    StageKind,
    build_segments,
    calendar_days,
    occupied_range,
    segment_for_day,
    stage_for_slot,
    total_days,
)

__all__ = [
    "StageKind",
    "SLOT_STAGES",
    "STAGE_LABELS",
    "Segment",
    "DayCell",
    "build_segments",
    "calendar_days",
    "occupied_range",
    "segment_for_day",
    "stage_for_slot",
    "total_days",
]

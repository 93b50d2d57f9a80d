"""Stage segments derived from a start date and an ordered duration sequence."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum

from mkorplan.core.errors import InvalidDuration
from mkorplan.core.types import DateLike, as_date


class StageKind(str, Enum):
    TRANSIT = "transit"
    LOADING = "loading"
    WORKING = "working"
    REPAIR = "repair"


# Six raw catalog slots coarsened into four display stages.
SLOT_STAGES: tuple[StageKind, ...] = (
    StageKind.TRANSIT,
    StageKind.LOADING,
    StageKind.WORKING,
    StageKind.LOADING,
    StageKind.TRANSIT,
    StageKind.REPAIR,
)

STAGE_LABELS: dict[StageKind, str] = {
    StageKind.TRANSIT: "Transit",
    StageKind.LOADING: "Loading/Unloading",
    StageKind.WORKING: "Working",
    StageKind.REPAIR: "Repair",
}


def stage_for_slot(index: int) -> StageKind:
    """Stage kind for a slot index; slots past the sixth count as repair."""
    if index < 0:
        raise IndexError(index)
    if index < len(SLOT_STAGES):
        return SLOT_STAGES[index]
    return StageKind.REPAIR


@dataclass(frozen=True, slots=True)
class Segment:
    """One stage of a job's timeline (inclusive date range)."""

    stage: StageKind
    start: date
    end: date
    duration: int
    index: int

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True, slots=True)
class DayCell:
    """What a single calendar day shows for one unit row."""

    stage: StageKind
    segment_index: int
    day_position: int
    total_duration: int

    @property
    def is_first(self) -> bool:
        return self.day_position == 0

    @property
    def is_last(self) -> bool:
        return self.day_position == self.total_duration - 1

    @property
    def label(self) -> str:
        return STAGE_LABELS[self.stage]


def _checked(durations: Iterable[float]) -> list[int]:
    """Whole-day durations; fractional days round up like the catalog does."""
    values = []
    for index, value in enumerate(durations):
        if value < 0:
            raise InvalidDuration(index, value)
        values.append(int(math.ceil(value)))
    return values


def build_segments(start: DateLike, durations: Sequence[int]) -> tuple[Segment, ...]:
    """Partition ``durations`` into contiguous, non-overlapping segments from ``start``.

    Fractional durations round up to whole days. Zero-duration slots produce no
    segment and do not advance the cursor. Negative durations raise
    :class:`~mkorplan.core.errors.InvalidDuration`.
    """
    cursor = as_date(start)
    segments: list[Segment] = []
    for index, duration in enumerate(_checked(durations)):
        if duration == 0:
            continue
        segments.append(
            Segment(
                stage=stage_for_slot(index),
                start=cursor,
                end=cursor + timedelta(days=duration - 1),
                duration=duration,
                index=index,
            )
        )
        cursor += timedelta(days=duration)
    return tuple(segments)


def total_days(durations: Sequence[int]) -> int:
    return sum(_checked(durations))


def occupied_range(start: DateLike, durations: Sequence[int]) -> tuple[date, date] | None:
    """Inclusive ``(first_day, last_day)`` occupied by a job, or ``None`` for zero days."""
    days = total_days(durations)
    if days == 0:
        return None
    first = as_date(start)
    return first, first + timedelta(days=days - 1)


def segment_for_day(segments: Iterable[Segment], day: DateLike) -> DayCell | None:
    target = as_date(day)
    for segment in segments:
        if segment.contains(target):
            return DayCell(
                stage=segment.stage,
                segment_index=segment.index,
                day_position=(target - segment.start).days,
                total_duration=segment.duration,
            )
    return None


def calendar_days(start: DateLike, end: DateLike) -> list[date]:
    """Every day in the closed range ``[start, end]`` (empty when ``end < start``)."""
    first, last = as_date(start), as_date(end)
    return [first + timedelta(days=offset) for offset in range((last - first).days + 1)]


__all__ = [
    "StageKind",
    "SLOT_STAGES",
    "STAGE_LABELS",
    "Segment",
    "DayCell",
    "stage_for_slot",
    "build_segments",
    "total_days",
    "occupied_range",
    "segment_for_day",
    "calendar_days",
]

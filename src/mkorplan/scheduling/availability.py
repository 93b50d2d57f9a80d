"""Closed-interval overlap checks between a candidate job and recorded jobs.

The occupied range of every *existing* job is measured with the *candidate's*
total duration rather than the job's own stored durations. The two only differ
once a unit's stage plan was resized after a job was recorded; the behaviour is
kept as-is until product intent is settled (see DESIGN.md, "Availability span").
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, timedelta
from typing import TYPE_CHECKING

from mkorplan.core.types import DateLike, as_date
from mkorplan.scheduling.timeline import total_days

if TYPE_CHECKING:  # pragma: no cover
    from mkorplan.fleet.contract import Job

__all__ = ["closed_range", "ranges_overlap", "find_conflict", "is_available"]


def closed_range(start: DateLike, span_days: int) -> tuple[date, date]:
    """Inclusive range of ``span_days`` starting at ``start`` (normalised to midnight).

    A zero span yields ``end == start - 1 day``, an empty range that overlaps nothing.
    """
    first = as_date(start)
    return first, first + timedelta(days=span_days - 1)


def ranges_overlap(a: tuple[date, date], b: tuple[date, date]) -> bool:
    return a[0] <= b[1] and a[1] >= b[0]


def find_conflict(
    existing_jobs: Iterable["Job"],
    candidate_start: DateLike,
    candidate_durations: Sequence[int],
) -> tuple["Job", tuple[date, date]] | None:
    """Return the first recorded job whose range intersects the candidate, with that range."""
    span = total_days(candidate_durations)
    candidate = closed_range(candidate_start, span)
    for job in existing_jobs:
        occupied = closed_range(job.start, span)
        if ranges_overlap(candidate, occupied):
            return job, occupied
    return None


def is_available(
    existing_jobs: Iterable["Job"],
    candidate_start: DateLike,
    candidate_durations: Sequence[int],
) -> bool:
    """True when no recorded job overlaps the candidate ``[start, start + sum - 1]``."""
    return find_conflict(existing_jobs, candidate_start, candidate_durations) is None

"""Common MKOR planner exceptions."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from mkorplan.fleet.contract import Job


class MKORValueError(ValueError):
    """Raised when the planner detects invalid user-provided or catalog data."""


class InvalidDuration(MKORValueError):
    """A negative stage duration was fed to the timeline builder."""

    def __init__(self, index: int, value: float) -> None:
        super().__init__(f"stage duration at index {index} must be non-negative (got {value})")
        self.index = index
        self.value = value


class UnknownDiameter(MKORValueError):
    """The requested diameter class is not in the spec catalog."""

    def __init__(self, diameter: int) -> None:
        super().__init__(f"no catalog entry for diameter DN-{diameter}")
        self.diameter = diameter


class DatePrecedesDelivery(MKORValueError):
    """Proposed job start falls before the unit's delivery date."""

    def __init__(self, requested: date, available_from: date) -> None:
        super().__init__(
            f"date precedes delivery: {requested.isoformat()} < {available_from.isoformat()}"
        )
        self.requested = requested
        self.available_from = available_from


class OverlapConflict(MKORValueError):
    """Proposed job range intersects a job already recorded on the unit."""

    def __init__(
        self,
        requested: tuple[date, date],
        job: "Job",
        occupied: tuple[date, date],
    ) -> None:
        super().__init__(
            "unit occupied for overlapping range: "
            f"{requested[0].isoformat()}..{requested[1].isoformat()} intersects "
            f"{occupied[0].isoformat()}..{occupied[1].isoformat()}"
        )
        self.requested = requested
        self.job = job
        self.occupied = occupied


class RegistryUnavailable(RuntimeError):
    """Raised when the unit/inventory registry cannot be read or written."""


__all__ = [
    "MKORValueError",
    "InvalidDuration",
    "UnknownDiameter",
    "DatePrecedesDelivery",
    "OverlapConflict",
    "RegistryUnavailable",
]

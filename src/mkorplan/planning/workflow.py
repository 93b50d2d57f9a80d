"""Job-planning workflow over the scheduling core.

A planning attempt moves through ``IDLE -> DATE_CHOSEN -> VALIDATING`` and ends in
``ACCEPTED`` or ``REJECTED``. Validation runs two gates in order against a freshly
fetched registry snapshot:

1. the proposed start must not precede the unit's delivery date;
2. the proposed range must not overlap a job already recorded on the unit.

Rejections are ordinary outcomes, not exceptions. Errors raised while validating or
committing (registry failures included) propagate and leave the attempt in
``DATE_CHOSEN`` so it can be resubmitted.

Example
-------
>>> from datetime import date
>>> from mkorplan.fleet import InMemoryRegistry, UnitCandidate
>>> from mkorplan.planning import JobPlanner
>>> planner = JobPlanner(InMemoryRegistry())
>>> candidate = UnitCandidate(name="DN-200", diameter=200, available_from=date(2024, 1, 1))
>>> planner.plan(candidate, date(2024, 1, 1)).state.value
'accepted'
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from contextlib import nullcontext
from dataclasses import dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any

from mkorplan.catalog import SpecCatalog, load_default_catalog
from mkorplan.core.errors import (
    DatePrecedesDelivery,
    MKORValueError,
    OverlapConflict,
)
from mkorplan.core.types import DateLike, as_date
from mkorplan.fleet.contract import Job, Registry, Unit, UnitCandidate, snapshot_from
from mkorplan.scheduling.availability import closed_range, find_conflict
from mkorplan.scheduling.timeline import total_days
from mkorplan.telemetry import PlanningTelemetryLogger

__all__ = [
    "PlanState",
    "RejectionReason",
    "PlanOutcome",
    "JobPlanner",
    "base_name",
    "disambiguate_name",
    "check_job",
]


class PlanState(str, Enum):
    IDLE = "idle"
    DATE_CHOSEN = "date_chosen"
    VALIDATING = "validating"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class RejectionReason(str, Enum):
    DATE_PRECEDES_DELIVERY = "date precedes delivery"
    OVERLAP_CONFLICT = "unit occupied for overlapping range"


@dataclass(frozen=True)
class PlanOutcome:
    """Terminal result of a planning attempt.

    Attributes
    ----------
    state:
        ``ACCEPTED`` or ``REJECTED``.
    candidate:
        Unit identity the job was proposed for.
    start:
        Proposed job start.
    reason / error:
        Populated on rejection. ``error`` is the matching (unraised) exception
        instance carrying the rejected date and, for overlaps, the conflicting job.
    unit / job:
        Populated on acceptance: the registry unit the job landed on and the job itself.
    created_unit:
        True when the unit was synthesised because no ``(name, available_from)`` match existed.
    """

    state: PlanState
    candidate: UnitCandidate
    start: date
    reason: RejectionReason | None = None
    error: DatePrecedesDelivery | OverlapConflict | None = None
    unit: Unit | None = None
    job: Job | None = None
    created_unit: bool = False

    @property
    def accepted(self) -> bool:
        return self.state is PlanState.ACCEPTED

    def summary(self) -> dict[str, Any]:
        return {
            "state": self.state.value,
            "unit": self.unit.name if self.unit else self.candidate.name,
            "diameter": self.candidate.diameter,
            "start": self.start.isoformat(),
            "reason": self.reason.value if self.reason else None,
            "detail": str(self.error) if self.error else None,
            "created_unit": self.created_unit,
        }


def base_name(diameter: int) -> str:
    return f"DN-{diameter}"


def disambiguate_name(diameter: int, units: Iterable[Unit]) -> str:
    """Smallest free name among same-diameter units: ``DN-d``, then ``DN-d (2)``, ``(3)``..."""
    taken = {unit.name for unit in units if unit.diameter == diameter}
    number = 1
    name = base_name(diameter)
    while name in taken:
        number += 1
        name = f"{base_name(diameter)} ({number})"
    return name


def check_job(
    available_from: date,
    existing_jobs: Sequence[Job],
    start: DateLike,
    durations: Sequence[int],
) -> DatePrecedesDelivery | OverlapConflict | None:
    """Run both planning gates; return the first failure (unraised) or ``None``."""
    start = as_date(start)
    if start < available_from:
        return DatePrecedesDelivery(start, available_from)
    conflict = find_conflict(existing_jobs, start, durations)
    if conflict is not None:
        job, occupied = conflict
        return OverlapConflict(closed_range(start, total_days(durations)), job, occupied)
    return None


class JobPlanner:
    """Drive one planning attempt at a time against a registry.

    Parameters
    ----------
    registry:
        Source of truth for units; re-read before every validation.
    catalog:
        Spec catalog used for the gate-(b) duration sequence. Defaults to the bundled one.
    telemetry_log:
        Optional JSONL path; one record is appended per submitted attempt.
    context:
        Extra metadata copied into telemetry records.
    """

    def __init__(
        self,
        registry: Registry,
        catalog: SpecCatalog | None = None,
        *,
        telemetry_log: str | Path | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        self.registry = registry
        self.catalog = catalog or load_default_catalog()
        self.telemetry_log = Path(telemetry_log) if telemetry_log else None
        self.context = dict(context or {})
        self._state = PlanState.IDLE
        self._candidate: UnitCandidate | None = None
        self._start: date | None = None
        self.last_outcome: PlanOutcome | None = None

    @property
    def state(self) -> PlanState:
        return self._state

    def choose_date(self, candidate: Unit | UnitCandidate, start: DateLike) -> None:
        """Select a unit and a proposed start (re-entry after a rejection is allowed)."""
        if self._state in (PlanState.ACCEPTED, PlanState.VALIDATING):
            raise MKORValueError(f"cannot choose a date while the attempt is {self._state.value}")
        if isinstance(candidate, Unit):
            candidate = UnitCandidate.from_unit(candidate)
        self.catalog[candidate.diameter]  # raises UnknownDiameter
        self._candidate = candidate
        self._start = as_date(start)
        self._state = PlanState.DATE_CHOSEN

    def cancel(self) -> None:
        """Abandon the attempt; nothing has been written unless it was accepted."""
        if self._state is PlanState.ACCEPTED:
            raise MKORValueError("accepted attempts cannot be cancelled")
        self._candidate = None
        self._start = None
        self._state = PlanState.IDLE

    def reset(self) -> None:
        """Start a fresh attempt (also after acceptance)."""
        self._candidate = None
        self._start = None
        self._state = PlanState.IDLE

    def submit(self) -> PlanOutcome:
        if self._state is not PlanState.DATE_CHOSEN or self._candidate is None or self._start is None:
            raise MKORValueError(f"submit() requires a chosen date (state: {self._state.value})")
        candidate, start = self._candidate, self._start
        logger = (
            PlanningTelemetryLogger(
                self.telemetry_log,
                unit=candidate.name,
                diameter=candidate.diameter,
                start=start,
                context=self.context,
            )
            if self.telemetry_log
            else nullcontext()
        )
        with logger as telemetry:
            self._state = PlanState.VALIDATING
            try:
                outcome = self._validate_and_commit(candidate, start)
            except Exception:
                self._state = PlanState.DATE_CHOSEN
                raise
            self._state = outcome.state
            if telemetry is not None:
                telemetry.finalize(
                    status=outcome.state.value,
                    reason=outcome.reason.value if outcome.reason else None,
                    extra={"created_unit": outcome.created_unit, "detail": outcome.summary()["detail"]},
                )
        self.last_outcome = outcome
        return outcome

    def plan(self, candidate: Unit | UnitCandidate, start: DateLike) -> PlanOutcome:
        """Convenience wrapper: ``choose_date`` then ``submit`` (resets a finished attempt)."""
        if self._state is PlanState.ACCEPTED:
            self.reset()
        self.choose_date(candidate, start)
        return self.submit()

    def _validate_and_commit(self, candidate: UnitCandidate, start: date) -> PlanOutcome:
        snapshot = snapshot_from(self.registry)
        durations = self.catalog.durations_for(candidate.diameter)
        existing = snapshot.find_unit(candidate)
        failure = check_job(
            candidate.available_from, existing.jobs if existing else (), start, durations
        )
        if isinstance(failure, DatePrecedesDelivery):
            return PlanOutcome(
                PlanState.REJECTED,
                candidate,
                start,
                reason=RejectionReason.DATE_PRECEDES_DELIVERY,
                error=failure,
            )
        if isinstance(failure, OverlapConflict):
            return PlanOutcome(
                PlanState.REJECTED,
                candidate,
                start,
                reason=RejectionReason.OVERLAP_CONFLICT,
                error=failure,
            )

        created = existing is None
        if existing is None:
            name = disambiguate_name(candidate.diameter, snapshot.units)
            existing = self.registry.create_unit(
                name, candidate.diameter, candidate.available_from, durations
            )
        job = self.registry.append_job(existing.id, start)
        unit = existing.model_copy(update={"jobs": existing.jobs + (job,)})
        return PlanOutcome(
            PlanState.ACCEPTED, candidate, start, unit=unit, job=job, created_unit=created
        )

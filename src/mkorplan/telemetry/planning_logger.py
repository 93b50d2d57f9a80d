"""Context manager recording one JSONL line per job-planning attempt."""

from __future__ import annotations

import time
from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Mapping
from uuid import uuid4

from .jsonl import append_jsonl


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


@dataclass(slots=True)
class PlanningTelemetryLogger(AbstractContextManager["PlanningTelemetryLogger"]):
    """Record the outcome of a planning attempt.

    Parameters
    ----------
    log_path:
        JSONL path where attempt records are appended.
    unit:
        Name of the unit the job was proposed for.
    diameter:
        Diameter class of the unit.
    start:
        Proposed job start date.
    context:
        Extra metadata (source command, registry path, ...).

    An exception escaping the ``with`` block is recorded with ``status="error"``
    and re-raised.
    """

    log_path: Path
    unit: str
    diameter: int | None = None
    start: date | None = None
    context: Mapping[str, Any] | None = None
    schema_version: str = "1.0"
    attempt_id: str = field(default_factory=lambda: uuid4().hex, init=False)
    _start_time: float = field(default=0.0, init=False)
    _start_timestamp: str | None = field(default=None, init=False)
    _closed: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self.log_path = Path(self.log_path)

    def __enter__(self) -> "PlanningTelemetryLogger":
        self._start_time = time.perf_counter()
        self._start_timestamp = _iso_now()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type:
            self._close(status="error", reason=None, extra=None, error=repr(exc))
            return False
        self._close(status="ok", reason=None, extra=None, error=None)
        return False

    def elapsed(self) -> float:
        return time.perf_counter() - self._start_time

    def finalize(
        self,
        *,
        status: str,
        reason: str | None = None,
        extra: Mapping[str, Any] | None = None,
    ) -> None:
        """Write the terminal record (``accepted`` / ``rejected``)."""
        self._close(status=status, reason=reason, extra=extra, error=None)

    def _close(
        self,
        *,
        status: str,
        reason: str | None,
        extra: Mapping[str, Any] | None,
        error: str | None,
    ) -> None:
        if self._closed:
            return
        duration = self.elapsed() if self._start_time else 0.0
        record = {
            "record_type": "planning_attempt",
            "schema_version": self.schema_version,
            "attempt_id": self.attempt_id,
            "unit": self.unit,
            "diameter": self.diameter,
            "start": self.start.isoformat() if self.start else None,
            "status": status,
            "reason": reason,
            "context": dict(self.context or {}),
            "extra": dict(extra or {}),
            "error": error,
            "started_at": self._start_timestamp,
            "finished_at": _iso_now(),
            "duration_seconds": round(duration, 3),
        }
        append_jsonl(self.log_path, record)
        self._closed = True


__all__ = ["PlanningTelemetryLogger"]

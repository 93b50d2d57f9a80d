"""SQLite-backed registry for inventory batches, units and their jobs."""

from __future__ import annotations

import json
import sqlite3
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from uuid import uuid4

from mkorplan.catalog import SpecCatalog, load_default_catalog
from mkorplan.core.errors import MKORValueError, RegistryUnavailable
from mkorplan.core.types import DateLike, as_date
from mkorplan.fleet.contract import InventoryBatch, Job, Unit

__all__ = ["SQLiteRegistry"]


_SCHEMA = """
PRAGMA foreign_keys = ON;
CREATE TABLE IF NOT EXISTS inventory (
    id TEXT PRIMARY KEY,
    diameter INTEGER NOT NULL,
    count INTEGER NOT NULL CHECK (count >= 1),
    available_from TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS units (
    id TEXT PRIMARY KEY,
    position INTEGER NOT NULL,
    name TEXT NOT NULL,
    diameter INTEGER NOT NULL,
    available_from TEXT NOT NULL,
    start TEXT NOT NULL,
    durations_json TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS jobs (
    unit_id TEXT NOT NULL,
    seq INTEGER NOT NULL,
    start TEXT NOT NULL,
    durations_json TEXT NOT NULL,
    PRIMARY KEY (unit_id, seq),
    FOREIGN KEY (unit_id) REFERENCES units(id) ON DELETE CASCADE
);
"""


def _durations_json(durations: Sequence[int]) -> str:
    return json.dumps([int(value) for value in durations])


class SQLiteRegistry:
    """Registry persisted in a single SQLite file.

    Each call opens its own connection, so a snapshot read after a write always
    reflects the committed state. ``sqlite3`` and filesystem failures surface as
    :class:`~mkorplan.core.errors.RegistryUnavailable`.
    """

    def __init__(self, sqlite_path: str | Path, catalog: SpecCatalog | None = None) -> None:
        self.path = Path(sqlite_path)
        self.catalog = catalog or load_default_catalog()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        try:
            if not self.path.parent.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.path)
        except (sqlite3.Error, OSError) as exc:
            raise RegistryUnavailable(f"cannot open registry {self.path}: {exc}") from exc
        try:
            conn.executescript(_SCHEMA)
            with conn:
                yield conn
        except sqlite3.Error as exc:
            raise RegistryUnavailable(f"registry {self.path} failed: {exc}") from exc
        finally:
            conn.close()

    def list_inventory(self) -> Sequence[InventoryBatch]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT id, diameter, count, available_from FROM inventory ORDER BY rowid"
            ).fetchall()
        return tuple(
            InventoryBatch(
                id=row[0],
                diameter=row[1],
                count=row[2],
                available_from=date.fromisoformat(row[3]),
            )
            for row in rows
        )

    def create_inventory_batch(
        self, diameter: int, count: int, available_from: DateLike
    ) -> InventoryBatch:
        self.catalog[diameter]  # raises UnknownDiameter
        batch = InventoryBatch(
            id=uuid4().hex, diameter=diameter, count=count, available_from=as_date(available_from)
        )
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO inventory (id, diameter, count, available_from) VALUES (?, ?, ?, ?)",
                (batch.id, batch.diameter, batch.count, batch.available_from.isoformat()),
            )
        return batch

    def delete_inventory_batch(self, batch_id: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM inventory WHERE id = ?", (batch_id,))

    def list_units(self) -> Sequence[Unit]:
        with self._connect() as conn:
            unit_rows = conn.execute(
                "SELECT id, name, diameter, available_from, start, durations_json "
                "FROM units ORDER BY position, rowid"
            ).fetchall()
            job_rows = conn.execute(
                "SELECT unit_id, start, durations_json FROM jobs ORDER BY unit_id, seq"
            ).fetchall()
        jobs: dict[str, list[Job]] = {}
        for unit_id, start, durations in job_rows:
            jobs.setdefault(unit_id, []).append(
                Job(start=date.fromisoformat(start), durations=tuple(json.loads(durations)))
            )
        return tuple(
            Unit(
                id=row[0],
                name=row[1],
                diameter=row[2],
                available_from=date.fromisoformat(row[3]),
                start=date.fromisoformat(row[4]),
                durations=tuple(json.loads(row[5])),
                jobs=tuple(jobs.get(row[0], ())),
            )
            for row in unit_rows
        )

    def create_unit(
        self, name: str, diameter: int, available_from: DateLike, durations: Sequence[int]
    ) -> Unit:
        unit = Unit(
            id=uuid4().hex,
            name=name,
            diameter=diameter,
            available_from=as_date(available_from),
            durations=tuple(durations),
        )
        with self._connect() as conn:
            (position,) = conn.execute("SELECT COALESCE(MAX(position) + 1, 0) FROM units").fetchone()
            conn.execute(
                """
                INSERT INTO units (id, position, name, diameter, available_from, start, durations_json)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    unit.id,
                    position,
                    unit.name,
                    unit.diameter,
                    unit.available_from.isoformat(),
                    unit.start.isoformat(),
                    _durations_json(unit.durations),
                ),
            )
        return unit

    def delete_unit(self, unit_id: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM units WHERE id = ?", (unit_id,))

    def append_job(self, unit_id: str, start: DateLike) -> Job:
        with self._connect() as conn:
            row = conn.execute("SELECT diameter FROM units WHERE id = ?", (unit_id,)).fetchone()
            if row is None:
                raise MKORValueError(f"unknown unit id: {unit_id}")
            job = Job(start=as_date(start), durations=self.catalog.durations_for(row[0]))
            (seq,) = conn.execute(
                "SELECT COALESCE(MAX(seq) + 1, 0) FROM jobs WHERE unit_id = ?", (unit_id,)
            ).fetchone()
            conn.execute(
                "INSERT INTO jobs (unit_id, seq, start, durations_json) VALUES (?, ?, ?, ?)",
                (unit_id, seq, job.start.isoformat(), _durations_json(job.durations)),
            )
        return job

    def save_units(self, units: Sequence[Unit]) -> None:
        """Persist timeline edits (row order, anchor date, active durations).

        Jobs are append-only and are left untouched; units absent from ``units`` keep
        their rows but sort after the saved ones.
        """
        with self._connect() as conn:
            conn.execute("UPDATE units SET position = position + ?", (len(units),))
            conn.executemany(
                "UPDATE units SET position = ?, start = ?, durations_json = ?, name = ? WHERE id = ?",
                [
                    (
                        position,
                        unit.start.isoformat(),
                        _durations_json(unit.durations),
                        unit.name,
                        unit.id,
                    )
                    for position, unit in enumerate(units)
                ],
            )

"""Append-only JSONL helpers for planning telemetry."""

from __future__ import annotations

import json
from collections import deque
from collections.abc import Mapping
from pathlib import Path
from typing import Any


def append_jsonl(path: str | Path, record: Mapping[str, Any]) -> None:
    """Append ``record`` as one compact JSON line, creating parent folders as needed."""
    path = Path(path)
    if not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        json.dump(record, handle, ensure_ascii=False, separators=(",", ":"), default=str)
        handle.write("\n")


def tail_jsonl(path: str | Path, limit: int = 20) -> list[dict[str, Any]]:
    """Return up to ``limit`` most recent JSON object records (malformed lines skipped)."""
    path = Path(path)
    if not path.exists():
        return []
    records: deque[dict[str, Any]] = deque(maxlen=max(limit, 0))
    with path.open("r", encoding="utf-8") as handle:
        for raw in handle:
            line = raw.strip()
            if not line:
                continue
            try:
                payload = json.loads(line)
            except json.JSONDecodeError:
                continue
            if isinstance(payload, dict):
                records.append(payload)
    return list(records)


__all__ = ["append_jsonl", "tail_jsonl"]

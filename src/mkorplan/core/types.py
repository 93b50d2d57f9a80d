from __future__ import annotations

from datetime import date, datetime
from typing import Union

DateLike = Union[date, datetime, str]


def as_date(value: DateLike) -> date:
    """Normalise a date, datetime or ISO string to a calendar date (midnight)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if "T" in text:
            return datetime.fromisoformat(text).date()
        return date.fromisoformat(text)
    raise TypeError(f"expected a date, datetime or ISO string, got {type(value).__name__}")

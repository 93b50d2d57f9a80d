"""Core utilities shared across mkorplan modules."""

from .errors import (
    DatePrecedesDelivery,
    InvalidDuration,
    MKORValueError,
    OverlapConflict,
    RegistryUnavailable,
    UnknownDiameter,
)
from .types import DateLike, as_date

__all__ = [
    "MKORValueError",
    "InvalidDuration",
    "UnknownDiameter",
    "DatePrecedesDelivery",
    "OverlapConflict",
    "RegistryUnavailable",
    "DateLike",
    "as_date",
]

"""Offset specifications and date-part normalization.

Two shapes describe an offset from a reference date:

- ``DateDistance``: a single ``distance`` in one ``unit``
- ``DatePart``: a sparse mapping of unit name to count, e.g.
  ``{"hour": 2, "minute": 30}``
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from numbers import Real
from typing import Any, TypeAlias, TypedDict

from aiodate.errors import InvalidDateError
from aiodate.util import MULTIPLIERS, Unit


class DatePart(TypedDict, total=False):
    second: float
    minute: float
    hour: float
    day: float
    week: float
    month: float
    year: float


@dataclass(frozen=True, kw_only=True)
class DateDistance:
    distance: float
    unit: Unit

    def __post_init__(self) -> None:
        if isinstance(self.distance, bool) or not isinstance(self.distance, Real):
            raise TypeError(
                f"distance must be a real number.\n"
                f"Got {type(self.distance).__name__!r}: {self.distance!r}\n"
                f"Example: DateDistance(distance=3, unit='day')"
            )
        if self.unit not in MULTIPLIERS:
            valid = ", ".join(MULTIPLIERS)
            raise ValueError(
                f"Invalid unit: {self.unit!r}\n"
                f"Valid units: {valid}\n"
                f"Example: DateDistance(distance=3, unit='day')"
            )

    @property
    def milliseconds(self) -> float:
        return self.distance * MULTIPLIERS[self.unit]

    def __str__(self) -> str:
        return f"DateDistance({self.distance} {self.unit})"


Offset: TypeAlias = "DateDistance | Mapping[str, Any]"

# Carry thresholds, applied strictly in this order so carries cascade upward
# in a single pass. day -> month assumes 31-day months.
_CARRIES: tuple[tuple[str, str, int], ...] = (
    ("second", "minute", 60),
    ("minute", "hour", 60),
    ("hour", "day", 24),
    ("day", "month", 31),
    ("month", "year", 12),
)


def as_distance(offset: "Offset") -> DateDistance | None:
    """Return ``offset`` as a DateDistance if it has that shape, else None.

    Mappings carrying both ``distance`` and ``unit`` keys are accepted too.
    """
    if isinstance(offset, DateDistance):
        return offset
    if isinstance(offset, Mapping) and "distance" in offset and "unit" in offset:
        return DateDistance(distance=offset["distance"], unit=offset["unit"])
    return None


def extract(value: datetime) -> DatePart:
    """Split a datetime into its wall-clock fields (zeros kept, 1-based month)."""
    return {
        "year": value.year,
        "month": value.month,
        "day": value.day,
        "hour": value.hour,
        "minute": value.minute,
        "second": value.second,
    }


def normalize(parts: Mapping[str, Any]) -> DatePart:
    """Carry excess time from each unit into the next larger one.

    A carry only happens when a value is strictly greater than its threshold.
    Unset, None and zero fields are dropped from the result; ``week`` passes
    through untouched. The input mapping is not modified.

    Example:
        >>> normalize({"second": 75, "minute": 90, "hour": 25})
        {'second': 15, 'minute': 31, 'hour': 2, 'day': 1}
    """
    result: dict[str, Any] = dict(parts)

    for unit, into, limit in _CARRIES:
        value = result.get(unit)
        if value is None or value <= limit:
            continue
        carry = math.trunc(value / limit)
        result[unit] = value - limit * carry
        result[into] = (result.get(into) or 0) + carry

    return {key: value for key, value in result.items() if value}  # type: ignore[return-value]


def get_date_part(params: datetime | Mapping[str, Any]) -> DatePart:
    """Extract the fields of a datetime, or normalize a date-part mapping."""
    if isinstance(params, datetime):
        return extract(params)
    if isinstance(params, Mapping):
        return normalize(params)
    raise InvalidDateError(1)

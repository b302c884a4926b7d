"""Utility constants and helpers for aiodate.

Time unit constants represent durations in milliseconds, matching the
resolution of the timestamps produced by the ``"toNumber"`` output format.
Months and years are fixed approximations (31 and 365 days).
"""

from typing import Literal, TypeAlias

# Time unit constants (all values in milliseconds)
SECOND = 1000
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY
MONTH = 31 * DAY
YEAR = 365 * DAY

Unit: TypeAlias = Literal["second", "minute", "hour", "day", "week", "month", "year"]

MULTIPLIERS: dict[str, int] = {
    "second": SECOND,
    "minute": MINUTE,
    "hour": HOUR,
    "day": DAY,
    "week": WEEK,
    "month": MONTH,
    "year": YEAR,
}

DEFAULT_LOCALE = "en-ID"
DEFAULT_LOCALE_FORMAT = "full"


def multiplier(unit: Unit | None = None) -> int | dict[str, int]:
    """Return the millisecond multiplier for ``unit``, or the whole table.

    Example:
        >>> multiplier("day")
        86400000
        >>> multiplier()["week"]
        604800000
    """
    if unit is None:
        return dict(MULTIPLIERS)
    if unit not in MULTIPLIERS:
        valid = ", ".join(MULTIPLIERS)
        raise ValueError(f"Invalid unit: {unit!r}\n" f"Valid units: {valid}\n")
    return MULTIPLIERS[unit]

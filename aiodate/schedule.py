"""Recurring notification schedules built on DateHelper.

Computes the datetimes at which notifications should fire. Delivering them
is up to the caller.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal, TypeAlias

from aiodate.helper import DateHelper
from aiodate.parts import DateDistance

logger = logging.getLogger(__name__)

Range: TypeAlias = Literal[
    "twice a day", "three times a day", "daily", "weekly", "twice a week", "monthly"
]

# Older configurations spell "daily" as "dialy"
_ALIASES: dict[str, Range] = {"dialy": "daily"}

RANGES: tuple[Range, ...] = (
    "twice a day",
    "three times a day",
    "daily",
    "weekly",
    "twice a week",
    "monthly",
)

_TWICE_A_DAY_HOURS = (7, 21)
_THREE_TIMES_A_DAY_HOURS = (8, 13, 20)


@dataclass(frozen=True, kw_only=True)
class ScheduleTime:
    hour: int
    minute: int = 0
    second: int = 0

    def __post_init__(self) -> None:
        if not (0 <= self.hour < 24):
            raise ValueError(f"hour must be in range [0, 24), got {self.hour}")
        if not (0 <= self.minute < 60):
            raise ValueError(f"minute must be in range [0, 60), got {self.minute}")
        if not (0 <= self.second < 60):
            raise ValueError(f"second must be in range [0, 60), got {self.second}")


@dataclass(frozen=True, kw_only=True)
class NotificationConfig:
    range: Range
    time: ScheduleTime = field(default_factory=lambda: ScheduleTime(hour=0))
    qty: int | None = None
    start_id: int | None = None

    def __post_init__(self) -> None:
        name = _ALIASES.get(self.range, self.range)
        if name not in RANGES:
            valid = ", ".join(repr(r) for r in RANGES)
            raise ValueError(
                f"Invalid range: {self.range!r}\n"
                f"Valid ranges: {valid}\n"
                f"Example: NotificationConfig(range='weekly', time=ScheduleTime(hour=9))"
            )
        object.__setattr__(self, "range", name)
        if self.qty is not None and self.qty < 0:
            raise ValueError(f"qty must be non-negative, got {self.qty}")


@dataclass(frozen=True, kw_only=True)
class Notification:
    id: int
    at: datetime


def generate_schedule_date(
    i: int, config: NotificationConfig, now: datetime | None = None
) -> datetime:
    """
    Return the ``i``-th scheduled datetime for a notification config.

    Args:
        i: Zero-based index of the occurrence
        config: Cadence and time of day
        now: Reference date (default: current local time)

    Returns:
        The scheduled datetime

    Example:
        >>> config = NotificationConfig(
        ...     range="twice a week", time=ScheduleTime(hour=12), qty=7
        ... )
        >>> dates = [generate_schedule_date(i, config) for i in range(7)]
    """
    helper = DateHelper(now)
    minute = config.time.minute
    second = config.time.second

    match config.range:
        case "twice a day":
            base = helper.next(DateDistance(distance=i * 4, unit="hour"))
            hour = _TWICE_A_DAY_HOURS[i % 2]
        case "three times a day":
            base = helper.next(DateDistance(distance=i * 8, unit="hour"))
            hour = _THREE_TIMES_A_DAY_HOURS[i % 3]
        case "daily":
            days = i if helper.current_date.hour < config.time.hour - 1 else i + 1
            base = helper.next(DateDistance(distance=days, unit="day"))
            hour = config.time.hour
        case "weekly":
            base = helper.next(DateDistance(distance=i, unit="week"))
            hour = config.time.hour
        case "twice a week":
            base = helper.next(DateDistance(distance=i * 3, unit="day"))
            hour = config.time.hour
        case "monthly":
            base = helper.next(DateDistance(distance=i, unit="month"))
            hour = config.time.hour
        case _:
            raise ValueError(f"Invalid range: {config.range!r}")

    return base.replace(hour=hour, minute=minute, second=second)


def generate_schedule(
    config: NotificationConfig, now: datetime | None = None
) -> list[Notification]:
    """
    Build ``config.qty`` notifications (default 1) numbered from ``config.start_id``.

    All occurrences are computed against the same reference date.

    Example:
        >>> config = NotificationConfig(
        ...     range="daily", time=ScheduleTime(hour=9), qty=3, start_id=100
        ... )
        >>> [n.id for n in generate_schedule(config)]
        [100, 101, 102]
    """
    if now is None:
        now = datetime.now().astimezone()
    qty = 1 if config.qty is None else config.qty
    start_id = config.start_id or 0

    notifications = [
        Notification(id=start_id + i, at=generate_schedule_date(i, config, now))
        for i in range(qty)
    ]
    logger.debug(
        f"Generated {len(notifications)} {config.range!r} notifications from {now}"
    )
    return notifications

from .errors import AioDateError, DateFormatError, InvalidDateError
from .helper import DateHelper
from .parts import DateDistance, DatePart, get_date_part, normalize
from .schedule import (
    Notification,
    NotificationConfig,
    ScheduleTime,
    generate_schedule,
    generate_schedule_date,
)
from .util import DAY, HOUR, MINUTE, MONTH, SECOND, WEEK, YEAR, multiplier

__all__ = [
    "DateHelper",
    "DateDistance",
    "DatePart",
    "get_date_part",
    "normalize",
    "multiplier",
    "Notification",
    "NotificationConfig",
    "ScheduleTime",
    "generate_schedule",
    "generate_schedule_date",
    "AioDateError",
    "InvalidDateError",
    "DateFormatError",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
    "WEEK",
    "MONTH",
    "YEAR",
]

"""Date arithmetic around a reference date.

``DateHelper`` adds and subtracts offsets, finds neighbouring Sundays, measures
the gap between two dates and renders results in a configurable output
format.

Offsets are accumulated as absolute milliseconds: months and years count as
31 and 365 days, not calendar-correct steps.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from datetime import datetime, timedelta, timezone
from typing import Any

from babel import Locale
from dateutil.relativedelta import SU, relativedelta

from aiodate import parts, util
from aiodate.errors import DateFormatError, InvalidDateError
from aiodate.formats import OutputFormat, get_format, resolve_locale, to_milliseconds
from aiodate.parts import DatePart, Offset
from aiodate.util import Unit

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _validate_date(*dates: Any) -> None:
    """Raise InvalidDateError naming the 1-based position of the first non-datetime."""
    for position, value in enumerate(dates, start=1):
        if not isinstance(value, datetime):
            raise InvalidDateError(position)


def _shift(value: datetime, milliseconds: float) -> datetime:
    """Move ``value`` by an absolute amount of time, keeping its timezone.

    Naive datetimes are read as local time and come back naive.
    """
    delta = timedelta(milliseconds=milliseconds)
    moved = value.astimezone(timezone.utc) + delta
    if value.tzinfo is None:
        return moved.astimezone().replace(tzinfo=None)
    return moved.astimezone(value.tzinfo)


class DateHelper:
    """Date arithmetic helper bound to a reference date.

    Example:
        >>> helper = DateHelper(datetime(2025, 3, 4, tzinfo=timezone.utc))
        >>> helper.next(DateDistance(distance=1, unit="day"))
        datetime.datetime(2025, 3, 5, 0, 0, tzinfo=datetime.timezone.utc)
        >>> helper.next({"hour": 25})
        datetime.datetime(2025, 3, 5, 1, 0, tzinfo=datetime.timezone.utc)
    """

    def __init__(
        self,
        current_date: datetime | None = None,
        format: str | bool | None = False,
    ):
        """
        Initialize a helper.

        Args:
            current_date: Reference date for every calculation
                (default: now, as an aware local datetime)
            format: Output format for datetime results:
                - False: a new datetime
                - "toLocaleString" / "toLocaleDateString": localized date string
                - "toNumber": milliseconds since the Unix epoch
                - "toString": plain string
                - "toLocaleTimeString": localized time string
        """
        if current_date is None:
            current_date = datetime.now().astimezone()
        _validate_date(current_date)
        self._current_date: datetime = current_date
        self._locale_format: str = util.DEFAULT_LOCALE_FORMAT
        self.locale = util.DEFAULT_LOCALE
        self.format = format

    @property
    def current_date(self) -> datetime:
        return self._current_date

    @property
    def format(self) -> str | bool | None:
        return self._format

    @format.setter
    def format(self, value: str | bool | None) -> None:
        self._renderer: OutputFormat = get_format(value)
        self._format: str | bool | None = value

    @property
    def locale(self) -> str | Sequence[str]:
        return self._locale

    @locale.setter
    def locale(self, value: str | Sequence[str]) -> None:
        """Set the locale as a tag ("en-US") or a preference list (["fr-FR", "en"])."""
        if not value:
            raise ValueError(
                "locale must be a non-empty tag or list of tags.\n"
                "Example: helper.locale = 'en-US'"
            )
        self._resolved_locale: Locale = resolve_locale(value)
        self._locale: str | Sequence[str] = value

    @property
    def locale_format(self) -> str:
        return self._locale_format

    @locale_format.setter
    def locale_format(self, value: str) -> None:
        """Set a Babel width ("full", "long", "medium", "short") or a CLDR pattern."""
        self._locale_format = value

    def _render(self, compute: Callable[[], datetime]) -> Any:
        """Compute a datetime result and render it in the configured format.

        Any failure on the way, including out of range dates, surfaces as
        DateFormatError with the original error chained.
        """
        try:
            value = compute()
            _validate_date(value)
            return self._renderer.render(
                value, self._resolved_locale, self._locale_format
            )
        except (ArithmeticError, TypeError, ValueError, KeyError) as exc:
            logger.exception(f"Could not generate a {self._format!r} result")
            raise DateFormatError() from exc

    def multiplier(self, unit: Unit | None = None) -> int | dict[str, int]:
        """Milliseconds in one ``unit``, or the full unit table when omitted."""
        return util.multiplier(unit)

    def get_date_part(self, params: datetime | Mapping[str, Any]) -> DatePart:
        """Extract the fields of a datetime, or normalize a date-part mapping.

        Example:
            >>> DateHelper().get_date_part({"second": 75, "minute": 90, "hour": 25})
            {'second': 15, 'minute': 31, 'hour': 2, 'day': 1}
        """
        return parts.get_date_part(params)

    def next_sunday(self, date: datetime | None = None) -> Any:
        """The given date (default: reference date) if Sunday, else the following Sunday."""
        value = self._current_date if date is None else date
        _validate_date(value)
        return self._render(lambda: value + relativedelta(weekday=SU))

    def last_sunday(self, date: datetime | None = None) -> Any:
        """The given date (default: reference date) if Sunday, else the preceding Sunday."""
        value = self._current_date if date is None else date
        _validate_date(value)
        return self._render(lambda: value + relativedelta(weekday=SU(-1)))

    def _offset_milliseconds(self, offsets: tuple[Offset, ...]) -> float:
        total: float = 0
        for offset in offsets:
            distance = parts.as_distance(offset)
            if distance is not None:
                total += distance.milliseconds
                continue
            if not isinstance(offset, Mapping):
                raise TypeError(
                    f"Offsets must be DateDistance or a date-part mapping.\n"
                    f"Got {type(offset).__name__!r}: {offset!r}\n"
                    f"Examples:\n"
                    f"  helper.next(DateDistance(distance=1, unit='day'))\n"
                    f"  helper.next({{'hour': 2, 'minute': 30}})"
                )
            for unit, value in parts.normalize(offset).items():
                total += value * util.multiplier(unit)  # type: ignore[arg-type]
        return total

    def next(self, *offsets: Offset) -> Any:
        """Reference date moved forward by the sum of ``offsets``.

        Args:
            *offsets: DateDistance values, {"distance": n, "unit": u} mappings,
                or date-part mappings such as {"year": 1, "second": 25}

        Example:
            >>> helper.next(DateDistance(distance=1, unit="day"), {"minute": 15})
        """
        milliseconds = self._offset_milliseconds(offsets)
        return self._render(lambda: _shift(self._current_date, milliseconds))

    def last(self, *offsets: Offset) -> Any:
        """Reference date moved backward by the sum of ``offsets``."""
        milliseconds = -self._offset_milliseconds(offsets)
        return self._render(lambda: _shift(self._current_date, milliseconds))

    def distance(self, date1: datetime, date2: datetime | None = None) -> DatePart:
        """Calendar-like gap between two dates (default second date: reference date).

        The absolute gap is read as a UTC instant counted from the epoch, so
        month lengths follow the 1970 calendar. Zero fields are dropped.

        Example:
            >>> helper.distance(datetime(2020, 1, 1), datetime(2022, 6, 15))
            {'year': 2, 'month': 5, 'day': 14}
        """
        if date2 is None:
            date2 = self._current_date
        _validate_date(date1, date2)

        gap = abs(to_milliseconds(date2) - to_milliseconds(date1))
        diff = _EPOCH + timedelta(milliseconds=gap)

        fields: DatePart = {
            "year": diff.year - 1970,
            "month": diff.month - 1,
            "day": diff.day - 1,
            "hour": diff.hour,
            "minute": diff.minute,
            "second": diff.second,
        }
        return {key: value for key, value in fields.items() if value}  # type: ignore[return-value]

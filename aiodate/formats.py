"""Output formats selectable on a DateHelper.

Each format renders a datetime result into the shape requested by the
``format`` flag. Locale-aware formats delegate to Babel's CLDR data.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from babel import Locale, UnknownLocaleError
from babel.dates import format_date, format_time
from typing_extensions import override

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_milliseconds(value: datetime) -> int:
    """Milliseconds since the Unix epoch. Naive datetimes are read as local time."""
    if value.tzinfo is None:
        value = value.astimezone()
    delta = value - _EPOCH
    return (delta.days * 86400 + delta.seconds) * 1000 + delta.microseconds // 1000


def resolve_locale(locale: str | Sequence[str]) -> Locale:
    """Pick the first locale Babel knows from a tag or a list of tags.

    Tags may be BCP-47 (``en-US``) or POSIX (``en_US``). A tag with an unknown
    region falls back to its language; when nothing matches, ``en`` is used.
    """
    candidates = [locale] if isinstance(locale, str) else list(locale)
    for tag in candidates:
        sep = "-" if "-" in tag else "_"
        try:
            return Locale.parse(tag, sep=sep)
        except (UnknownLocaleError, ValueError):
            language = tag.split(sep)[0]
            try:
                resolved = Locale.parse(language)
            except (UnknownLocaleError, ValueError):
                logger.debug(f"Skipping unknown locale {tag!r}")
                continue
            logger.debug(f"Locale {tag!r} unavailable, using {language!r}")
            return resolved
    logger.debug(f"No usable locale in {candidates!r}, using 'en'")
    return Locale("en")


class OutputFormat(ABC):
    """Render a datetime result for a given locale and CLDR format."""

    @abstractmethod
    def render(self, value: datetime, locale: Locale, locale_format: str) -> Any:
        pass


class DatetimeFormat(OutputFormat):
    @override
    def render(self, value: datetime, locale: Locale, locale_format: str) -> datetime:
        # datetimes are immutable; replace() hands back a fresh instance
        return value.replace()


class LocaleDateFormat(OutputFormat):
    @override
    def render(self, value: datetime, locale: Locale, locale_format: str) -> str:
        return format_date(value, format=locale_format, locale=locale)


class LocaleTimeFormat(OutputFormat):
    @override
    def render(self, value: datetime, locale: Locale, locale_format: str) -> str:
        return format_time(value, format="medium", locale=locale)


class TimestampFormat(OutputFormat):
    @override
    def render(self, value: datetime, locale: Locale, locale_format: str) -> int:
        return to_milliseconds(value)


class StringFormat(OutputFormat):
    """Locale-independent string, e.g. ``Sun Mar 09 2025 00:00:00 GMT+0700 (WIB)``."""

    @override
    def render(self, value: datetime, locale: Locale, locale_format: str) -> str:
        if value.tzinfo is None:
            value = value.astimezone()
        text = value.strftime("%a %b %d %Y %H:%M:%S GMT%z")
        name = value.tzname()
        return f"{text} ({name})" if name else text


FORMATS: dict[str | None, OutputFormat] = {
    None: DatetimeFormat(),
    "toLocaleString": LocaleDateFormat(),
    "toLocaleDateString": LocaleDateFormat(),
    "toNumber": TimestampFormat(),
    "toString": StringFormat(),
    "toLocaleTimeString": LocaleTimeFormat(),
}


def get_format(flag: str | bool | None) -> OutputFormat:
    """Look up the output format for a ``format`` flag (False/None = datetime)."""
    key = flag or None
    if key not in FORMATS:
        valid = ", ".join(repr(k) for k in FORMATS if k is not None)
        raise ValueError(
            f"Invalid format: {flag!r}\n"
            f"Valid formats: False, {valid}\n"
            f"Example: DateHelper(datetime.now(), format='toNumber')"
        )
    return FORMATS[key]  # type: ignore[index]

"""Command-line interface for trying out aiodate by hand."""

import json
import logging
import sys
from datetime import datetime

import click
from dateutil.parser import isoparse

from aiodate.helper import DateHelper
from aiodate.schedule import RANGES, NotificationConfig, ScheduleTime, generate_schedule
from aiodate.util import MULTIPLIERS

logger = logging.getLogger(__name__)


class DateParam(click.ParamType):
    name = "date"

    def convert(self, value, param, ctx):
        if isinstance(value, datetime):
            return value
        try:
            return isoparse(value)
        except ValueError:
            self.fail(f"{value!r} is not an ISO 8601 date (e.g. 2025-03-04T09:30)", param, ctx)


DATE = DateParam()


def _echo_json(data) -> None:
    click.echo(json.dumps(data, default=str))


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """Date arithmetic helpers."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


@main.command()
@click.argument("date1", type=DATE)
@click.argument("date2", type=DATE)
def distance(date1: datetime, date2: datetime) -> None:
    """Calendar-like distance between DATE1 and DATE2."""
    _echo_json(DateHelper().distance(date1, date2))


@main.command()
@click.argument("direction", type=click.Choice(["next", "last"]))
@click.argument("date", type=DATE)
@click.option("--year", type=float, default=0)
@click.option("--month", type=float, default=0)
@click.option("--week", type=float, default=0)
@click.option("--day", type=float, default=0)
@click.option("--hour", type=float, default=0)
@click.option("--minute", type=float, default=0)
@click.option("--second", type=float, default=0)
def shift(direction: str, date: datetime, **offset: float) -> None:
    """Move DATE forward (next) or backward (last) by the given offset."""
    helper = DateHelper(date)
    logger.debug(f"Shifting {date} {direction} by {offset}")
    result = helper.next(offset) if direction == "next" else helper.last(offset)
    click.echo(result.isoformat())


@main.command()
@click.argument("unit", type=click.Choice(list(MULTIPLIERS)), required=False)
def multiplier(unit: str | None) -> None:
    """Milliseconds in UNIT, or the whole unit table."""
    value = DateHelper().multiplier(unit)  # type: ignore[arg-type]
    if isinstance(value, dict):
        _echo_json(value)
    else:
        click.echo(value)


@main.command()
@click.argument("date", type=DATE)
def part(date: datetime) -> None:
    """Split DATE into its fields."""
    _echo_json(DateHelper().get_date_part(date))


@main.command()
@click.argument("date", type=DATE)
@click.option("--locale", default="en-US", show_default=True)
def sundays(date: datetime, locale: str) -> None:
    """Nearest Sundays around DATE, formatted for LOCALE."""
    helper = DateHelper(date, "toLocaleString")
    helper.locale = locale
    click.echo(f"Next Sunday : {helper.next_sunday()}")
    click.echo(f"Last Sunday : {helper.last_sunday()}")


@main.command()
@click.argument("range_", metavar="RANGE", type=click.Choice(list(RANGES) + ["dialy"]))
@click.option("--hour", type=int, default=9, show_default=True)
@click.option("--minute", type=int, default=0, show_default=True)
@click.option("--second", type=int, default=0, show_default=True)
@click.option("--qty", type=int, default=1, show_default=True)
@click.option("--start-id", type=int, default=0, show_default=True)
@click.option("--now", type=DATE, default=None, help="Reference date (default: now).")
def schedule(
    range_: str,
    hour: int,
    minute: int,
    second: int,
    qty: int,
    start_id: int,
    now: datetime | None,
) -> None:
    """Notification datetimes for a recurring RANGE."""
    try:
        config = NotificationConfig(
            range=range_,  # type: ignore[arg-type]
            time=ScheduleTime(hour=hour, minute=minute, second=second),
            qty=qty,
            start_id=start_id,
        )
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    for notification in generate_schedule(config, now):
        click.echo(f"{notification.id}\t{notification.at.isoformat()}")


if __name__ == "__main__":
    main()

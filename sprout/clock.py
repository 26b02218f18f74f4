"""Local clock — the single source of "now" and "today".

Models take a clock callable so tests can pin the date.
"""

from datetime import date, datetime, timezone, timedelta

from sprout.config import TIMEZONE_OFFSET_HOURS

TZ = timezone(timedelta(hours=TIMEZONE_OFFSET_HOURS))


def now() -> datetime:
    return datetime.now(TZ)


def local_date(moment: datetime) -> date:
    """Calendar date of a timestamp in the configured timezone."""
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone(TZ).date()


def local_midnight(day: date, tzinfo=TZ) -> datetime:
    """Start of a calendar day. Pass tzinfo=None for a naive datetime."""
    return datetime(day.year, day.month, day.day, tzinfo=tzinfo)

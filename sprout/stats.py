"""Aggregation — per-habit totals over a trailing week, month or year.

Pure functions: nothing here mutates the habits passed in.
"""

import calendar
from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP

from sprout import clock
from sprout.models import Habit, HabitStats, Period

PERIOD_TITLES = {
    Period.WEEK: "Weekly Report (Last 7 Days)",
    Period.MONTH: "Monthly Report (Last 30 Days)",
    Period.YEAR: "Yearly Report (Last 365 Days)",
}


def _shift_months(moment: datetime, months: int) -> datetime:
    """Calendar-month arithmetic; the day is clamped to the target month's end."""
    index = moment.year * 12 + (moment.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def period_cutoff(period: Period, now: datetime) -> datetime:
    """Earliest instant included in the window ending at `now`."""
    period = Period(period)
    if period is Period.WEEK:
        return now - timedelta(days=7)
    if period is Period.MONTH:
        return _shift_months(now, -1)
    if period is Period.YEAR:
        return _shift_months(now, -12)
    raise ValueError(f"Unknown period: {period!r}")


def round_half_up(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _in_window(log_date: str, cutoff: datetime) -> bool:
    # Log dates count from local midnight of their day.
    start = clock.local_midnight(date.fromisoformat(log_date), cutoff.tzinfo)
    return start >= cutoff


def compute_stats(habits: list[Habit], period: Period,
                  now: datetime | None = None) -> list[HabitStats]:
    """Totals per habit, in habit order.

    avg_minutes_per_day rounds half up (2.5 -> 3) and is 0 when nothing was
    logged in the window.
    """
    now = now or clock.now()
    cutoff = period_cutoff(period, now)

    stats = []
    for habit in habits:
        window = [l for l in habit.logs if _in_window(l.date, cutoff)]
        total_minutes = sum(l.minutes for l in window)
        total_days = len(window)
        stats.append(HabitStats(
            name=habit.name,
            total_minutes=total_minutes,
            total_days=total_days,
            avg_minutes_per_day=(
                round_half_up(total_minutes / total_days) if total_days else 0
            ),
        ))
    return stats

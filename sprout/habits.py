"""Habit log — the habit collection and its per-day minute logs.

Habits are kept sorted by importance (highest first). Logging is
append-or-increment: one entry per calendar day, minutes only ever grow.
Unknown ids and blank names are ignored rather than reported.
"""

import logging
from typing import Callable
from datetime import datetime

from sprout import clock
from sprout.models import Habit, LogEntry, new_id

log = logging.getLogger(__name__)

# Increments offered by the tracker view
QUICK_LOG_MINUTES = (15, 30, 60)

MIN_IMPORTANCE = 1
MAX_IMPORTANCE = 10


class HabitLog:

    def __init__(self, habits: list[Habit] | None = None,
                 clock_fn: Callable[[], datetime] | None = None):
        self.habits: list[Habit] = list(habits or [])
        self._now = clock_fn or clock.now

    def _today(self) -> str:
        return clock.local_date(self._now()).isoformat()

    def get(self, habit_id: str) -> Habit | None:
        for habit in self.habits:
            if habit.id == habit_id:
                return habit
        return None

    def add_habit(self, name: str, importance: int = 5) -> Habit | None:
        """Create a habit and re-sort the collection by importance.

        sorted() is stable, so habits of equal importance stay in the order
        they were added.
        """
        if not name or not name.strip():
            return None

        importance = max(MIN_IMPORTANCE, min(MAX_IMPORTANCE, int(importance)))
        habit = Habit(id=new_id(), name=name, importance=importance)
        self.habits = sorted(
            self.habits + [habit], key=lambda h: h.importance, reverse=True,
        )
        log.info("Habit added: %s (importance=%d)", habit.id, importance)
        return habit

    def log_time(self, habit_id: str, minutes: int) -> LogEntry | None:
        """Add minutes to today's entry for a habit, creating it if needed."""
        habit = self.get(habit_id)
        if habit is None or minutes < 0:
            return None

        today = self._today()
        entry = habit.log_for(today)
        if entry is not None:
            entry.minutes += minutes
        else:
            entry = LogEntry(date=today, minutes=minutes)
            habit.logs.append(entry)
        log.debug("Logged %d min on %s for %s", minutes, today, habit_id)
        return entry

    def delete_habit(self, habit_id: str) -> bool:
        """Remove a habit and all its logs. Returns False if it wasn't there."""
        remaining = [h for h in self.habits if h.id != habit_id]
        if len(remaining) == len(self.habits):
            return False
        self.habits = remaining
        log.info("Habit deleted: %s", habit_id)
        return True

    def today_minutes(self, habit: Habit) -> int:
        entry = habit.log_for(self._today())
        return entry.minutes if entry else 0

    @staticmethod
    def recent_logs(habit: Habit, limit: int = 10) -> list[LogEntry]:
        """Newest-first copy of a habit's logs. The stored order is untouched."""
        return sorted(habit.logs, key=lambda l: l.date, reverse=True)[:limit]

    def to_list(self) -> list[dict]:
        return [h.to_dict() for h in self.habits]

    @classmethod
    def from_list(cls, data: list[dict] | None,
                  clock_fn: Callable[[], datetime] | None = None) -> "HabitLog":
        return cls([Habit.from_dict(d) for d in data or []], clock_fn=clock_fn)

"""Tests for the habit log — ordering, append-or-increment, deletion."""

from datetime import datetime, timedelta

import pytest

from sprout.clock import TZ
from sprout.habits import HabitLog
from sprout.models import Habit, LogEntry


class _Clock:
    """Settable clock for moving between days."""
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return _Clock(datetime(2024, 6, 15, 9, 30, tzinfo=TZ))


@pytest.fixture
def log(clock):
    return HabitLog(clock_fn=clock)


class TestAddHabit:
    def test_sorted_by_importance(self, log):
        log.add_habit("Read", 3)
        log.add_habit("Run", 8)
        assert [h.name for h in log.habits] == ["Run", "Read"]

    def test_ties_keep_insertion_order(self, log):
        log.add_habit("A", 5)
        log.add_habit("B", 7)
        log.add_habit("C", 5)
        log.add_habit("D", 7)
        log.add_habit("E", 5)
        assert [h.name for h in log.habits] == ["B", "D", "A", "C", "E"]

    def test_new_habit_has_empty_logs_and_unique_id(self, log):
        a = log.add_habit("Meditate", 4)
        b = log.add_habit("Meditate", 4)
        assert a.logs == []
        assert a.id != b.id

    def test_blank_name_is_ignored(self, log):
        assert log.add_habit("", 5) is None
        assert log.add_habit("   ", 5) is None
        assert log.habits == []

    def test_importance_clamped(self, log):
        assert log.add_habit("Too high", 42).importance == 10
        assert log.add_habit("Too low", 0).importance == 1


class TestLogTime:
    def test_same_day_increments(self, log):
        h = log.add_habit("Read", 3)
        log.log_time(h.id, 15)
        log.log_time(h.id, 30)
        assert h.logs == [LogEntry(date="2024-06-15", minutes=45)]

    def test_different_days_append(self, log, clock):
        h = log.add_habit("Read", 3)
        log.log_time(h.id, 15)
        clock.now += timedelta(days=1)
        log.log_time(h.id, 60)
        assert [(l.date, l.minutes) for l in h.logs] == [
            ("2024-06-15", 15), ("2024-06-16", 60),
        ]

    def test_negative_minutes_ignored(self, log):
        h = log.add_habit("Read", 3)
        log.log_time(h.id, 30)
        assert log.log_time(h.id, -50) is None
        assert h.logs == [LogEntry(date="2024-06-15", minutes=30)]

    def test_negative_minutes_never_create_entry(self, log):
        h = log.add_habit("Read", 3)
        assert log.log_time(h.id, -5) is None
        assert h.logs == []

    def test_unknown_id_is_ignored(self, log):
        h = log.add_habit("Read", 3)
        assert log.log_time("nope", 15) is None
        assert h.logs == []

    def test_today_minutes(self, log, clock):
        h = log.add_habit("Read", 3)
        assert log.today_minutes(h) == 0
        log.log_time(h.id, 30)
        assert log.today_minutes(h) == 30
        clock.now += timedelta(days=1)
        assert log.today_minutes(h) == 0


class TestDeleteHabit:
    def test_delete(self, log):
        h = log.add_habit("Read", 3)
        log.log_time(h.id, 15)
        assert log.delete_habit(h.id) is True
        assert log.habits == []

    def test_idempotent(self, log):
        h = log.add_habit("Read", 3)
        keep = log.add_habit("Run", 8)
        log.delete_habit(h.id)
        assert log.delete_habit(h.id) is False
        assert log.habits == [keep]


class TestHistoryAndSerialization:
    def test_recent_logs_newest_first(self):
        h = Habit(id="h1", name="Read", logs=[
            LogEntry("2024-06-10", 5),
            LogEntry("2024-06-12", 10),
            LogEntry("2024-06-11", 20),
        ])
        recent = HabitLog.recent_logs(h, limit=2)
        assert [l.date for l in recent] == ["2024-06-12", "2024-06-11"]
        # Stored order untouched
        assert h.logs[0].date == "2024-06-10"

    def test_round_trip_shape(self, log):
        h = log.add_habit("Read", 3)
        log.log_time(h.id, 15)
        data = log.to_list()
        assert data == [{
            "id": h.id, "name": "Read", "importance": 3,
            "logs": [{"date": "2024-06-15", "minutes": 15}],
        }]
        restored = HabitLog.from_list(data)
        assert restored.habits == log.habits

    def test_from_list_tolerates_none(self):
        assert HabitLog.from_list(None).habits == []

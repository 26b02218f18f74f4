"""Domain types — habits, log entries, gratitude entries, stats, views.

Every persisted type round-trips through plain dicts with the same JSON
shape the stored collections use:

    Habit:          {"id", "name", "importance", "logs": [{"date", "minutes"}]}
    GratitudeEntry: {"id", "date", "prompt", "entry"}
"""

import uuid
from dataclasses import dataclass, field, asdict
from enum import Enum


def new_id() -> str:
    """Opaque unique identifier for habits and gratitude entries."""
    return uuid.uuid4().hex


@dataclass
class LogEntry:
    """Minutes spent on a habit during one calendar day."""
    date: str       # YYYY-MM-DD
    minutes: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "LogEntry":
        return cls(date=str(data["date"]), minutes=int(data.get("minutes", 0)))


@dataclass
class Habit:
    id: str
    name: str
    importance: int = 5
    logs: list[LogEntry] = field(default_factory=list)

    def log_for(self, day: str) -> LogEntry | None:
        for entry in self.logs:
            if entry.date == day:
                return entry
        return None

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Habit":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            importance=int(data.get("importance", 5)),
            logs=[LogEntry.from_dict(l) for l in data.get("logs") or []],
        )


@dataclass(frozen=True)
class GratitudeEntry:
    """A dated reflection. Immutable once written."""
    id: str
    date: str       # full ISO timestamp
    prompt: str
    entry: str

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "GratitudeEntry":
        return cls(
            id=str(data["id"]),
            date=data["date"],
            prompt=data.get("prompt", ""),
            entry=data["entry"],
        )


@dataclass(frozen=True)
class HabitStats:
    name: str
    total_minutes: int = 0
    total_days: int = 0
    avg_minutes_per_day: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


class Period(str, Enum):
    """Trailing aggregation window."""
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class View(str, Enum):
    """Screens the controller can render."""
    TRACKER = "tracker"
    GRATITUDE = "gratitude"
    REPORTS = "reports"
    HISTORY = "history"

"""Persistence adapter — a key-value store of JSON blobs.

The application snapshots whole collections under a handful of keys after
every mutation. Two backends:

- SQLiteStore: durable, one `kv` table, created automatically on first use.
- MemoryStore: dict-backed, for tests and throwaway sessions.

Missing keys read as None; callers pick their own default.
"""

import json
import sqlite3
import logging
from abc import ABC, abstractmethod
from contextlib import closing
from datetime import datetime
from pathlib import Path
from typing import Any

from sprout.clock import TZ

log = logging.getLogger(__name__)

# Storage keys
HABITS_KEY = "habits"
GRATITUDE_KEY = "gratitude"
PREMIUM_KEY = "premium"
LAST_PROMPT_DATE_KEY = "lastPromptDate"
TODAY_PROMPT_KEY = "todayPrompt"


class KeyValueStore(ABC):
    """get/set of JSON-serializable values under string keys."""

    @abstractmethod
    def get(self, key: str) -> Any | None:
        ...

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        ...


class MemoryStore(KeyValueStore):
    """In-memory store. Values are kept as JSON text, like the durable one."""

    def __init__(self, initial: dict | None = None):
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str) -> Any | None:
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)


class SQLiteStore(KeyValueStore):
    """SQLite-backed store, one row per key."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        """Return a connection with row_factory set."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self.path))
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _init_db(self) -> None:
        """Create the table if it doesn't exist."""
        with closing(self._connect()) as conn:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS kv (
                    key        TEXT PRIMARY KEY,
                    value      TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
            """)
            conn.commit()
        log.debug("Store ready at %s", self.path)

    def get(self, key: str) -> Any | None:
        with closing(self._connect()) as conn:
            row = conn.execute(
                "SELECT value FROM kv WHERE key = ?", (key,),
            ).fetchone()
        return json.loads(row["value"]) if row else None

    def set(self, key: str, value: Any) -> None:
        now = datetime.now(TZ).isoformat()
        with closing(self._connect()) as conn:
            conn.execute(
                """INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?)
                   ON CONFLICT(key) DO UPDATE SET value = excluded.value,
                                                  updated_at = excluded.updated_at""",
                (key, json.dumps(value), now),
            )
            conn.commit()

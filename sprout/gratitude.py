"""Gratitude journal — dated reflections answering a daily prompt.

One prompt is drawn per calendar day and reused for the rest of that day.
Entries are prepended, so the journal reads most-recent-first.
"""

import logging
import random
from datetime import datetime
from typing import Callable

from sprout import clock
from sprout.models import GratitudeEntry, new_id

log = logging.getLogger(__name__)

GRATITUDE_PROMPTS = (
    "Write one thing you're grateful for today",
    "What made you smile today?",
    "Who said something that brightened your day?",
    "What small moment brought you joy?",
    "What's something positive that happened today?",
    "Who are you thankful for and why?",
    "What accomplishment are you proud of today?",
    "What beauty did you notice today?",
    "What challenge helped you grow?",
    "What comfort or pleasure did you enjoy today?",
)


class GratitudeJournal:

    def __init__(self, entries: list[GratitudeEntry] | None = None,
                 prompt_date: str | None = None, prompt_text: str | None = None,
                 clock_fn: Callable[[], datetime] | None = None,
                 rng: random.Random | None = None):
        self.entries: list[GratitudeEntry] = list(entries or [])
        self.prompt_date = prompt_date
        self.prompt_text = prompt_text
        self.pending = False
        self._now = clock_fn or clock.now
        self._rng = rng or random.Random()

    def _today(self) -> str:
        return clock.local_date(self._now()).isoformat()

    def answered_today(self) -> bool:
        today = self._today()
        return any(
            clock.local_date(datetime.fromisoformat(e.date)).isoformat() == today
            for e in self.entries
        )

    def prompt_is_current(self) -> bool:
        """Whether a prompt has already been drawn for today."""
        return self.prompt_date == self._today() and bool(self.prompt_text)

    def prompt_for_today(self) -> str:
        """Today's prompt, drawing a new one on the first call of the day."""
        today = self._today()
        if self.prompt_date != today or not self.prompt_text:
            self.prompt_text = self._rng.choice(GRATITUDE_PROMPTS)
            self.prompt_date = today
            self.pending = True
            log.info("New gratitude prompt for %s", today)
        else:
            self.pending = not self.answered_today()
        return self.prompt_text

    def submit_entry(self, prompt_text: str, body_text: str) -> GratitudeEntry | None:
        if not body_text or not body_text.strip():
            return None

        entry = GratitudeEntry(
            id=new_id(),
            date=self._now().isoformat(),
            prompt=prompt_text,
            entry=body_text,
        )
        self.entries.insert(0, entry)
        self.pending = False
        return entry

    def skip_prompt(self) -> None:
        """Hide today's prompt for now without writing an entry."""
        self.pending = False

    def list_recent(self, n: int) -> list[GratitudeEntry]:
        return self.entries[:max(n, 0)]

    def to_list(self) -> list[dict]:
        return [e.to_dict() for e in self.entries]

"""App controller — owns application state, dispatches actions, renders views.

Flow for every action:
  action → mutate HabitLog / GratitudeJournal → snapshot the mutated
  collection to the store → caller re-renders.

The store is injected, so tests run against MemoryStore.
"""

import asyncio
import logging
import random
from datetime import datetime
from typing import Awaitable, Callable

from sprout import clock
from sprout.gratitude import GratitudeJournal
from sprout.habits import HabitLog, QUICK_LOG_MINUTES
from sprout.models import GratitudeEntry, Habit, HabitStats, LogEntry, Period, View
from sprout.stats import PERIOD_TITLES, compute_stats
from sprout.storage import (
    KeyValueStore,
    HABITS_KEY, GRATITUDE_KEY, PREMIUM_KEY,
    LAST_PROMPT_DATE_KEY, TODAY_PROMPT_KEY,
)
from sprout.summary import evaluate_habits

log = logging.getLogger(__name__)

PREMIUM_REQUIRED_MESSAGE = (
    "AI Evaluations are a premium feature. Upgrade to Premium to unlock!"
)
EVALUATION_FAILED_MESSAGE = "Failed to generate evaluation. Please try again."

GRATITUDE_VIEW_LIMIT = 20
HISTORY_LOG_LIMIT = 10
HISTORY_GRATITUDE_LIMIT = 30

Evaluator = Callable[[list[Habit]], Awaitable[str]]


async def _default_evaluator(habits: list[Habit]) -> str:
    # The completion SDKs are blocking; keep the event loop free.
    return await asyncio.to_thread(evaluate_habits, habits)


class AppController:

    def __init__(self, store: KeyValueStore,
                 clock_fn: Callable[[], datetime] | None = None,
                 rng: random.Random | None = None,
                 evaluator: Evaluator | None = None):
        self.store = store
        self._now = clock_fn or clock.now
        self._evaluate = evaluator or _default_evaluator
        self.view = View.TRACKER
        self.last_evaluation = ""

        self.habits = HabitLog.from_list(store.get(HABITS_KEY), clock_fn=self._now)
        self.journal = GratitudeJournal(
            entries=[GratitudeEntry.from_dict(d) for d in store.get(GRATITUDE_KEY) or []],
            prompt_date=store.get(LAST_PROMPT_DATE_KEY),
            prompt_text=store.get(TODAY_PROMPT_KEY),
            clock_fn=self._now,
            rng=rng,
        )
        self.is_premium = bool(store.get(PREMIUM_KEY) or False)

        self.today_prompt = self.journal.prompt_for_today()
        self._save_prompt()
        log.info(
            "State loaded: %d habits, %d gratitude entries, premium=%s",
            len(self.habits.habits), len(self.journal.entries), self.is_premium,
        )

    # ── persistence ──

    def _save_habits(self) -> None:
        self.store.set(HABITS_KEY, self.habits.to_list())

    def _save_gratitude(self) -> None:
        self.store.set(GRATITUDE_KEY, self.journal.to_list())

    def _save_prompt(self) -> None:
        self.store.set(LAST_PROMPT_DATE_KEY, self.journal.prompt_date)
        self.store.set(TODAY_PROMPT_KEY, self.today_prompt)

    def refresh_prompt(self) -> str:
        """Today's prompt; draws and stores a new one once the date has moved on.

        Same-day calls leave the pending flag alone, so a skipped prompt
        stays hidden until tomorrow.
        """
        if not self.journal.prompt_is_current():
            self.today_prompt = self.journal.prompt_for_today()
            self._save_prompt()
        return self.today_prompt

    # ── actions ──

    def switch_view(self, view: View | str) -> View:
        self.view = View(view)
        return self.view

    def add_habit(self, name: str, importance: int = 5) -> Habit | None:
        habit = self.habits.add_habit(name, importance)
        if habit is not None:
            self._save_habits()
        return habit

    def log_time(self, habit_id: str, minutes: int) -> LogEntry | None:
        entry = self.habits.log_time(habit_id, minutes)
        if entry is not None:
            self._save_habits()
        return entry

    def delete_habit(self, habit_id: str) -> bool:
        deleted = self.habits.delete_habit(habit_id)
        if deleted:
            self._save_habits()
        return deleted

    def submit_gratitude(self, text: str) -> GratitudeEntry | None:
        entry = self.journal.submit_entry(self.refresh_prompt(), text)
        if entry is not None:
            self._save_gratitude()
        return entry

    def skip_gratitude(self) -> None:
        self.journal.skip_prompt()

    def toggle_premium(self) -> bool:
        self.is_premium = not self.is_premium
        self.store.set(PREMIUM_KEY, self.is_premium)
        log.info("Premium %s", "enabled" if self.is_premium else "disabled")
        return self.is_premium

    async def request_evaluation(self) -> str:
        """AI coaching note for the current habits, gated on premium."""
        if not self.is_premium:
            return PREMIUM_REQUIRED_MESSAGE

        try:
            self.last_evaluation = await self._evaluate(list(self.habits.habits))
        except Exception as e:
            log.error("Evaluation request failed: %s", e, exc_info=True)
            self.last_evaluation = EVALUATION_FAILED_MESSAGE
        return self.last_evaluation

    def stats(self, period: Period | str) -> list[HabitStats]:
        return compute_stats(self.habits.habits, Period(period), now=self._now())

    # ── rendering ──

    def render(self, view: View | str | None = None) -> str:
        view = View(view) if view is not None else self.view
        if view is View.TRACKER:
            return self._render_tracker()
        if view is View.GRATITUDE:
            return self._render_gratitude()
        if view is View.REPORTS:
            return self._render_reports()
        if view is View.HISTORY:
            return self._render_history()
        raise ValueError(f"Unhandled view: {view!r}")

    def _render_tracker(self) -> str:
        lines = []
        self.refresh_prompt()
        if self.journal.pending:
            lines += ["✨ Daily Reflection", self.today_prompt, ""]

        lines.append("Today's Habits")
        if not self.habits.habits:
            lines.append("No habits yet. Add your first habit to get started!")
        quick = " / ".join(f"+{m} min" for m in QUICK_LOG_MINUTES)
        for h in self.habits.habits:
            lines.append(f"- {h.name} (Priority: {h.importance}/10)")
            lines.append(f"  Today: {self.habits.today_minutes(h)} minutes  [{quick}]")

        if self.is_premium and self.last_evaluation:
            lines += ["", "AI Insights & Recommendations", self.last_evaluation]
        return "\n".join(lines)

    @staticmethod
    def _render_entry(entry: GratitudeEntry, long_date: bool) -> list[str]:
        moment = datetime.fromisoformat(entry.date)
        day = clock.local_date(moment)
        stamp = day.strftime("%A, %B %d, %Y") if long_date else day.isoformat()
        return [stamp, f"  {entry.prompt}", f"  {entry.entry}"]

    def _render_gratitude(self) -> str:
        lines = ["🙏 Gratitude Journal"]
        entries = self.journal.list_recent(GRATITUDE_VIEW_LIMIT)
        if not entries:
            lines.append("No gratitude entries yet. Complete your daily prompt to get started!")
        for entry in entries:
            lines += self._render_entry(entry, long_date=True)
        return "\n".join(lines)

    def _render_reports(self) -> str:
        lines = ["📈 Progress Reports"]
        for period in Period:
            lines += ["", PERIOD_TITLES[period]]
            for s in self.stats(period):
                lines.append(
                    f"- {s.name}: {s.total_minutes} min, "
                    f"{s.total_days} days • {s.avg_minutes_per_day} min/day"
                )
        return "\n".join(lines)

    def _render_history(self) -> str:
        lines = ["📜 Complete History", "", "Habit Logs"]
        for h in self.habits.habits:
            lines.append(h.name)
            recent = self.habits.recent_logs(h, HISTORY_LOG_LIMIT)
            if not recent:
                lines.append("  No logs yet")
            for entry in recent:
                lines.append(f"  {entry.date} - {entry.minutes} minutes")

        lines += ["", "Gratitude History"]
        entries = self.journal.list_recent(HISTORY_GRATITUDE_LIMIT)
        if not entries:
            lines.append("No gratitude entries yet")
        for entry in entries:
            lines += self._render_entry(entry, long_date=False)
        return "\n".join(lines)

"""Tests for the gratitude journal and the daily prompt."""

import random
from datetime import datetime, timedelta

import pytest

from sprout.clock import TZ
from sprout.gratitude import GRATITUDE_PROMPTS, GratitudeJournal


class _Clock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return _Clock(datetime(2024, 6, 15, 8, 0, tzinfo=TZ))


@pytest.fixture
def journal(clock):
    return GratitudeJournal(clock_fn=clock, rng=random.Random(7))


class TestDailyPrompt:
    def test_ten_prompts(self):
        assert len(GRATITUDE_PROMPTS) == 10

    def test_first_prompt_of_day_is_pending(self, journal):
        prompt = journal.prompt_for_today()
        assert prompt in GRATITUDE_PROMPTS
        assert journal.pending is True
        assert journal.prompt_date == "2024-06-15"

    def test_same_prompt_within_day(self, journal, clock):
        first = journal.prompt_for_today()
        clock.now += timedelta(hours=10)
        assert journal.prompt_for_today() == first

    def test_restored_prompt_is_reused(self, clock):
        journal = GratitudeJournal(
            prompt_date="2024-06-15", prompt_text="What made you smile today?",
            clock_fn=clock,
        )
        assert journal.prompt_for_today() == "What made you smile today?"
        assert journal.pending is True

    def test_answered_prompt_not_pending(self, journal, clock):
        prompt = journal.prompt_for_today()
        journal.submit_entry(prompt, "Sunny morning walk")
        reloaded = GratitudeJournal(
            entries=journal.entries, prompt_date=journal.prompt_date,
            prompt_text=journal.prompt_text, clock_fn=clock,
        )
        assert reloaded.prompt_for_today() == prompt
        assert reloaded.pending is False

    def test_new_day_draws_again(self, journal, clock):
        journal.prompt_for_today()
        journal.skip_prompt()
        clock.now += timedelta(days=1)
        journal.prompt_for_today()
        assert journal.prompt_date == "2024-06-16"
        assert journal.pending is True


class TestEntries:
    def test_submit_prepends(self, journal):
        e1 = journal.submit_entry("p", "first")
        e2 = journal.submit_entry("p", "second")
        assert journal.list_recent(2) == [e2, e1]

    def test_entry_fields(self, journal):
        entry = journal.submit_entry("What made you smile today?", "My dog")
        assert entry.prompt == "What made you smile today?"
        assert entry.entry == "My dog"
        assert entry.date.startswith("2024-06-15T08:00:00")
        assert entry.id

    def test_blank_body_ignored(self, journal):
        journal.prompt_for_today()
        assert journal.submit_entry("p", "   ") is None
        assert journal.entries == []
        assert journal.pending is True

    def test_submit_clears_pending(self, journal):
        journal.prompt_for_today()
        journal.submit_entry(journal.prompt_text, "Tea")
        assert journal.pending is False
        assert journal.answered_today() is True

    def test_list_recent_limits(self, journal):
        for i in range(5):
            journal.submit_entry("p", f"entry {i}")
        assert [e.entry for e in journal.list_recent(3)] == ["entry 4", "entry 3", "entry 2"]
        assert journal.list_recent(0) == []


class TestPromptIsCurrent:
    def test_tracks_date(self, journal, clock):
        assert journal.prompt_is_current() is False
        journal.prompt_for_today()
        assert journal.prompt_is_current() is True
        clock.now += timedelta(days=1)
        assert journal.prompt_is_current() is False

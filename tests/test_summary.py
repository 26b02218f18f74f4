"""Tests for the AI summary proxy — prompt building and failure handling.

No real API calls: the completion client is always a mock.
"""

from unittest.mock import MagicMock, patch

import pytest

import sprout.config as config
from sprout.llm import LLMResponse
from sprout.models import Habit, LogEntry
from sprout.summary import (
    EMPTY_RESPONSE_MESSAGE,
    FALLBACK_MESSAGE,
    NO_API_KEY_MESSAGE,
    EvaluateRequest,
    build_prompt,
    evaluate_habits,
    summarize_habits,
)


def _habits():
    return [
        Habit(id="1", name="Run", importance=8, logs=[
            LogEntry(f"2024-06-{d:02d}", 10) for d in range(1, 10)
        ]),
        Habit(id="2", name="Read", importance=3),
    ]


@pytest.fixture
def with_key(monkeypatch):
    monkeypatch.setattr(config, "SUMMARY_API_KEY", "")
    monkeypatch.setattr(config, "ANTHROPIC_API_KEY", "sk-test")


@pytest.fixture
def without_key(monkeypatch):
    monkeypatch.setattr(config, "SUMMARY_API_KEY", "")
    monkeypatch.setattr(config, "ANTHROPIC_API_KEY", "")


class TestSummarize:
    def test_uses_last_seven_entries(self):
        lines = summarize_habits(_habits()).split("\n")
        assert lines[0] == (
            "- Run (Priority: 8/10): 7 days logged in the past week, 70 total minutes"
        )
        assert lines[1] == (
            "- Read (Priority: 3/10): 0 days logged in the past week, 0 total minutes"
        )

    def test_prompt_embeds_summary(self):
        prompt = build_prompt(_habits())
        assert "habit coach" in prompt
        assert "under 150 words" in prompt
        assert "- Run (Priority: 8/10)" in prompt
        assert "{habit_summary}" not in prompt

    def test_accepts_request_payload(self):
        req = EvaluateRequest.model_validate({"habits": [
            {"name": "Yoga", "importance": 6, "logs": [{"date": "2024-06-15", "minutes": 20}]},
        ]})
        assert summarize_habits(req.habits) == (
            "- Yoga (Priority: 6/10): 1 days logged in the past week, 20 total minutes"
        )


class TestEvaluate:
    def test_no_key_skips_network(self, without_key):
        with patch("sprout.summary.get_client") as get_client:
            assert evaluate_habits(_habits()) == NO_API_KEY_MESSAGE
            get_client.assert_not_called()

    def test_success_returns_text(self, with_key):
        client = MagicMock()
        client.complete.return_value = LLMResponse(content="Nice streak!", model="m")
        assert evaluate_habits(_habits(), client=client) == "Nice streak!"
        messages = client.complete.call_args.args[0]
        assert messages[0]["role"] == "user"
        assert "- Run (Priority: 8/10)" in messages[0]["content"]

    def test_empty_response(self, with_key):
        client = MagicMock()
        client.complete.return_value = LLMResponse(content="")
        assert evaluate_habits(_habits(), client=client) == EMPTY_RESPONSE_MESSAGE

    def test_call_failure_falls_back(self, with_key):
        client = MagicMock()
        client.complete.side_effect = RuntimeError("quota exceeded")
        assert evaluate_habits(_habits(), client=client) == FALLBACK_MESSAGE

    def test_client_construction_failure_falls_back(self, with_key):
        with patch("sprout.summary.get_client", side_effect=ValueError("bad provider")):
            assert evaluate_habits(_habits()) == FALLBACK_MESSAGE

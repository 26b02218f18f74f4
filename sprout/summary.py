"""AI summary — turns a habit snapshot into a short coaching note.

Stateless: takes habits in, returns text out. Never raises to the caller;
a missing API key and a failed completion each map to a fixed message.
"""

import logging

from pydantic import BaseModel, Field

from sprout import config
from sprout.llm import LLMProvider, get_client
from sprout.prompt_loader import get_prompt

log = logging.getLogger(__name__)

NO_API_KEY_MESSAGE = (
    "AI evaluation requires an API key. "
    "Please configure ANTHROPIC_API_KEY environment variable."
)
FALLBACK_MESSAGE = (
    "Great work tracking your habits! Keep up the consistency and focus on "
    "your highest priority habits. Small daily actions lead to big results "
    "over time."
)
EMPTY_RESPONSE_MESSAGE = "Unable to generate evaluation"

# How many of the most recently appended log entries count as "the past week"
RECENT_LOG_COUNT = 7


class LogPayload(BaseModel):
    date: str
    minutes: int = Field(ge=0)


class HabitPayload(BaseModel):
    id: str | None = None
    name: str
    importance: int = 5
    logs: list[LogPayload] = Field(default_factory=list)


class EvaluateRequest(BaseModel):
    habits: list[HabitPayload] = Field(default_factory=list)


class EvaluateResponse(BaseModel):
    evaluation: str


def summarize_habits(habits) -> str:
    """One line per habit over its last appended log entries.

    Takes the tail of the logs list as-is, so sparse or backfilled logging
    can reach further back than seven calendar days.
    """
    lines = []
    for h in habits:
        recent = h.logs[-RECENT_LOG_COUNT:]
        total_minutes = sum(l.minutes for l in recent)
        lines.append(
            f"- {h.name} (Priority: {h.importance}/10): {len(recent)} days "
            f"logged in the past week, {total_minutes} total minutes"
        )
    return "\n".join(lines)


def build_prompt(habits) -> str:
    template = get_prompt("habit_coach")
    return template.replace("{habit_summary}", summarize_habits(habits))


def evaluate_habits(habits, client: LLMProvider | None = None) -> str:
    """Ask the completion service for a coaching note on these habits."""
    if not config.summary_api_key():
        log.info("AI summary skipped: no API key configured")
        return NO_API_KEY_MESSAGE

    try:
        client = client or get_client()
        response = client.complete(
            [{"role": "user", "content": build_prompt(habits)}],
            max_tokens=config.SUMMARY_MAX_TOKENS,
        )
        log.info(
            "AI summary: model=%s tokens=%d/%d",
            response.model, response.prompt_tokens, response.completion_tokens,
        )
    except Exception as e:
        log.error("AI evaluation error: %s", e, exc_info=True)
        return FALLBACK_MESSAGE

    return response.content or EMPTY_RESPONSE_MESSAGE

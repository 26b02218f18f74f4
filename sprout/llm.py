"""LLM provider abstraction — provider-agnostic text completion.

Supports Anthropic (default) and any OpenAI-compatible API.

Usage:
    from sprout.llm import get_client
    client = get_client()
    response = client.complete([{"role": "user", "content": "..."}])
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from sprout import config

log = logging.getLogger(__name__)


@dataclass
class LLMResponse:
    """Unified response from any LLM provider."""
    content: str = ""
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    model: str = ""
    finish_reason: str = ""


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    @abstractmethod
    def complete(self, messages: list[dict], temperature: float = 0.7,
                 max_tokens: int = 1024) -> LLMResponse:
        """Send a completion request."""
        ...

    @abstractmethod
    def provider_name(self) -> str:
        ...


class OpenAIProvider(LLMProvider):
    """OpenAI-compatible API provider (works with OpenAI, DeepSeek, Ollama, Groq, etc.)."""

    def __init__(self, api_key: str, model: str, base_url: str = ""):
        from openai import OpenAI
        self._model = model
        kwargs: dict = {"api_key": api_key}
        if base_url:
            kwargs["base_url"] = base_url
        self._client = OpenAI(**kwargs)

    def provider_name(self) -> str:
        return "openai"

    def complete(self, messages: list[dict], temperature: float = 0.7,
                 max_tokens: int = 1024) -> LLMResponse:
        resp = self._client.chat.completions.create(
            model=self._model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        choice = resp.choices[0]
        return LLMResponse(
            content=choice.message.content or "",
            prompt_tokens=resp.usage.prompt_tokens if resp.usage else 0,
            completion_tokens=resp.usage.completion_tokens if resp.usage else 0,
            total_tokens=resp.usage.total_tokens if resp.usage else 0,
            model=self._model,
            finish_reason=choice.finish_reason or "",
        )


class AnthropicProvider(LLMProvider):
    """Anthropic Claude API provider."""

    def __init__(self, api_key: str, model: str, base_url: str = ""):
        import anthropic
        self._model = model
        kwargs: dict = {"api_key": api_key}
        if base_url:
            kwargs["base_url"] = base_url
        self._client = anthropic.Anthropic(**kwargs)

    def provider_name(self) -> str:
        return "anthropic"

    def complete(self, messages: list[dict], temperature: float = 0.7,
                 max_tokens: int = 1024) -> LLMResponse:
        # System messages go in a separate field
        system_msg = ""
        conversation = []
        for m in messages:
            if m["role"] == "system":
                system_msg += m["content"] + "\n"
            else:
                conversation.append(m)

        kwargs = dict(
            model=self._model,
            messages=conversation,
            max_tokens=max_tokens,
            temperature=temperature,
        )
        if system_msg:
            kwargs["system"] = system_msg.strip()

        resp = self._client.messages.create(**kwargs)

        content = "".join(
            block.text for block in resp.content if block.type == "text"
        )
        return LLMResponse(
            content=content,
            prompt_tokens=resp.usage.input_tokens if resp.usage else 0,
            completion_tokens=resp.usage.output_tokens if resp.usage else 0,
            total_tokens=(resp.usage.input_tokens + resp.usage.output_tokens) if resp.usage else 0,
            model=self._model,
            finish_reason=resp.stop_reason or "",
        )


# ═══════════════════════════════════════════════════════════════════════════
# Factory
# ═══════════════════════════════════════════════════════════════════════════

_cached_client: LLMProvider | None = None


def _make_client(provider: str, api_key: str, model: str, base_url: str) -> LLMProvider:
    """Instantiate a fresh LLM provider."""
    if not model:
        raise ValueError(
            "SUMMARY_MODEL is required but not set. "
            "Please set it in your .env file."
        )
    if provider == "anthropic":
        return AnthropicProvider(api_key=api_key, model=model, base_url=base_url)
    elif provider == "openai":
        return OpenAIProvider(api_key=api_key, model=model, base_url=base_url)
    else:
        raise ValueError(
            f"Unknown provider: {provider!r}. "
            "Supported: anthropic, openai (+ any compatible API)"
        )


def get_client() -> LLMProvider:
    """Get (or create) the completion client configured for summaries."""
    global _cached_client
    if _cached_client is not None:
        return _cached_client

    client = _make_client(
        config.SUMMARY_PROVIDER, config.summary_api_key(),
        config.SUMMARY_MODEL, config.SUMMARY_BASE_URL,
    )
    log.info("LLM: provider=%s model=%s", config.SUMMARY_PROVIDER, config.SUMMARY_MODEL)
    _cached_client = client
    return client


def reset_client() -> None:
    """Drop the cached client (after config changes, and in tests)."""
    global _cached_client
    _cached_client = None

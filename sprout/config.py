"""Configuration — loads environment variables with sensible defaults.

All tunables live here. Override via .env file or environment variables.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env from project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

def _env(key: str, default: str = "") -> str:
    return os.getenv(key, default)

def _env_int(key: str, default: int) -> int:
    return int(os.getenv(key, str(default)))


# ═══════════════════════════════════════════════════════════════════════════
# AI Summary completion service (optional)
# ═══════════════════════════════════════════════════════════════════════════
# SUMMARY_PROVIDER tells the summary proxy which SDK to use:
#   "anthropic" — Anthropic SDK (default)
#   "openai"    — OpenAI SDK (also works with DeepSeek, Ollama, Groq, etc.)
#
# A missing key is a valid state: the AI summary answers with an
# informational message instead of calling out.

SUMMARY_PROVIDER = _env("SUMMARY_PROVIDER", "anthropic")
ANTHROPIC_API_KEY = _env("ANTHROPIC_API_KEY")
SUMMARY_API_KEY = _env("SUMMARY_API_KEY")      # overrides ANTHROPIC_API_KEY
SUMMARY_MODEL = _env("SUMMARY_MODEL", "claude-3-5-sonnet-20241022")
SUMMARY_BASE_URL = _env("SUMMARY_BASE_URL")    # optional custom endpoint
SUMMARY_MAX_TOKENS = _env_int("SUMMARY_MAX_TOKENS", 1024)


def summary_api_key() -> str:
    """The key used for the completion service, or "" when not configured."""
    return SUMMARY_API_KEY or ANTHROPIC_API_KEY

# ═══════════════════════════════════════════════════════════════════════════
# Storage
# ═══════════════════════════════════════════════════════════════════════════

DB_PATH = Path(_env("SPROUT_DB_PATH", str(_PROJECT_ROOT / "data" / "sprout.db")))

# ═══════════════════════════════════════════════════════════════════════════
# HTTP
# ═══════════════════════════════════════════════════════════════════════════

HOST = _env("SPROUT_HOST", "127.0.0.1")
PORT = _env_int("SPROUT_PORT", 8000)

# ═══════════════════════════════════════════════════════════════════════════
# Timezone (default UTC, override for your locale in .env)
# ═══════════════════════════════════════════════════════════════════════════
# Defines the "local" calendar day used for habit logs and daily prompts.

TIMEZONE_OFFSET_HOURS = _env_int("TIMEZONE_OFFSET_HOURS", 0)

"""Prompt loader — hot-reload prompt templates from the prompts/ directory.

Edit prompt files directly; changes take effect on the next request.
"""

import logging
from pathlib import Path

log = logging.getLogger(__name__)

_PROMPTS_DIR = Path(__file__).resolve().parent / "prompts"
_last_good: dict[str, str] = {}


def get_prompt(name: str) -> str:
    """Read prompts/<name>.md fresh from disk.

    If the file has gone missing since it was last read, the previous text
    is served so a mid-edit rename doesn't blank the coaching prompt.
    """
    try:
        text = (_PROMPTS_DIR / f"{name}.md").read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        if name not in _last_good:
            log.error("Prompt not found: %s", name)
            return ""
        log.warning("Prompt file %s.md missing, serving last read copy", name)
        return _last_good[name]

    _last_good[name] = text
    return text

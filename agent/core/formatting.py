"""WhatsApp output formatting.

Models drift back to Markdown on long answers (``**bold**``, ``## headers``,
``---`` rules). WhatsApp renders none of those, so every reply passes through
``sanitize`` before it is stored or sent.
"""

from __future__ import annotations

import re


DIVIDER = "━━━━━━"

_DOUBLE_EMPHASIS = re.compile(r"\*\*([^*\n]+)\*\*")
_HEADING = re.compile(r"^#{1,6}\s+", re.MULTILINE)
_DASH_RULE = re.compile(r"^-{3,}$", re.MULTILINE)
_UNDERSCORE_RULE = re.compile(r"^_{3,}$", re.MULTILINE)


def _sanitize_once(text: str) -> str:
    text = _DOUBLE_EMPHASIS.sub(r"*\1*", text)
    text = _HEADING.sub("", text)
    text = _DASH_RULE.sub(DIVIDER, text)
    text = _UNDERSCORE_RULE.sub(DIVIDER, text)
    return text.strip()


def sanitize(text: str) -> str:
    """Convert Markdown-ish model output into WhatsApp markup.

    Passes repeat until nothing changes, so nested input such as ``***x***``
    or ``# # x`` settles and ``sanitize`` is idempotent.
    """
    current = text or ""
    while True:
        cleaned = _sanitize_once(current)
        if cleaned == current:
            return cleaned
        current = cleaned

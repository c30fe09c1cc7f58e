"""Text helpers."""

from __future__ import annotations

from typing import List


def normalize(raw: str) -> str:
    """Trim surrounding whitespace; casing is left to the patterns."""
    return raw.strip()


def split_utterances(text: str) -> List[str]:
    """Split a plain-text dump into one utterance per non-blank line."""
    return [line for line in (normalize(part) for part in text.splitlines()) if line]


def truncate(value: str, max_len: int = 60) -> str:
    """Shorten long utterances for table display."""
    if len(value) <= max_len:
        return value
    return value[: max_len - 3].rstrip() + "..."

"""Data models shared by the classifier, evaluator and commands."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Category(str, Enum):
    """Output category, valued with the external consumer's labels."""

    TASK = "tasks"
    CALENDAR = "calendar"
    NOTE = "notes"

    @classmethod
    def from_label(cls, label: str) -> "Category":
        normalized = label.strip().lower()
        for member in cls:
            if member.value == normalized or member.name.lower() == normalized:
                return member
        raise ValueError(f"Unknown category: {label!r}")


class PatternGroup(str, Enum):
    """Pattern groups, declared in precedence order."""

    INTENT_DESIRE = "intent_desire"
    QUESTION = "question"
    CALENDAR = "calendar"
    OBLIGATION = "obligation"
    ACTION_VERB = "action_verb"
    NOTE_INDICATOR = "note_indicator"

    @property
    def precedence(self) -> int:
        return list(PatternGroup).index(self)

    @property
    def category(self) -> Category:
        """Category this group yields when it decides, before any hedge."""
        if self is PatternGroup.CALENDAR:
            return Category.CALENDAR
        if self in (PatternGroup.OBLIGATION, PatternGroup.ACTION_VERB):
            return Category.TASK
        return Category.NOTE


@dataclass(frozen=True)
class Pattern:
    """A named, compiled rule belonging to one group."""

    id: str
    regex: re.Pattern
    group: PatternGroup

    def search(self, text: str) -> bool:
        return self.regex.search(text) is not None


@dataclass(frozen=True)
class ClassificationResult:
    """Category for one utterance plus the rule that decided it."""

    category: Category
    matched_group: Optional[PatternGroup] = None
    matched_pattern_id: Optional[str] = None
    confidence: float = 0.5
    reasoning: Optional[str] = None

    @property
    def label(self) -> str:
        return self.category.value

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"category": self.category.value}
        if self.matched_group is not None:
            payload["matchedGroup"] = self.matched_group.value
        if self.matched_pattern_id is not None:
            payload["matchedPatternId"] = self.matched_pattern_id
        payload["confidence"] = self.confidence
        if self.reasoning:
            payload["reasoning"] = self.reasoning
        return payload

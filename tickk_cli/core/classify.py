"""Utterance classification into tasks, calendar events and notes."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from tickk_cli.core.constants import GROUP_LABELS, STAGE_CONFIDENCE
from tickk_cli.core.models import Category, ClassificationResult, Pattern, PatternGroup
from tickk_cli.core.patterns import DEFAULT_LIBRARY, PatternLibrary
from tickk_cli.utils.text import normalize

logger = logging.getLogger(__name__)


class InvalidArgumentError(TypeError):
    """Raised when classify is handed something other than a string."""


def _result(
    category: Category,
    stage: str,
    pattern: Optional[Pattern] = None,
    reasoning: Optional[str] = None,
) -> ClassificationResult:
    if reasoning is None and pattern is not None:
        reasoning = f"{GROUP_LABELS[pattern.group.value]} rule '{pattern.id}' matched"
    return ClassificationResult(
        category=category,
        matched_group=pattern.group if pattern else None,
        matched_pattern_id=pattern.id if pattern else None,
        confidence=STAGE_CONFIDENCE[stage],
        reasoning=reasoning,
    )


def _decide(text: str, library: PatternLibrary) -> ClassificationResult:
    if not text:
        return _result(Category.NOTE, "empty", reasoning="empty input defaults to a note")

    # Desire and questions describe the speaker's stance and outrank any
    # time or action vocabulary in the same utterance.
    for group in (PatternGroup.INTENT_DESIRE, PatternGroup.QUESTION):
        pattern = library.first_match(group, text)
        if pattern:
            return _result(Category.NOTE, group.value, pattern)

    pattern = library.first_match(PatternGroup.CALENDAR, text)
    if pattern:
        # Unreachable while intent runs first; kept as an explicit guard.
        if library.has_intent_with_time(text):
            return _result(
                Category.NOTE,
                "intent_with_time",
                library.intent_with_time,
                reasoning="intent phrase with a time word is a note",
            )
        return _result(Category.CALENDAR, "calendar", pattern)

    pattern = library.first_match(PatternGroup.OBLIGATION, text)
    if pattern:
        return _result(Category.TASK, "obligation", pattern)

    pattern = library.first_match(PatternGroup.ACTION_VERB, text)
    if pattern:
        if library.is_hedged(text):
            return _result(
                Category.NOTE,
                "hedged_action",
                pattern,
                reasoning=f"action rule '{pattern.id}' matched but a hedge word softens it",
            )
        return _result(Category.TASK, "action_verb", pattern)

    pattern = library.first_match(PatternGroup.NOTE_INDICATOR, text)
    if pattern:
        return _result(Category.NOTE, "note_indicator", pattern)

    return _result(Category.NOTE, "default", reasoning="no rule matched; defaulting to a note")


def classify(text: str, library: PatternLibrary = DEFAULT_LIBRARY) -> ClassificationResult:
    """Classify one utterance by strict group precedence, first match wins."""
    if not isinstance(text, str):
        raise InvalidArgumentError(f"classify expects a string, got {type(text).__name__}")

    result = _decide(normalize(text), library)
    logger.debug(
        "Classified %r as %s (group=%s, pattern=%s)",
        text,
        result.label,
        result.matched_group.value if result.matched_group else None,
        result.matched_pattern_id,
    )
    return result


def classify_label(text: str, library: PatternLibrary = DEFAULT_LIBRARY) -> str:
    """Return only the lower-case category label."""
    return classify(text, library).label


def classify_many(
    texts: Iterable[str],
    library: PatternLibrary = DEFAULT_LIBRARY,
) -> List[ClassificationResult]:
    return [classify(text, library) for text in texts]


def to_record(
    text: str,
    result: ClassificationResult,
    timestamp: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Build the record shape accepted by the item store."""
    moment = timestamp or datetime.now(timezone.utc)
    return {
        "text": normalize(text),
        "category": result.label,
        "timestamp": moment.isoformat(),
    }

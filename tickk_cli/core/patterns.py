"""Compiled pattern library.

The library is compiled once, at import time, from ``PATTERN_TABLE``. A bad
definition raises :class:`PatternError` during import so a broken ruleset
never reaches a classification call. Compiled patterns are immutable and
shared by every caller.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from tickk_cli.core.constants import (
    HEDGE_PATTERN,
    INTENT_PHRASES,
    INTENT_TIME_WORDS_PATTERN,
    INTENT_WITH_TIME_ID,
    PATTERN_TABLE,
)
from tickk_cli.core.models import Pattern, PatternGroup

logger = logging.getLogger(__name__)

PatternTable = Sequence[Tuple[str, Sequence[Tuple[str, str]]]]

_SENTENCE_BREAK = re.compile(r"[.!?]+")


class PatternError(RuntimeError):
    """Raised when a pattern definition cannot be compiled."""


def _compile(pattern_id: str, source: str) -> re.Pattern:
    try:
        return re.compile(source, re.IGNORECASE)
    except re.error as exc:
        raise PatternError(f"Pattern {pattern_id!r} is not a valid expression: {exc}") from exc


class PatternLibrary:
    """Ordered, read-only collection of pattern groups."""

    def __init__(
        self,
        groups: Dict[PatternGroup, Tuple[Pattern, ...]],
        hedge: re.Pattern,
        intent_with_time: Pattern,
        time_words: re.Pattern,
    ) -> None:
        self._groups = groups
        self._hedge = hedge
        self._time_words = time_words
        self.intent_with_time = intent_with_time

    def groups(self) -> List[PatternGroup]:
        """Groups in precedence order."""
        return sorted(self._groups, key=lambda group: group.precedence)

    def patterns(self, group: Optional[PatternGroup] = None) -> List[Pattern]:
        if group is not None:
            return list(self._groups.get(group, ()))
        return [pattern for item in self.groups() for pattern in self._groups[item]]

    def first_match(self, group: PatternGroup, text: str) -> Optional[Pattern]:
        for pattern in self._groups.get(group, ()):
            if pattern.search(text):
                return pattern
        return None

    def matches(self, group: PatternGroup, text: str) -> List[Pattern]:
        return [pattern for pattern in self._groups.get(group, ()) if pattern.search(text)]

    def is_hedged(self, text: str) -> bool:
        return self._hedge.search(text) is not None

    def has_intent_with_time(self, text: str) -> bool:
        """True when one sentence holds both an intent phrase and a time word, in any order."""
        for sentence in _SENTENCE_BREAK.split(text):
            if self.intent_with_time.search(sentence) and self._time_words.search(sentence):
                return True
        return False

    def __len__(self) -> int:
        return sum(len(patterns) for patterns in self._groups.values())


def _resolve_group(name: str) -> PatternGroup:
    try:
        return PatternGroup(name)
    except ValueError as exc:
        raise PatternError(f"Unknown pattern group: {name!r}") from exc


def compile_library(
    table: PatternTable = PATTERN_TABLE,
    hedge: str = HEDGE_PATTERN,
    intent_phrases: Sequence[str] = INTENT_PHRASES,
    time_words: str = INTENT_TIME_WORDS_PATTERN,
) -> PatternLibrary:
    """Compile a pattern table, failing on the first bad definition."""
    groups: Dict[PatternGroup, Tuple[Pattern, ...]] = {}
    seen_ids = set()

    for group_name, entries in table:
        group = _resolve_group(group_name)
        if group in groups:
            raise PatternError(f"Pattern group {group.value!r} is defined twice")

        compiled: List[Pattern] = []
        for pattern_id, source in entries:
            if not pattern_id:
                raise PatternError(f"Pattern in group {group.value!r} has no id")
            if pattern_id in seen_ids:
                raise PatternError(f"Duplicate pattern id: {pattern_id!r}")
            seen_ids.add(pattern_id)
            compiled.append(Pattern(id=pattern_id, regex=_compile(pattern_id, source), group=group))

        if not compiled:
            raise PatternError(f"Pattern group {group.value!r} is empty")
        groups[group] = tuple(compiled)

    missing = [group.value for group in PatternGroup if group not in groups]
    if missing:
        raise PatternError(f"Pattern table is missing groups: {', '.join(missing)}")
    if not intent_phrases:
        raise PatternError("Intent-with-time guard needs at least one intent phrase")

    library = PatternLibrary(
        groups=groups,
        hedge=_compile("hedge", hedge),
        intent_with_time=Pattern(
            id=INTENT_WITH_TIME_ID,
            regex=_compile(
                INTENT_WITH_TIME_ID,
                "|".join(f"(?:{source})" for source in intent_phrases),
            ),
            group=PatternGroup.INTENT_DESIRE,
        ),
        time_words=_compile("time_words", time_words),
    )
    logger.debug("Compiled %d patterns in %d groups", len(library), len(groups))
    return library


def describe_patterns(patterns: Iterable[Pattern]) -> List[Dict[str, str]]:
    """Serializable view of patterns for listings."""
    return [
        {"id": pattern.id, "group": pattern.group.value, "regex": pattern.regex.pattern}
        for pattern in patterns
    ]


DEFAULT_LIBRARY = compile_library()

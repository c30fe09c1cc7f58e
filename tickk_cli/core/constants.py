"""Static pattern table and label mappings for tickk."""

from __future__ import annotations

# Straight or typographic apostrophe, as emitted by speech-to-text engines.
_APOS = "['’]"

PATTERN_TABLE = [
    (
        "intent_desire",
        [
            ("want_to", r"\bi\s+want\s+to\b"),
            ("would_like_to_contracted", rf"\bi{_APOS}d\s+like\s+to\b"),
            ("wish_to", r"\bi\s+wish\s+to\b"),
            ("hope_to", r"\bi\s+hope\s+to\b"),
            ("thinking_about", rf"\bi{_APOS}m\s+thinking\s+about\b"),
            ("interested_in", rf"\bi{_APOS}m\s+interested\s+in\b"),
            ("love_to", r"\bi\s+love\s+to\b"),
            ("enjoy", r"\bi\s+enjoy\b"),
            (
                "should_explore",
                r"\bi\s+should\s+(?:read|learn|try|explore|check\s+out|look\s+into)\b",
            ),
            ("would_like_to", r"\bwould\s+like\s+to\b"),
        ],
    ),
    (
        "question",
        [
            ("what_should_i", r"\bwhat\s+should\s+i\b"),
            ("how_do_i", r"\bhow\s+(?:do|can)\s+i\b"),
            ("where_should_i", r"\bwhere\s+(?:should|can)\s+i\b"),
            ("when_should_i", r"\bwhen\s+should\s+i\b"),
            ("why_should_i", r"\bwhy\s+(?:should|do)\s+i\b"),
            ("question_mark", r"\?$"),
        ],
    ),
    (
        "calendar",
        [
            ("at_clock_time", r"\bat\s+\d{1,2}(?::\d{2})?\s*(?:am|pm)\b"),
            ("at_noon_midnight", r"\bat\s+(?:noon|midnight)\b"),
            ("relative_day", r"\b(?:tomorrow|today|yesterday)\b"),
            (
                "weekday",
                r"\b(?:monday|tuesday|wednesday|thursday|friday|saturday|sunday)\b",
            ),
            ("relative_period", r"\b(?:next|this)\s+(?:week|month)\b"),
            ("meeting_word", r"\b(?:meet(?:ing)?|appointment|call|lunch|dinner|conference)\b"),
            ("schedule", r"\bschedule\b"),
            ("remind_me", r"\bremind\s+me\s+(?:to|at)\b"),
            ("clock_time", r"\b\d{1,2}(?::\d{2})?\s*(?:am|pm)\b"),
        ],
    ),
    (
        "obligation",
        [
            ("need_to", r"\bi\s+need\s+to\b"),
            ("have_to", r"\bi\s+have\s+to\b"),
            ("must", r"\bi\s+must\b"),
            ("remember_to", r"\bremember\s+to\b"),
            ("dont_forget_to", rf"\bdon{_APOS}t\s+forget\s+to\b"),
            ("make_sure_to", r"\bmake\s+sure\s+to\b"),
            ("todo", r"\btodo\b"),
            ("task", r"\btask\b"),
        ],
    ),
    (
        "action_verb",
        [
            ("acquire", r"\b(?:buy|purchase|get|obtain|acquire)\b"),
            ("pick_up", r"\b(?:pick\s+up|collect)\b"),
            ("deliver", r"\b(?:finish|complete|submit|send)\b"),
            ("repair", r"\b(?:fix|repair|resolve)\b"),
            ("produce", r"\b(?:create|make|build|write)\b"),
            ("reach_out", r"\b(?:email|contact|text)\b"),
        ],
    ),
    (
        "note_indicator",
        [
            ("idea_words", r"\b(?:ideas?|thoughts?|notes?)\b"),
            ("insight_words", r"\b(?:insight|inspiration|concept|brainstorm)\b"),
            ("reaction_words", r"\b(?:interesting|fascinating|cool)\b"),
            ("remember_this", r"\bremember\s+(?:this|that)\b"),
            ("note_prefix", r"\bnote\s*:"),
        ],
    ),
]

# Phrases the calendar-stage guard treats as intent, taken from the intent group.
INTENT_PHRASES = [
    source for name, entries in PATTERN_TABLE if name == "intent_desire" for _, source in entries
]

# Downgrades an action verb from a commitment to a musing.
HEDGE_PATTERN = r"\b(?:maybe|perhaps|could|might|should\s+probably)\b"

# Time words that, next to an intent phrase in one sentence, still mean a note.
INTENT_TIME_WORDS_PATTERN = r"\b(?:tomorrow|next\s+week)\b"
INTENT_WITH_TIME_ID = "intent_with_time"

CATEGORY_LABELS = {
    "tasks": "Task",
    "calendar": "Calendar",
    "notes": "Note",
}

GROUP_LABELS = {
    "intent_desire": "Intent/desire",
    "question": "Question",
    "calendar": "Calendar",
    "obligation": "Obligation",
    "action_verb": "Action verb",
    "note_indicator": "Note indicator",
}

STAGE_CONFIDENCE = {
    "empty": 0.5,
    "intent_desire": 0.9,
    "question": 0.9,
    "calendar": 0.85,
    "intent_with_time": 0.8,
    "obligation": 0.95,
    "action_verb": 0.8,
    "hedged_action": 0.6,
    "note_indicator": 0.75,
    "default": 0.5,
}

from __future__ import annotations

import logging
from datetime import datetime, timezone

import pytest

from tickk_cli.core.classify import (
    InvalidArgumentError,
    classify,
    classify_label,
    classify_many,
    to_record,
)
from tickk_cli.core.constants import PATTERN_TABLE
from tickk_cli.core.models import Category, PatternGroup
from tickk_cli.core.patterns import compile_library


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("I want to read xyz book", "notes"),
        ("I need to buy groceries", "tasks"),
        ("Meet John at 3pm tomorrow", "calendar"),
        ("I want to visit Paris next year", "notes"),
        ("Great idea for the project", "notes"),
        ("Maybe I should buy that book", "notes"),
        ("Don't forget to submit the report", "tasks"),
        ("", "notes"),
    ],
)
def test_seed_scenarios(text: str, expected: str) -> None:
    assert classify_label(text) == expected


def test_empty_and_whitespace_short_circuit() -> None:
    for text in ("", "   ", "\n\t "):
        result = classify(text)
        assert result.category is Category.NOTE
        assert result.matched_group is None
        assert result.matched_pattern_id is None


def test_intent_overrides_calendar_and_action_words() -> None:
    for text in (
        "I want to buy a laptop tomorrow",
        "I'd like to schedule a trip at 3pm",
        "I hope to finish the novel next week",
        "I enjoy lunch with the team on Friday",
    ):
        result = classify(text)
        assert result.category is Category.NOTE
        assert result.matched_group is PatternGroup.INTENT_DESIRE


def test_question_outranks_calendar() -> None:
    result = classify("When should I book the dentist appointment")
    assert result.category is Category.NOTE
    assert result.matched_group is PatternGroup.QUESTION
    assert result.matched_pattern_id == "when_should_i"


def test_trailing_question_mark_after_trim() -> None:
    result = classify("  Is the meeting still on?  ")
    assert result.matched_pattern_id == "question_mark"
    assert result.category is Category.NOTE


def test_calendar_outranks_obligation() -> None:
    result = classify("I need to call the doctor next week")
    assert result.category is Category.CALENDAR
    assert result.matched_group is PatternGroup.CALENDAR


def test_obligation_outranks_action_verb() -> None:
    result = classify("I have to fix the sink")
    assert result.category is Category.TASK
    assert result.matched_group is PatternGroup.OBLIGATION
    assert result.matched_pattern_id == "have_to"


def test_hedge_downgrades_action_verb_only() -> None:
    hedged = classify("We might build a shed")
    assert hedged.category is Category.NOTE
    assert hedged.matched_group is PatternGroup.ACTION_VERB
    assert "hedge" in (hedged.reasoning or "")

    obligation = classify("Maybe I need to buy milk")
    assert obligation.category is Category.TASK
    assert obligation.matched_group is PatternGroup.OBLIGATION


def test_action_verb_without_hedge_is_task() -> None:
    result = classify("Submit the expense report")
    assert result.category is Category.TASK
    assert result.matched_pattern_id == "deliver"


def test_note_indicator_and_default() -> None:
    indicator = classify("Fascinating insight on retention")
    assert indicator.category is Category.NOTE
    assert indicator.matched_group is PatternGroup.NOTE_INDICATOR

    default = classify("The sky over the harbour")
    assert default.category is Category.NOTE
    assert default.matched_group is None
    assert default.confidence == 0.5


def test_word_boundaries_prevent_mid_word_matches() -> None:
    # "document" must not trigger a bare "do"; "callback" is not "call";
    # "today's" still counts as "today".
    assert classify("The document is long").matched_group is None
    assert classify("Callbacks are hard").matched_group is None
    assert classify_label("Draft outline for today's standup") == "calendar"


def test_matching_is_case_insensitive() -> None:
    assert classify_label("I NEED TO BUY GROCERIES") == "tasks"
    assert classify_label("meet JOHN AT 3PM") == "calendar"


def test_typographic_apostrophes() -> None:
    assert classify_label("I’d like to learn Go") == "notes"
    assert classify_label("Don’t forget to water the plants") == "tasks"


def test_clock_times() -> None:
    for text in ("Standup at 9am", "Sync 10:30 pm", "Drinks at midnight", "Dentist at noon"):
        assert classify_label(text) == "calendar"


def test_classify_rejects_non_strings() -> None:
    for value in (None, 42, b"bytes", ["I need to buy milk"]):
        with pytest.raises(InvalidArgumentError):
            classify(value)  # type: ignore[arg-type]


def test_invalid_argument_is_a_type_error() -> None:
    assert issubclass(InvalidArgumentError, TypeError)


def test_classify_is_deterministic() -> None:
    text = "Remember to pick up the dry cleaning"
    assert classify(text) == classify(text)


def test_classify_handles_unicode_and_long_input() -> None:
    assert classify_label("Buy groceries 🛒 for dinner tonight!") == "calendar"
    long_text = "the quick brown fox jumps over the lazy dog " * 500
    assert classify_label(long_text) == "notes"


def test_intent_with_time_guard_catches_gaps_in_intent_group() -> None:
    # With "want to" missing from the intent group, only the guard sees it.
    table = [
        (name, [("enjoy", r"\bi\s+enjoy\b")]) if name == "intent_desire" else (name, entries)
        for name, entries in PATTERN_TABLE
    ]
    library = compile_library(table)
    result = classify("I want to read this tomorrow", library)
    assert result.category is Category.NOTE
    assert result.matched_pattern_id == "intent_with_time"
    assert result.matched_group is PatternGroup.INTENT_DESIRE

    assert classify("Read this tomorrow", library).category is Category.CALENDAR
    assert classify("Tomorrow I want to read", library).category is Category.NOTE
    assert classify("I want to rest. Dentist tomorrow", library).category is Category.CALENDAR


def test_result_to_dict_shape() -> None:
    payload = classify("Meet John at 3pm tomorrow").to_dict()
    assert payload["category"] == "calendar"
    assert payload["matchedGroup"] == "calendar"
    assert payload["matchedPatternId"] == "at_clock_time"
    assert 0 < payload["confidence"] <= 1

    empty = classify("").to_dict()
    assert empty["category"] == "notes"
    assert "matchedGroup" not in empty
    assert "matchedPatternId" not in empty


def test_classify_many_preserves_order() -> None:
    results = classify_many(["Buy milk", "Lunch on Friday", "Nice idea"])
    assert [result.label for result in results] == ["tasks", "calendar", "notes"]


def test_to_record_uses_trimmed_text_and_iso_timestamp() -> None:
    moment = datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)
    record = to_record("  Buy milk  ", classify("Buy milk"), timestamp=moment)
    assert record == {
        "text": "Buy milk",
        "category": "tasks",
        "timestamp": "2026-03-01T09:30:00+00:00",
    }


def test_classify_logs_decision_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="tickk_cli.core.classify")
    classify("Buy milk")
    assert any("as tasks" in record.getMessage() for record in caplog.records)

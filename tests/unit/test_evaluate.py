from __future__ import annotations

import json
from pathlib import Path

import pytest

from tickk_cli.core.constants import PATTERN_TABLE
from tickk_cli.core.evaluate import (
    SEED_CORPUS,
    CorpusCase,
    CorpusError,
    evaluate,
    find_regressions,
    load_baseline,
    load_corpus,
    report_to_dict,
    snapshot,
    write_baseline,
)
from tickk_cli.core.models import Category
from tickk_cli.core.patterns import compile_library


def test_seed_corpus_passes_with_default_library() -> None:
    report = evaluate()
    assert report.total == len(SEED_CORPUS)
    assert report.failures == []
    assert report.accuracy == 1.0


def test_seed_corpus_covers_every_category() -> None:
    assert {case.expected for case in SEED_CORPUS} == set(Category)


def test_failures_carry_matched_rule() -> None:
    corpus = [
        CorpusCase(text="Buy milk", expected=Category.NOTE, reason="deliberately wrong"),
        CorpusCase(text="Nice idea", expected=Category.NOTE),
    ]
    report = evaluate(corpus)
    assert report.passed == 1
    assert report.accuracy == 0.5
    failure = report.failures[0]
    assert failure.case.text == "Buy milk"
    assert failure.result.matched_pattern_id == "acquire"


def test_empty_corpus_counts_as_full_accuracy() -> None:
    report = evaluate([])
    assert report.total == 0
    assert report.accuracy == 1.0


def test_load_corpus_json_objects_and_pairs(write_temp_json) -> None:
    path = write_temp_json(
        "corpus.json",
        [
            {"text": "Buy milk", "expected": "tasks", "reason": "verb"},
            ["Lunch on Friday", "calendar"],
            ["Nice idea", "Note", "label by name"],
        ],
    )
    cases = load_corpus(path)
    assert [case.expected for case in cases] == [Category.TASK, Category.CALENDAR, Category.NOTE]
    assert cases[0].reason == "verb"
    assert cases[2].reason == "label by name"


def test_load_corpus_yaml_with_cases_key(write_temp_yaml) -> None:
    path = write_temp_yaml(
        "corpus.yaml",
        {"cases": [{"text": "I need to buy groceries", "expected": "tasks"}]},
    )
    cases = load_corpus(path)
    assert cases == [CorpusCase(text="I need to buy groceries", expected=Category.TASK)]


@pytest.mark.parametrize(
    "payload",
    [
        {"not": "a list"},
        [{"text": "Buy milk", "expected": "chores"}],
        [{"text": 3, "expected": "tasks"}],
        ["just a string"],
    ],
)
def test_load_corpus_rejects_bad_shapes(write_temp_json, payload) -> None:
    path = write_temp_json("bad.json", payload)
    with pytest.raises(CorpusError):
        load_corpus(path)


def test_load_corpus_reports_parse_errors(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{broken")
    with pytest.raises(CorpusError, match="Failed to parse"):
        load_corpus(path)

    with pytest.raises(CorpusError, match="Cannot read"):
        load_corpus(tmp_path / "missing.json")


def test_load_corpus_rejects_invalid_utf8(tmp_path: Path) -> None:
    path = tmp_path / "corpus.yaml"
    path.write_bytes(b"- [\"Buy milk \xff\", tasks]\n")
    with pytest.raises(CorpusError, match="Cannot read"):
        load_corpus(path)


def test_snapshot_and_baseline_roundtrip(tmp_path: Path) -> None:
    path = write_baseline(tmp_path / "nested" / "baseline.json")
    stored = json.loads(path.read_text())
    assert stored == snapshot()
    assert load_baseline(path) == stored
    assert find_regressions(stored) == []


def test_find_regressions_after_pattern_edit() -> None:
    baseline = snapshot()
    # Dropping the obligation rules moves obligation-only entries elsewhere.
    table = [
        (name, [("todo", r"\btodo\b")]) if name == "obligation" else (name, entries)
        for name, entries in PATTERN_TABLE
    ]
    regressions = find_regressions(baseline, library=compile_library(table))
    changed = {item.text: (item.before, item.after) for item in regressions}
    assert changed["I need to read the documentation"] == ("tasks", "notes")
    assert "Meet John at 3pm tomorrow" not in changed
    assert "Buy milk" not in changed


def test_find_regressions_ignores_entries_missing_from_baseline() -> None:
    assert find_regressions({"something else": "tasks"}) == []


def test_load_baseline_rejects_bad_labels(write_temp_json) -> None:
    path = write_temp_json("baseline.json", {"Buy milk": "chores"})
    with pytest.raises(CorpusError):
        load_baseline(path)

    path = write_temp_json("list.json", ["Buy milk"])
    with pytest.raises(CorpusError, match="must map"):
        load_baseline(path)


def test_report_to_dict() -> None:
    corpus = [CorpusCase(text="Buy milk", expected=Category.CALENDAR, reason="wrong")]
    payload = report_to_dict(evaluate(corpus))
    assert payload["total"] == 1
    assert payload["passed"] == 0
    assert payload["accuracy"] == 0.0
    assert payload["failures"][0]["expected"] == "calendar"
    assert payload["failures"][0]["category"] == "tasks"
    assert payload["failures"][0]["matchedGroup"] == "action_verb"
    assert payload["regressions"] == []

"""Seed corpus evaluation and regression checks for the ruleset."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

import yaml

from tickk_cli.core.classify import classify
from tickk_cli.core.models import Category, ClassificationResult
from tickk_cli.core.patterns import DEFAULT_LIBRARY, PatternLibrary


class CorpusError(ValueError):
    """Raised when a corpus or baseline file cannot be used."""


@dataclass(frozen=True)
class CorpusCase:
    """One utterance with the category it must receive."""

    text: str
    expected: Category
    reason: str = ""


@dataclass(frozen=True)
class CaseOutcome:
    case: CorpusCase
    result: ClassificationResult

    @property
    def passed(self) -> bool:
        return self.result.category is self.case.expected


@dataclass(frozen=True)
class Regression:
    """An utterance whose category differs from the recorded baseline."""

    text: str
    before: str
    after: str


@dataclass(frozen=True)
class EvaluationReport:
    outcomes: List[CaseOutcome]

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def passed(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.passed)

    @property
    def accuracy(self) -> float:
        return self.passed / self.total if self.total else 1.0

    @property
    def failures(self) -> List[CaseOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.passed]


def _case(text: str, expected: str, reason: str = "") -> CorpusCase:
    return CorpusCase(text=text, expected=Category(expected), reason=reason)


SEED_CORPUS: List[CorpusCase] = [
    _case("I want to read xyz book", "notes", "desire to read"),
    _case("I want to read the new JavaScript book", "notes", "desire to read"),
    _case("I'd like to read Harry Potter", "notes", "desire with contraction"),
    _case("I’m thinking about a career change", "notes", "typographic apostrophe"),
    _case("I should read that article", "notes", "personal intention, not obligation"),
    _case("I want to buy a new laptop", "notes", "desire outranks action verb"),
    _case("I want to do yoga", "notes", "desire"),
    _case("I want to visit Paris next year", "notes", "intent overrides time word"),
    _case("I want to read this tomorrow", "notes", "intent overrides calendar word"),
    _case("What should I do?", "notes", "question"),
    _case("How do I renew my passport", "notes", "self-directed question"),
    _case("Should we move the meeting?", "notes", "trailing question mark"),
    _case("Meet John at 3pm tomorrow", "calendar", "clear appointment"),
    _case("Call the doctor next week", "calendar", "dated obligation is scheduled"),
    _case("Lunch with team on Friday", "calendar", "meal with weekday"),
    _case("Schedule a meeting for Monday", "calendar", "scheduling verb"),
    _case("Dentist appointment at noon", "calendar", "appointment at noon"),
    _case("Let's sync at 10:30 am", "calendar", "clock time with minutes"),
    _case("Remind me to water the plants", "calendar", "reminder request"),
    _case("I need to buy groceries", "tasks", "clear obligation"),
    _case("I need to read the documentation", "tasks", "obligation"),
    _case("I need to do laundry", "tasks", "obligation"),
    _case("I have to finish the report", "tasks", "obligation"),
    _case("Remember to read the email", "tasks", "reminder"),
    _case("Remember to pick up the dry cleaning", "tasks", "reminder"),
    _case("Don't forget to submit the report", "tasks", "strong obligation"),
    _case("Make sure to lock the back door", "tasks", "strong obligation"),
    _case("Maybe I need to buy milk", "tasks", "hedges do not soften obligations"),
    _case("Buy milk", "tasks", "bare action verb"),
    _case("Fix the broken door", "tasks", "repair verb"),
    _case("Send the invoice", "tasks", "delivery verb"),
    _case("Email Sarah about the budget", "tasks", "contact verb"),
    _case("Maybe I should buy that book", "notes", "hedge overrides action verb"),
    _case("Perhaps we could build a treehouse", "notes", "hedge overrides action verb"),
    _case("Read that article", "notes", "no obligation marker"),
    _case("Great idea for the project", "notes", "explicit note indicator"),
    _case("Interesting thought about AI", "notes", "note indicator"),
    _case("Note: check the user feedback", "notes", "note prefix"),
    _case("Brainstorm names for the podcast", "notes", "brainstorm"),
    _case("The documentation is thorough", "notes", "no bare 'do' rule"),
    _case("", "notes", "empty input"),
    _case("   ", "notes", "whitespace only"),
]


def evaluate(
    corpus: Sequence[CorpusCase] = SEED_CORPUS,
    library: PatternLibrary = DEFAULT_LIBRARY,
) -> EvaluationReport:
    """Classify every case and collect outcomes."""
    return EvaluationReport(
        outcomes=[CaseOutcome(case=case, result=classify(case.text, library)) for case in corpus]
    )


def _read_structured(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CorpusError(f"Cannot read {path}: {exc}") from exc
    try:
        if path.suffix.lower() in {".yaml", ".yml"}:
            return yaml.safe_load(text)
        return json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise CorpusError(f"Failed to parse {path}: {exc}") from exc


def _parse_case(item: Any, index: int) -> CorpusCase:
    if isinstance(item, dict):
        text, expected, reason = item.get("text"), item.get("expected"), item.get("reason", "")
    elif isinstance(item, (list, tuple)) and len(item) in {2, 3}:
        text, expected = item[0], item[1]
        reason = item[2] if len(item) == 3 else ""
    else:
        raise CorpusError(f"Corpus entry {index} must be an object or [text, expected] pair")

    if not isinstance(text, str) or not isinstance(expected, str):
        raise CorpusError(f"Corpus entry {index} needs string 'text' and 'expected'")
    try:
        category = Category.from_label(expected)
    except ValueError as exc:
        raise CorpusError(f"Corpus entry {index}: {exc}") from exc
    return CorpusCase(text=text, expected=category, reason=str(reason or ""))


def load_corpus(path: Path) -> List[CorpusCase]:
    """Load a corpus from JSON or YAML."""
    raw = _read_structured(path)
    if isinstance(raw, dict):
        raw = raw.get("cases")
    if not isinstance(raw, list):
        raise CorpusError(f"Corpus file {path} must contain a list of cases")
    return [_parse_case(item, index) for index, item in enumerate(raw)]


def snapshot(
    corpus: Iterable[CorpusCase] = SEED_CORPUS,
    library: PatternLibrary = DEFAULT_LIBRARY,
) -> Dict[str, str]:
    """Map each corpus text to the label the ruleset currently gives it."""
    return {case.text: classify(case.text, library).label for case in corpus}


def write_baseline(
    path: Path,
    corpus: Iterable[CorpusCase] = SEED_CORPUS,
    library: PatternLibrary = DEFAULT_LIBRARY,
) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(snapshot(corpus, library), indent=2, ensure_ascii=False) + "\n")
    return path


def load_baseline(path: Path) -> Dict[str, str]:
    raw = _read_structured(path)
    if not isinstance(raw, dict):
        raise CorpusError(f"Baseline file {path} must map utterances to categories")

    baseline: Dict[str, str] = {}
    for text, label in raw.items():
        try:
            baseline[str(text)] = Category.from_label(str(label)).value
        except ValueError as exc:
            raise CorpusError(f"Baseline entry {text!r}: {exc}") from exc
    return baseline


def find_regressions(
    baseline: Dict[str, str],
    corpus: Iterable[CorpusCase] = SEED_CORPUS,
    library: PatternLibrary = DEFAULT_LIBRARY,
) -> List[Regression]:
    """Report corpus entries whose label moved away from the baseline.

    Entries missing from the baseline are new and never count as regressions.
    """
    current = snapshot(corpus, library)
    return [
        Regression(text=text, before=baseline[text], after=label)
        for text, label in current.items()
        if text in baseline and baseline[text] != label
    ]


def report_to_dict(
    report: EvaluationReport,
    regressions: Optional[List[Regression]] = None,
) -> Dict[str, Any]:
    return {
        "total": report.total,
        "passed": report.passed,
        "accuracy": round(report.accuracy, 4),
        "failures": [
            {
                "text": outcome.case.text,
                "expected": outcome.case.expected.value,
                "reason": outcome.case.reason,
                **outcome.result.to_dict(),
            }
            for outcome in report.failures
        ],
        "regressions": [
            {"text": item.text, "before": item.before, "after": item.after}
            for item in (regressions or [])
        ],
    }

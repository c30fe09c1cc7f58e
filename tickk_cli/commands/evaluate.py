"""Ruleset evaluation command."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.table import Table

from tickk_cli.commands.common import get_state, print_json_payload
from tickk_cli.core.config import expand_path, resolve_corpus_path
from tickk_cli.core.evaluate import (
    SEED_CORPUS,
    CorpusCase,
    CorpusError,
    Regression,
    evaluate,
    find_regressions,
    load_baseline,
    load_corpus,
    report_to_dict,
    write_baseline,
)
from tickk_cli.core.patterns import PatternLibrary

logger = logging.getLogger(__name__)


def _baseline_regressions(
    corpus: List[CorpusCase],
    explicit: Optional[Path],
    configured: str,
    library: PatternLibrary,
) -> List[Regression]:
    # An explicit baseline must exist; the configured default is optional.
    if explicit is not None:
        return find_regressions(load_baseline(explicit.expanduser().resolve()), corpus, library)
    if configured:
        path = expand_path(configured)
        if path.exists():
            return find_regressions(load_baseline(path), corpus, library)
        logger.debug("No baseline at %s; skipping regression check", path)
    return []


def evaluate_command(
    ctx: typer.Context,
    corpus: Optional[Path] = typer.Option(None, help="JSON/YAML corpus (default: built-in seed corpus)"),
    baseline: Optional[Path] = typer.Option(None, help="Baseline snapshot to compare categories against"),
    write_baseline_to: Optional[Path] = typer.Option(
        None,
        "--write-baseline",
        help="Record current categories as a new baseline",
    ),
    min_accuracy: Optional[float] = typer.Option(
        None,
        help="Fail below this pass rate, 0-1 (default: config evaluation.min_accuracy)",
    ),
) -> None:
    """Run the corpus through the classifier and report failures."""
    state = get_state(ctx)
    eval_cfg = state.config.get("evaluation", {})

    threshold = float(min_accuracy if min_accuracy is not None else eval_cfg.get("min_accuracy", 1.0))
    if not 0.0 <= threshold <= 1.0:
        raise typer.BadParameter("--min-accuracy must be between 0 and 1")

    try:
        corpus_path = resolve_corpus_path(state.config, explicit=corpus)
        cases = load_corpus(corpus_path) if corpus_path else list(SEED_CORPUS)
        regressions = _baseline_regressions(
            cases,
            baseline,
            str(eval_cfg.get("baseline") or ""),
            state.library,
        )
    except CorpusError as exc:
        typer.echo(f"Corpus error: {exc}")
        raise typer.Exit(code=2)

    report = evaluate(cases, state.library)
    written: Optional[Path] = None
    if write_baseline_to is not None:
        written = write_baseline(write_baseline_to.expanduser().resolve(), cases, state.library)

    failed = report.accuracy < threshold or bool(regressions)

    if state.json_output:
        payload = report_to_dict(report, regressions)
        payload["min_accuracy"] = threshold
        payload["ok"] = not failed
        if written:
            payload["baseline_written"] = str(written)
        print_json_payload(state, payload)
        if failed:
            raise typer.Exit(code=1)
        return

    if state.plain_output:
        typer.echo(f"passed\t{report.passed}/{report.total}")
        typer.echo(f"accuracy\t{report.accuracy:.3f}")
        for outcome in report.failures:
            typer.echo(
                "\t".join(
                    [
                        "failure",
                        outcome.case.expected.value,
                        outcome.result.label,
                        outcome.result.matched_pattern_id or "-",
                        outcome.case.text,
                    ]
                )
            )
        for item in regressions:
            typer.echo(f"regression\t{item.before}\t{item.after}\t{item.text}")
        if written:
            typer.echo(f"baseline\t{written}")
    else:
        if report.failures:
            table = Table(title=f"Failures ({len(report.failures)})")
            table.add_column("Text")
            table.add_column("Expected")
            table.add_column("Got")
            table.add_column("Matched rule")
            for outcome in report.failures:
                result = outcome.result
                table.add_row(
                    outcome.case.text,
                    outcome.case.expected.value,
                    result.label,
                    f"{result.matched_group.value}/{result.matched_pattern_id}"
                    if result.matched_group
                    else "default",
                )
            state.console.print(table)

        for item in regressions:
            state.console.print(f"Regression: {item.text!r} was {item.before}, now {item.after}")

        state.console.print(f"Passed: {report.passed}/{report.total} cases")
        state.console.print(f"Success rate: {report.accuracy * 100:.1f}%")
        if written:
            state.console.print(f"Baseline written to: {written}")

    if failed:
        raise typer.Exit(code=1)

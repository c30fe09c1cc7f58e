"""Utterance classification command."""

from __future__ import annotations

import json
import sys
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import typer
import yaml
from rich.table import Table

from tickk_cli.commands.common import get_state, load_utterances, print_json_payload
from tickk_cli.core.classify import classify
from tickk_cli.core.config import resolve_output_dir
from tickk_cli.core.constants import CATEGORY_LABELS
from tickk_cli.core.models import ClassificationResult
from tickk_cli.exporters.json_export import write_records
from tickk_cli.utils.text import truncate


def _summary(classified: List[Tuple[str, ClassificationResult]]) -> Dict[str, Any]:
    by_category = Counter(result.label for _, result in classified)
    return {
        "total": len(classified),
        "by_category": {label: by_category.get(label, 0) for label in CATEGORY_LABELS},
    }


def _resolve_output_path(config: Dict[str, Any], output: Path) -> Path:
    if output.is_absolute():
        return output
    return resolve_output_dir(config) / output


def classify_command(
    ctx: typer.Context,
    texts: Optional[List[str]] = typer.Argument(None, help="Utterance(s) to classify"),
    file: Optional[Path] = typer.Option(None, help="Text (one per line), JSON or YAML file"),
    stdin: bool = typer.Option(False, "--stdin", help="Read utterances from stdin"),
    output: Optional[Path] = typer.Option(
        None,
        help="Write {text, category, timestamp} records as JSON (relative to the export directory)",
    ),
) -> None:
    """Classify utterances as tasks, calendar events or notes."""
    state = get_state(ctx)

    stdin_text = sys.stdin.read() if stdin else ""
    try:
        utterances = load_utterances(
            texts=texts or [],
            file_path=file,
            read_stdin=stdin,
            stdin_text=stdin_text,
        )
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise typer.BadParameter(f"Cannot read utterances: {exc}") from exc

    if not utterances:
        raise typer.BadParameter("Provide TEXT arguments, --file, or --stdin")

    classified = [(text, classify(text, state.library)) for text in utterances]

    output_path: Optional[Path] = None
    if output is not None:
        output_path = write_records(_resolve_output_path(state.config, output), classified)

    if state.json_output:
        payload = {
            "items": [{"text": text, **result.to_dict()} for text, result in classified],
            "summary": _summary(classified),
        }
        if output_path:
            payload["output_file"] = str(output_path)
        print_json_payload(state, payload)
        return

    if state.plain_output:
        typer.echo("category\tgroup\tpattern\ttext")
        for text, result in classified:
            typer.echo(
                "\t".join(
                    [
                        result.label,
                        result.matched_group.value if result.matched_group else "-",
                        result.matched_pattern_id or "-",
                        text,
                    ]
                )
            )
        if output_path:
            typer.echo(f"output_file\t{output_path}")
        return

    table = Table(title=f"Classified {len(classified)} utterance(s)")
    table.add_column("Text")
    table.add_column("Category")
    table.add_column("Rule")
    table.add_column("Confidence", justify="right")
    if state.verbose:
        table.add_column("Reasoning")
    for text, result in classified:
        rule = (
            f"{result.matched_group.value}/{result.matched_pattern_id}"
            if result.matched_group
            else "default"
        )
        cells = [
            truncate(text) or "(empty)",
            CATEGORY_LABELS[result.label],
            rule,
            f"{result.confidence:.2f}",
        ]
        if state.verbose:
            cells.append(result.reasoning or "")
        table.add_row(*cells)
    state.console.print(table)

    summary = _summary(classified)["by_category"]
    state.console.print(
        "  ".join(f"{CATEGORY_LABELS[label]}: {count}" for label, count in summary.items())
    )
    if output_path:
        state.console.print(f"Records written to: {output_path}")

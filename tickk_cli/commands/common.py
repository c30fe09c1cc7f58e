"""Shared command helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Optional, Sequence

import typer
import yaml

from tickk_cli.core.state import CLIState
from tickk_cli.utils.text import split_utterances


def get_state(ctx: typer.Context) -> CLIState:
    """Extract validated CLI state from Typer context."""
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=2)
    return state


def print_json_payload(state: CLIState, payload: Any) -> None:
    """Print JSON payload with plain-mode fallback for piping."""
    if state.plain_output:
        typer.echo(json.dumps(payload, separators=(",", ":"), ensure_ascii=False))
        return
    state.console.print_json(data=payload)


def _coerce_items(raw_data: Any) -> List[str]:
    if isinstance(raw_data, str):
        return split_utterances(raw_data)
    if isinstance(raw_data, dict):
        raw_data = [raw_data]
    if not isinstance(raw_data, list):
        return []

    items: List[str] = []
    for item in raw_data:
        if isinstance(item, str):
            items.append(item)
        elif isinstance(item, dict) and isinstance(item.get("text"), str):
            items.append(item["text"])
    return items


def load_utterances(
    texts: Sequence[str] = (),
    file_path: Optional[Path] = None,
    read_stdin: bool = False,
    stdin_text: str = "",
) -> List[str]:
    """Collect utterances from arguments, a file, or stdin text.

    Plain text yields one utterance per non-blank line; JSON and YAML may hold
    a list of strings or of objects with a ``text`` field.
    """
    items = list(texts)
    if file_path:
        text = file_path.read_text(encoding="utf-8")
        suffix = file_path.suffix.lower()
        if suffix in {".yaml", ".yml"}:
            items.extend(_coerce_items(yaml.safe_load(text)))
        elif suffix == ".json":
            items.extend(_coerce_items(json.loads(text)))
        else:
            items.extend(split_utterances(text))
    elif read_stdin:
        text = stdin_text.strip()
        if not text:
            return items
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, (list, dict)):
            items.extend(_coerce_items(parsed))
        else:
            items.extend(split_utterances(text))
    return items

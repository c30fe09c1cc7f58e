"""Pattern library inspection command."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import typer
from rich.table import Table
from rich.text import Text

from tickk_cli.commands.common import get_state, print_json_payload
from tickk_cli.core.classify import classify
from tickk_cli.core.constants import GROUP_LABELS
from tickk_cli.core.models import PatternGroup
from tickk_cli.core.patterns import PatternLibrary, describe_patterns


def _explain(text: str, library: PatternLibrary) -> Dict[str, Any]:
    matches: Dict[str, List[str]] = {}
    for group in library.groups():
        matches[group.value] = [pattern.id for pattern in library.matches(group, text)]
    return {
        "text": text,
        "matches": matches,
        "hedged": library.is_hedged(text),
        "decision": classify(text, library).to_dict(),
    }


def patterns_command(
    ctx: typer.Context,
    group: Optional[str] = typer.Option(None, help="Only list one group, e.g. calendar"),
    explain: Optional[str] = typer.Option(None, help="Show every rule an utterance matches"),
) -> None:
    """List the pattern library or explain one utterance."""
    state = get_state(ctx)

    if explain is not None:
        payload = _explain(explain, state.library)
        if state.json_output:
            print_json_payload(state, payload)
            return
        decision = payload["decision"]

        if state.plain_output:
            for group_name, pattern_ids in payload["matches"].items():
                typer.echo(f"{group_name}\t{','.join(pattern_ids) or '-'}")
            typer.echo(f"hedged\t{str(payload['hedged']).lower()}")
            typer.echo(f"decision\t{decision['category']}")
            return

        for group_name, pattern_ids in payload["matches"].items():
            state.console.print(
                f"{GROUP_LABELS[group_name]}: {', '.join(pattern_ids) or '-'}",
                markup=False,
            )
        state.console.print(f"Hedged: {'yes' if payload['hedged'] else 'no'}")
        state.console.print(
            f"Decision: {decision['category']} ({decision.get('reasoning', '')})",
            markup=False,
        )
        return

    selected: Optional[PatternGroup] = None
    if group is not None:
        try:
            selected = PatternGroup(group.strip().lower().replace("-", "_"))
        except ValueError as exc:
            choices = ", ".join(item.value for item in PatternGroup)
            raise typer.BadParameter(f"group must be one of: {choices}") from exc

    rows = describe_patterns(state.library.patterns(selected))

    if state.json_output:
        print_json_payload(state, {"patterns": rows, "total": len(rows)})
        return

    if state.plain_output:
        typer.echo("group\tid\tregex")
        for row in rows:
            typer.echo(f"{row['group']}\t{row['id']}\t{row['regex']}")
        return

    table = Table(title=f"Pattern library ({len(rows)} patterns)")
    table.add_column("Precedence", justify="right")
    table.add_column("Group")
    table.add_column("Id")
    table.add_column("Regex")
    for row in rows:
        group_value = PatternGroup(row["group"])
        table.add_row(
            str(group_value.precedence + 1),
            GROUP_LABELS[group_value.value],
            row["id"],
            Text(row["regex"]),
        )
    state.console.print(table)

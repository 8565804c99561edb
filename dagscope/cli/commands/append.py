"""``dagscope append DB TYPE VALUE``: write one event to the log."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console

from dagscope.core.event_log import EventLog, EventLogError

console = Console()


def _parse_value(raw: str) -> Any:
    """Decode VALUE as JSON when possible, otherwise keep the raw string."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def append_cmd(
    db: Path = typer.Argument(..., help="Path to the event log SQLite database."),
    event_type: str = typer.Argument(..., metavar="TYPE", help="Event kind, e.g. create."),
    value: str = typer.Argument(..., help="Payload; parsed as JSON when valid."),
    item: Optional[str] = typer.Option(None, "--item", "-i", help="Owning item id."),
    parent: Optional[int] = typer.Option(
        None, "--parent", "-p", help="Causal parent event id (omit for root)."
    ),
    event_id: Optional[int] = typer.Option(
        None, "--id", help="Explicit event id (default: next free id)."
    ),
) -> None:
    """Append an event to the causal log."""
    log = EventLog(db)
    try:
        row = log.append(
            event_type,
            _parse_value(value),
            item_id=item,
            parent_id=parent,
            event_id=event_id,
        )
    except EventLogError as exc:
        console.print(f"[bold red]Append failed:[/bold red] {exc}")
        raise typer.Exit(code=1)

    parent_display = row.parent_id if row.parent_id is not None else "ROOT"
    console.print(
        f"[green]Appended event[/green] [cyan]{row.event_id}[/cyan] "
        f"[dim](parent {parent_display})[/dim]"
    )

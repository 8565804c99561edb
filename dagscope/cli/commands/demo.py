"""``dagscope demo``: replay a synthetic todo-list session into a live view.

Appends one event at a time to a demo log and redraws the DAG after
each write, so every step shows a full clear, re-layout and re-fit.
"""

from __future__ import annotations

import time
from pathlib import Path

import typer
from rich.console import Console
from rich.live import Live
from rich.panel import Panel

from dagscope.cli.commands._shared import open_view
from dagscope.config import config
from dagscope.core.event_log import EventLog
from dagscope.core.graph_builder import build_snapshot
from dagscope.core.live_query import LiveQuery
from dagscope.view.renderer import DagRenderer

console = Console()

# (type, value, item_id, index of the parent step or None for root)
_DEMO_SCRIPT: list[tuple[str, object, int, int | None]] = [
    ("create", "buy milk", 1700000001234, None),
    ("create", "walk dog", 1700000005678, None),
    ("modify", "buy oat milk", 1700000001234, 0),
    ("complete", True, 1700000005678, 1),
    ("modify", "buy 2x oat milk", 1700000001234, 2),
    ("delete", None, 1700000005678, 3),
    ("complete", True, 1700000001234, 4),
]


def demo_cmd(
    delay: float = typer.Option(
        0.5,
        "--delay",
        "-d",
        help="Delay in seconds between appended events.",
    ),
    db: Path = typer.Option(
        Path(".dagscope/demo-events.db"),
        "--db",
        help="Path to the demo event log (uses demo-specific default).",
    ),
    node_name: str = typer.Option("demo", "--node-name", "-n"),
) -> None:
    """Replay a synthetic session, redrawing the DAG after every event."""
    log = EventLog(db)
    query = LiveQuery(log, transform=build_snapshot)
    renderer = DagRenderer(console=console)

    console.print()
    console.print(
        Panel(
            "[bold]dagscope demo[/bold]\n\n"
            "Appending events one at a time.\n"
            "The DAG is rebuilt and re-laid out after each write.",
            border_style="cyan",
            padding=(1, 2),
        )
    )

    appended: list[int] = []
    with open_view(config.layout_name, console) as view:
        unsubscribe = query.subscribe(view.render)
        try:
            with Live(console=console, transient=False) as live:
                for event_type, value, item_id, parent_step in _DEMO_SCRIPT:
                    parent_id = appended[parent_step] if parent_step is not None else None
                    row = log.append(event_type, value, item_id=item_id, parent_id=parent_id)
                    appended.append(row.event_id)
                    query.refresh()
                    live.update(renderer.render_view(view, node_name))
                    time.sleep(delay)
        finally:
            unsubscribe()

    console.print(
        f"[bold green]Demo complete:[/bold green] {len(appended)} events in {db}"
    )

"""``dagscope watch DB``: live view that re-lays out on every log change.

The view is a pure projection of the event log: each tick re-checks the
log and, when it changed, rebuilds the whole graph from every row.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from dagscope.cli.commands._shared import open_view, require_db
from dagscope.config import config
from dagscope.core.event_log import EventLog
from dagscope.core.graph_builder import build_snapshot
from dagscope.core.live_query import LiveQuery
from dagscope.view.renderer import DagRenderer

console = Console()


def watch_cmd(
    db: Path = typer.Argument(
        config.db_path,
        help="Path to the event log SQLite database.",
    ),
    node_name: str = typer.Option(
        "local",
        "--node-name",
        "-n",
        help="Name of the replica shown in the title.",
    ),
    layout: str = typer.Option(
        config.layout_name,
        "--layout",
        help="Layout algorithm (dagre, circle, grid).",
    ),
    refresh_hz: float = typer.Option(
        config.refresh_hz,
        "--refresh",
        "-r",
        help="Refresh rate in Hz.",
    ),
) -> None:
    """Watch the event DAG live (Ctrl+C to exit)."""
    require_db(db, console)

    log = EventLog(db)
    query = LiveQuery(log, transform=build_snapshot)
    renderer = DagRenderer(console=console)

    console.print(
        f"[dim]Watching {db} at {refresh_hz} Hz. Press Ctrl+C to exit.[/dim]"
    )
    with open_view(layout, console) as view:
        renderer.render_live(query, view, node_name, refresh_hz=refresh_hz)

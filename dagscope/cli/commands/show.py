"""``dagscope show DB``: render the event DAG once and exit."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from dagscope.cli.commands._shared import open_view, require_db
from dagscope.config import config
from dagscope.core.event_log import EventLog
from dagscope.core.graph_builder import build_snapshot
from dagscope.view.renderer import DagRenderer

console = Console()


def show_cmd(
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
) -> None:
    """Render the current event DAG as a single frame."""
    require_db(db, console)

    log = EventLog(db)
    renderer = DagRenderer(console=console)
    with open_view(layout, console) as view:
        view.render(build_snapshot(log.fetch_rows()))
        renderer.print_view(view, node_name)

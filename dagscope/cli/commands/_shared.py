"""Helpers shared by the CLI commands: engine setup and view wiring."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from dagscope.config import config
from dagscope.engine import LayoutRegistry, configure_engine
from dagscope.view.live_view import LiveGraphView


def open_view(layout_name: str, console: Console) -> LiveGraphView:
    """Configure the engine once and return a view bound to the config surface.

    Exits with code 2 when ``layout_name`` is not a registered layout.
    """
    registry = LayoutRegistry()
    factory = configure_engine(registry)
    if layout_name not in registry:
        console.print(f"[bold red]Unknown layout:[/bold red] {layout_name}")
        console.print(f"[dim]Available: {', '.join(registry.names())}[/dim]")
        raise typer.Exit(code=2)

    surface = config.surface
    return LiveGraphView(
        factory,
        lambda: surface,
        layout_name=layout_name,
        fit_padding=config.fit_padding,
        overlay_blocks_pointer=config.overlay_blocks_pointer,
    )


def require_db(db_path: Path, console: Console) -> None:
    """Exit with code 1 when the event log does not exist."""
    if not db_path.exists():
        console.print(f"[bold red]Event log not found:[/bold red] {db_path}")
        console.print("[dim]Create one with: dagscope append or dagscope demo[/dim]")
        raise typer.Exit(code=1)

"""Rich terminal presentation for the live DAG view.

Wraps the engine's canvas in a titled panel (``DAG - <node name>``) with
a status footer, and drives continuous ``Rich.Live`` mode from a
:class:`~dagscope.core.live_query.LiveQuery`.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from rich.console import Console, Group, RenderableType
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from dagscope.view.live_view import ViewState

if TYPE_CHECKING:
    from dagscope.core.live_query import LiveQuery
    from dagscope.models.graph import Snapshot
    from dagscope.view.live_view import LiveGraphView


_STATE_STYLES: dict[ViewState, str] = {
    ViewState.UNINITIALIZED: "yellow",
    ViewState.READY: "green",
    ViewState.RELEASED: "dim",
}


class DagRenderer:
    """Renders a :class:`LiveGraphView` as Rich terminal output.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    # ------------------------------------------------------------------
    # Single frame
    # ------------------------------------------------------------------

    def render_view(self, view: LiveGraphView, node_name: str) -> Panel:
        """Render the view's current frame as a Rich Panel."""
        body: RenderableType
        if view.state is ViewState.READY and view.engine is not None:
            body = view.engine  # type: ignore[assignment]
        else:
            body = Text("Waiting for render surface...", style="dim italic")

        snapshot = view.snapshot
        node_count = len(snapshot.nodes) if snapshot else 0
        edge_count = len(snapshot.edges) if snapshot else 0
        state_style = _STATE_STYLES.get(view.state, "")

        summary_parts: list[str] = [
            f"[bold]Nodes:[/bold] {node_count}",
            f"[bold]Edges:[/bold] {edge_count}",
            f"[bold]Layout:[/bold] {view.layout_name}",
            f"[bold]State:[/bold] [{state_style}]{view.state.value}[/{state_style}]",
        ]
        if view.overlay_blocks_pointer:
            summary_parts.append("[dim]pointer: blocked[/dim]")
        summary = "  |  ".join(summary_parts)

        return Panel(
            Group(body, Text(""), Text.from_markup(summary)),
            title=f"[bold]DAG - {node_name}[/bold]",
            border_style="blue",
            expand=False,
        )

    def print_view(self, view: LiveGraphView, node_name: str) -> None:
        """Print a single frame to the console."""
        self.console.print(self.render_view(view, node_name))

    # ------------------------------------------------------------------
    # Continuous live rendering
    # ------------------------------------------------------------------

    def render_live(
        self,
        query: LiveQuery[Snapshot],
        view: LiveGraphView,
        node_name: str,
        *,
        refresh_hz: float = 2.0,
        max_frames: int | None = None,
    ) -> None:
        """Continuously render the view in Rich Live mode.

        Each tick refreshes the query (which renders new snapshots into
        the view), retries a deferred mount, then redraws the panel.
        Press Ctrl+C to stop.

        Parameters
        ----------
        query:
            Live query delivering Snapshots.
        view:
            The view to keep in sync.  Subscribed for the duration.
        node_name:
            Shown in the panel title.
        refresh_hz:
            Ticks per second.  Default is 2.0.
        max_frames:
            Stop after this many ticks.  Runs until interrupted when None.
        """
        interval = 1.0 / max(refresh_hz, 0.1)
        unsubscribe = query.subscribe(view.render)
        frames = 0

        try:
            with Live(
                console=self.console,
                refresh_per_second=max(refresh_hz, 0.1),
                transient=False,
            ) as live:
                try:
                    while max_frames is None or frames < max_frames:
                        query.refresh()
                        view.render()
                        live.update(self.render_view(view, node_name))
                        frames += 1
                        if max_frames is None or frames < max_frames:
                            time.sleep(interval)
                except KeyboardInterrupt:
                    # Final frame on exit
                    live.update(self.render_view(view, node_name))
        finally:
            unsubscribe()

"""Graph engine contract consumed by LiveGraphView.

The view treats the engine as an opaque capability.  Elements cross the
boundary in the generic ``{"group": ..., "data": {...}}`` shape produced
by :meth:`dagscope.models.graph.Snapshot.elements`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from dagscope.models.view import GraphStyle, RenderSurface

Element = dict[str, Any]
LabelRenderer = Callable[[dict[str, Any]], str]


class EngineError(RuntimeError):
    """Raised by an engine for failures the view does not recover from."""


class UnknownLayoutError(EngineError):
    """Raised when a layout name has not been registered."""


@runtime_checkable
class GraphEngine(Protocol):
    """Capability the view drives to draw the DAG."""

    def initialize(
        self,
        container: RenderSurface,
        elements: list[Element],
        style: GraphStyle,
        layout_name: str,
    ) -> None:
        """Bind to a surface, add the initial elements and run a layout."""
        ...

    def replace_elements(self, elements: list[Element]) -> None:
        """Remove every element and add ``elements`` in their place."""
        ...

    def run_layout(self, layout_name: str) -> None:
        """Recompute node positions synchronously."""
        ...

    def fit_to_contents(self, padding: float = 0) -> None:
        """Center the viewport on the elements and zoom to fit them."""
        ...

    def attach_label_overlay(self, selector: str, renderer: LabelRenderer) -> None:
        """Draw ``renderer(data)`` centered on every element matching ``selector``."""
        ...

    def node_at(self, x: float, y: float) -> str | None:
        """Return the id of the node under surface point ``(x, y)``."""
        ...

    def destroy(self) -> None:
        """Release the engine.  No further calls are valid."""
        ...


EngineFactory = Callable[[], GraphEngine]

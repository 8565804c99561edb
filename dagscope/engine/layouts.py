"""Layout algorithms and the registry the engine resolves them from.

Every layout takes a ``networkx.DiGraph`` and returns model-space
positions keyed by node id.  Model space is unbounded; the engine maps
it onto the surface when fitting the viewport.
"""

from __future__ import annotations

import math
from collections.abc import Callable

import networkx as nx

from dagscope.engine.base import UnknownLayoutError

Position = tuple[float, float]
LayoutFn = Callable[[nx.DiGraph], dict[str, Position]]

# Separation between ranks and between siblings, in model units
RANK_SEP = 50.0
NODE_SEP = 50.0
# Approximate model width of one label character
LABEL_CHAR_WIDTH = 5.0

DEFAULT_LAYOUT = "dagre"


def _insertion_index(graph: nx.DiGraph) -> dict[str, int]:
    return {node: i for i, node in enumerate(graph.nodes)}


def layered_layout(graph: nx.DiGraph) -> dict[str, Position]:
    """Hierarchical layout for DAGs.

    Ranks come from ``networkx.topological_generations``: sources on the
    first rank, every other node one rank below its deepest parent's
    generation.  Ranks run top to bottom and siblings are centered on
    ``x = 0`` in insertion order.

    Raises
    ------
    networkx.NetworkXUnfeasible
        If the graph contains a cycle.
    """
    if graph.number_of_nodes() == 0:
        return {}

    order = _insertion_index(graph)
    widest_label = max(
        (len(str(data.get("label", ""))) for _, data in graph.nodes(data=True)),
        default=0,
    )
    node_sep = NODE_SEP + widest_label * LABEL_CHAR_WIDTH

    positions: dict[str, Position] = {}
    for rank, generation in enumerate(nx.topological_generations(graph)):
        layer = sorted(generation, key=order.__getitem__)
        span = (len(layer) - 1) * node_sep
        for i, node in enumerate(layer):
            positions[node] = (i * node_sep - span / 2.0, rank * RANK_SEP)
    return positions


def circle_layout(graph: nx.DiGraph) -> dict[str, Position]:
    """Place nodes evenly on a circle, in insertion order."""
    n = graph.number_of_nodes()
    if n == 0:
        return {}
    radius = max(RANK_SEP, n * NODE_SEP / (2 * math.pi))
    raw = nx.circular_layout(graph, scale=radius)
    return {node: (float(x), float(y)) for node, (x, y) in raw.items()}


def grid_layout(graph: nx.DiGraph) -> dict[str, Position]:
    """Row-major grid of ``ceil(sqrt(n))`` columns."""
    n = graph.number_of_nodes()
    if n == 0:
        return {}
    cols = math.ceil(math.sqrt(n))
    return {
        node: ((i % cols) * NODE_SEP, (i // cols) * RANK_SEP)
        for i, node in enumerate(graph.nodes)
    }


class LayoutRegistry:
    """Named layout functions available to engines."""

    def __init__(self) -> None:
        self._layouts: dict[str, LayoutFn] = {}

    def register(self, name: str, fn: LayoutFn) -> None:
        """Register (or replace) a layout under ``name``."""
        self._layouts[name] = fn

    def get(self, name: str) -> LayoutFn:
        """Resolve a layout by name.

        Raises
        ------
        UnknownLayoutError
            If no layout has been registered under ``name``.
        """
        try:
            return self._layouts[name]
        except KeyError:
            raise UnknownLayoutError(
                f"Unknown layout {name!r}. Registered: {', '.join(self.names()) or 'none'}"
            ) from None

    def names(self) -> list[str]:
        return sorted(self._layouts)

    def __contains__(self, name: object) -> bool:
        return name in self._layouts


def register_builtin_layouts(registry: LayoutRegistry) -> None:
    """Register the built-in layouts (``dagre``, ``circle``, ``grid``)."""
    registry.register(DEFAULT_LAYOUT, layered_layout)
    registry.register("circle", circle_layout)
    registry.register("grid", grid_layout)

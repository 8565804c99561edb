"""Terminal graph engine: networkx element store, Rich character canvas.

Elements live in a ``networkx.DiGraph``.  Layouts write model-space
positions; the viewport maps them to surface units with a zoom and pan
(``surface = model * zoom + pan``), and the canvas maps surface units to
character cells.

Drawing order
-------------
1. edges (bezier or straight) in the edge line colour
2. arrow glyphs at the target end of each edge
3. node glyphs in the node fill colour
4. overlay labels, centered on their node over the node fill
"""

from __future__ import annotations

import logging
import math
from typing import Any

import networkx as nx
from rich.style import Style
from rich.text import Text

from dagscope.engine.base import Element, EngineError, LabelRenderer
from dagscope.engine.layouts import DEFAULT_LAYOUT, LayoutRegistry, Position
from dagscope.models.view import ArrowShape, CurveStyle, GraphStyle, RenderSurface

logger = logging.getLogger(__name__)

MIN_ZOOM = 0.05
MAX_ZOOM = 2.0
# Perpendicular offset of the bezier control point, as a share of edge length
BEZIER_CURVATURE = 0.15

_LABEL_FOREGROUND = "bold white"


def _arrow_glyph(dx: float, dy: float) -> str:
    if abs(dx) >= abs(dy):
        return "▶" if dx >= 0 else "◀"
    return "▼" if dy >= 0 else "▲"


class TerminalGraphEngine:
    """Draws the DAG as a Rich renderable sized to a :class:`RenderSurface`.

    Parameters
    ----------
    layouts:
        Registry the engine resolves layout names from.
    """

    def __init__(self, layouts: LayoutRegistry) -> None:
        self._layouts = layouts
        self._graph: nx.DiGraph | None = None
        self._surface: RenderSurface | None = None
        self._style = GraphStyle()
        self._layout_name = DEFAULT_LAYOUT
        self._positions: dict[str, Position] = {}
        self._zoom = 1.0
        self._pan: Position = (0.0, 0.0)
        self._overlays: list[tuple[str, LabelRenderer]] = []
        self._destroyed = False

    # ------------------------------------------------------------------
    # Engine contract
    # ------------------------------------------------------------------

    def initialize(
        self,
        container: RenderSurface,
        elements: list[Element],
        style: GraphStyle,
        layout_name: str,
    ) -> None:
        self._check_alive()
        if self._graph is not None:
            raise EngineError("Engine is already initialized")

        self._surface = container
        self._style = style
        self._graph = nx.DiGraph()
        # Model origin starts at the surface center until the first fit
        self._pan = (container.width / 2.0, container.height / 2.0)
        self._add(elements)
        self.run_layout(layout_name)
        logger.debug(
            "Engine initialized on %dx%d surface with %d nodes, %d edges",
            container.width,
            container.height,
            self.node_count,
            self.edge_count,
        )

    def replace_elements(self, elements: list[Element]) -> None:
        graph = self._require_graph()
        graph.clear()
        self._positions = {}
        self._add(elements)

    def run_layout(self, layout_name: str) -> None:
        graph = self._require_graph()
        layout = self._layouts.get(layout_name)
        self._positions = layout(graph)
        self._layout_name = layout_name

    def fit_to_contents(self, padding: float = 0) -> None:
        surface = self._require_surface()
        if not self._positions:
            return

        radius = self._style.node.radius
        xs = [p[0] for p in self._positions.values()]
        ys = [p[1] for p in self._positions.values()]
        min_x, max_x = min(xs) - radius, max(xs) + radius
        min_y, max_y = min(ys) - radius, max(ys) + radius

        avail_w = max(1.0, surface.width - 2 * padding)
        avail_h = max(1.0, surface.height - 2 * padding)
        zoom = min(avail_w / (max_x - min_x), avail_h / (max_y - min_y))
        self._zoom = min(MAX_ZOOM, max(MIN_ZOOM, zoom))

        center_x = (min_x + max_x) / 2.0
        center_y = (min_y + max_y) / 2.0
        self._pan = (
            surface.width / 2.0 - center_x * self._zoom,
            surface.height / 2.0 - center_y * self._zoom,
        )

    def attach_label_overlay(self, selector: str, renderer: LabelRenderer) -> None:
        self._check_alive()
        if selector != "node":
            raise EngineError(f"Unsupported overlay selector {selector!r}")
        self._overlays.append((selector, renderer))

    def node_at(self, x: float, y: float) -> str | None:
        self._require_graph()
        hit_radius = self._style.node.radius * self._zoom
        hit: str | None = None
        for node_id in self._positions:
            sx, sy = self.to_surface(node_id)
            if math.hypot(sx - x, sy - y) <= hit_radius:
                hit = node_id  # last drawn is on top
        return hit

    def destroy(self) -> None:
        if self._graph is not None:
            self._graph.clear()
        self._graph = None
        self._positions = {}
        self._overlays = []
        self._destroyed = True

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    @property
    def node_count(self) -> int:
        return self._graph.number_of_nodes() if self._graph is not None else 0

    @property
    def edge_count(self) -> int:
        return self._graph.number_of_edges() if self._graph is not None else 0

    @property
    def layout_name(self) -> str:
        return self._layout_name

    @property
    def zoom(self) -> float:
        return self._zoom

    @property
    def positions(self) -> dict[str, Position]:
        return dict(self._positions)

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def node_ids(self) -> list[str]:
        return list(self._graph.nodes) if self._graph is not None else []

    def edge_pairs(self) -> list[tuple[str, str]]:
        return list(self._graph.edges) if self._graph is not None else []

    def to_surface(self, node_id: str) -> Position:
        """Surface-unit position of a laid-out node."""
        x, y = self._positions[node_id]
        return (x * self._zoom + self._pan[0], y * self._zoom + self._pan[1])

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> Text:
        """Draw the current elements onto a character canvas."""
        surface = self._require_surface()
        graph = self._require_graph()
        cols, rows = surface.columns, surface.rows
        base = Style.parse(f"on {surface.background}")
        canvas: list[list[tuple[str, Style]]] = [
            [(" ", base) for _ in range(cols)] for _ in range(rows)
        ]

        def put(cx: int, cy: int, char: str, style: Style) -> None:
            if 0 <= cx < cols and 0 <= cy < rows:
                canvas[cy][cx] = (char, style)

        # Cells each node covers: its glyph plus any overlay label
        labels: dict[str, tuple[int, int, str]] = {}
        covered: dict[str, set[tuple[int, int]]] = {}
        for node_id, data in graph.nodes(data=True):
            if node_id not in self._positions:
                continue
            cx, cy = self._cell(*self.to_surface(node_id), surface)
            cells = {(cx, cy)}
            for _selector, renderer in self._overlays:
                label = renderer({"id": node_id, **data})
                if label:
                    start = cx - len(label) // 2
                    labels[node_id] = (start, cy, label)
                    cells.update((start + i, cy) for i in range(len(label)))
            covered[node_id] = cells

        edge_style = self._style.edge
        line = base + Style.parse(edge_style.line_color)
        arrow = base + Style.parse(edge_style.target_arrow_color)
        stroke = "•" if edge_style.width >= 3 else "·"
        for source, target in graph.edges:
            if source not in self._positions or target not in self._positions:
                continue
            points = self._edge_points(source, target, surface)
            for px, py in points:
                put(*self._cell(px, py, surface), stroke, line)
            if edge_style.target_arrow_shape == ArrowShape.TRIANGLE and len(points) > 2:
                tip = self._arrow_tip(points, covered[target], surface)
                if tip is not None:
                    (ax, ay), glyph = tip
                    put(*self._cell(ax, ay, surface), glyph, arrow)

        node_style = self._style.node
        fill = base + Style.parse(node_style.background_color)
        for node_id in self._positions:
            put(*self._cell(*self.to_surface(node_id), surface), node_style.glyph, fill)

        label_style = Style.parse(f"{_LABEL_FOREGROUND} on {node_style.background_color}")
        for start, cy, label in labels.values():
            for i, char in enumerate(label):
                put(start + i, cy, char, label_style)

        text = Text()
        for r, row in enumerate(canvas):
            for char, style in row:
                text.append(char, style)
            if r < rows - 1:
                text.append("\n")
        return text

    def __rich__(self) -> Text:
        return self.render()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _add(self, elements: list[Element]) -> None:
        graph = self._require_graph()
        edges: list[dict[str, Any]] = []
        for element in elements:
            data = dict(element.get("data", {}))
            if element.get("group") == "edges":
                edges.append(data)
            else:
                graph.add_node(data.pop("id"), **data)
        for data in edges:
            source, target = data.pop("source"), data.pop("target")
            if source not in graph or target not in graph:
                logger.warning(
                    "Skipping edge %s -> %s: endpoint not in graph", source, target
                )
                continue
            graph.add_edge(source, target, **data)

    def _edge_points(
        self, source: str, target: str, surface: RenderSurface
    ) -> list[Position]:
        (x0, y0), (x2, y2) = self.to_surface(source), self.to_surface(target)
        length = math.hypot(x2 - x0, y2 - y0)
        step = min(surface.cell_width, surface.cell_height) / 2.0
        samples = max(2, int(length / step))

        if self._style.edge.curve_style == CurveStyle.BEZIER and length > 0:
            # Control point pushed off the chord's midpoint
            nx_, ny_ = -(y2 - y0) / length, (x2 - x0) / length
            offset = length * BEZIER_CURVATURE
            x1 = (x0 + x2) / 2.0 + nx_ * offset
            y1 = (y0 + y2) / 2.0 + ny_ * offset
        else:
            x1, y1 = (x0 + x2) / 2.0, (y0 + y2) / 2.0

        points: list[Position] = []
        for i in range(samples + 1):
            t = i / samples
            u = 1.0 - t
            points.append((
                u * u * x0 + 2 * u * t * x1 + t * t * x2,
                u * u * y0 + 2 * u * t * y1 + t * t * y2,
            ))
        return points

    def _arrow_tip(
        self,
        points: list[Position],
        target_cells: set[tuple[int, int]],
        surface: RenderSurface,
    ) -> tuple[Position, str] | None:
        # Walk back from the target to the first point clear of its label
        for i in range(len(points) - 1, 0, -1):
            if self._cell(*points[i], surface) not in target_cells:
                px, py = points[i - 1]
                qx, qy = points[i]
                return points[i], _arrow_glyph(qx - px, qy - py)
        return None

    @staticmethod
    def _cell(x: float, y: float, surface: RenderSurface) -> tuple[int, int]:
        return (
            int(math.floor(x / surface.cell_width)),
            int(math.floor(y / surface.cell_height)),
        )

    def _check_alive(self) -> None:
        if self._destroyed:
            raise EngineError("Engine has been destroyed")

    def _require_graph(self) -> nx.DiGraph:
        self._check_alive()
        if self._graph is None:
            raise EngineError("Engine is not initialized")
        return self._graph

    def _require_surface(self) -> RenderSurface:
        self._require_graph()
        if self._surface is None:
            raise EngineError("Engine has no render surface")
        return self._surface

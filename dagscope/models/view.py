"""Presentation models: visual style and render surface."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class ArrowShape(str, Enum):
    """Glyph drawn at the target end of an edge."""

    TRIANGLE = "triangle"
    NONE = "none"


class CurveStyle(str, Enum):
    """How an edge is routed between its endpoints."""

    BEZIER = "bezier"
    STRAIGHT = "straight"


class NodeStyle(BaseModel):
    """Style applied to every node (selector ``node``)."""

    model_config = ConfigDict(frozen=True)

    background_color: str = "#11479e"
    glyph: str = "●"
    radius: float = 15.0  # surface units, used for hit-testing


class EdgeStyle(BaseModel):
    """Style applied to every edge (selector ``edge``)."""

    model_config = ConfigDict(frozen=True)

    width: int = 4
    line_color: str = "#9dbaea"
    target_arrow_color: str = "#9dbaea"
    target_arrow_shape: ArrowShape = ArrowShape.TRIANGLE
    curve_style: CurveStyle = CurveStyle.BEZIER


class GraphStyle(BaseModel):
    """Fixed visual style for the DAG view."""

    model_config = ConfigDict(frozen=True)

    node: NodeStyle = NodeStyle()
    edge: EdgeStyle = EdgeStyle()
    box_selection_enabled: bool = False
    autounselectify: bool = True


class RenderSurface(BaseModel):
    """Fixed-size rectangular viewport the graph is drawn into.

    ``width`` and ``height`` are surface units.  The terminal engine maps
    one character cell to ``cell_width`` x ``cell_height`` units.
    """

    model_config = ConfigDict(frozen=True)

    width: int = 425
    height: int = 500
    cell_width: int = 5
    cell_height: int = 10
    background: str = "black"

    @property
    def columns(self) -> int:
        return max(1, self.width // self.cell_width)

    @property
    def rows(self) -> int:
        return max(1, self.height // self.cell_height)


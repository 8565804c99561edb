"""dagscope data models: all Pydantic v2, all frozen (immutable)."""

from dagscope.models.events import EventRow
from dagscope.models.graph import ROOT_ID, ROOT_LABEL, GraphEdge, GraphNode, Snapshot
from dagscope.models.view import (
    ArrowShape,
    CurveStyle,
    EdgeStyle,
    GraphStyle,
    NodeStyle,
    RenderSurface,
)

__all__ = [
    # events
    "EventRow",
    # graph
    "ROOT_ID",
    "ROOT_LABEL",
    "GraphNode",
    "GraphEdge",
    "Snapshot",
    # view
    "ArrowShape",
    "CurveStyle",
    "NodeStyle",
    "EdgeStyle",
    "GraphStyle",
    "RenderSurface",
]

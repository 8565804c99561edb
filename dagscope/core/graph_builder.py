"""GraphBuilder: assembles a full Snapshot from the current row set."""

from __future__ import annotations

from collections.abc import Iterable

from dagscope.core.row_projector import project_row
from dagscope.models.events import EventRow
from dagscope.models.graph import ROOT_ID, ROOT_LABEL, GraphEdge, GraphNode, Snapshot


def build_snapshot(rows: Iterable[EventRow]) -> Snapshot:
    """Build a Snapshot from the full row set (not a diff).

    The synthetic root is always the first node, whether or not any row
    references it.  Rows are projected in input order; duplicate event
    ids are not filtered, so callers must guarantee uniqueness.

    Parameters
    ----------
    rows:
        Every row currently in the event log.

    Returns
    -------
    Snapshot
        ``len(rows) + 1`` nodes and one edge per row with a parent.
    """
    nodes: list[GraphNode] = [GraphNode(id=ROOT_ID, label=ROOT_LABEL)]
    edges: list[GraphEdge] = []

    for row in rows:
        node, edge = project_row(row)
        nodes.append(node)
        if edge is not None:
            edges.append(edge)

    return Snapshot(nodes=nodes, edges=edges)

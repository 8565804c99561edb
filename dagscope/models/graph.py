"""Graph snapshot models: the value handed from GraphBuilder to the view.

A ``Snapshot`` is computed in full on every data refresh.  It is never
persisted and never patched: it is consumed by the view and discarded.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

ROOT_ID = "ROOT"
ROOT_LABEL = "ROOT"


class GraphNode(BaseModel):
    """A renderable node.  ``id`` is ``"ROOT"`` or the decimal event id."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str


class GraphEdge(BaseModel):
    """A directed parent -> child edge."""

    model_config = ConfigDict(frozen=True)

    source: str
    target: str


class Snapshot(BaseModel):
    """Complete ``{nodes, edges}`` view of the DAG at one point in time.

    Node and edge order is the insertion order of the rows the snapshot
    was built from.  No sorting or deduplication is applied.
    """

    model_config = ConfigDict(frozen=True)

    nodes: list[GraphNode] = []
    edges: list[GraphEdge] = []

    @property
    def node_ids(self) -> list[str]:
        return [n.id for n in self.nodes]

    def structurally_equal(self, other: Snapshot) -> bool:
        """Compare node and edge sets, ignoring order."""
        return (
            set(self.nodes) == set(other.nodes)
            and set(self.edges) == set(other.edges)
        )

    def elements(self) -> list[dict[str, Any]]:
        """Return the engine element list (nodes first, then edges).

        Each element is ``{"group": "nodes"|"edges", "data": {...}}``.
        """
        result: list[dict[str, Any]] = [
            {"group": "nodes", "data": {"id": n.id, "label": n.label}}
            for n in self.nodes
        ]
        result.extend(
            {"group": "edges", "data": {"source": e.source, "target": e.target}}
            for e in self.edges
        )
        return result

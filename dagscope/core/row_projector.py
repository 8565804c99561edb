"""RowProjector: maps one EventRow to a node and an optional edge.

Projection never fails on missing optional fields: an absent ``item_id``
yields an empty label prefix and an absent ``parent_id`` yields no edge.
"""

from __future__ import annotations

import math
from typing import Any

from dagscope.models.events import EventRow
from dagscope.models.graph import GraphEdge, GraphNode

ITEM_SUFFIX_LEN = 4


def _display(value: Any) -> str:
    """Format a payload value the way a template string would.

    Integral floats drop their fraction (``3.0`` -> ``"3"``), lists join
    their items with commas (``None`` items become empty) and objects
    show as ``"[object Object]"``.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else _display(item) for item in value)
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


def item_suffix(item_id: int | str | None) -> str:
    """Last four characters of the item id, or ``""`` when absent."""
    text = "" if item_id is None else str(item_id)
    return text[-ITEM_SUFFIX_LEN:]


def node_label(row: EventRow) -> str:
    """Build the display label ``"<itemSuffix>: [<type>, <value>]"``."""
    return f"{item_suffix(row.item_id)}: [{row.type}, {_display(row.value)}]"


def project_row(row: EventRow) -> tuple[GraphNode, GraphEdge | None]:
    """Project a row into exactly one node and zero or one edge.

    Ids are converted through ``int`` so identifiers past 2**53 keep
    their exact decimal form.
    """
    node_id = str(row.event_id)
    node = GraphNode(id=node_id, label=node_label(row))
    edge = None
    if row.has_parent:
        edge = GraphEdge(source=str(row.parent_id), target=node_id)
    return node, edge

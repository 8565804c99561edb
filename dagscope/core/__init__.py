"""Core: event log persistence, live query, and snapshot derivation."""

from dagscope.core.event_log import EventLog, EventLogError
from dagscope.core.graph_builder import build_snapshot
from dagscope.core.live_query import LiveQuery
from dagscope.core.row_projector import node_label, project_row

__all__ = [
    "EventLog",
    "EventLogError",
    "LiveQuery",
    "build_snapshot",
    "node_label",
    "project_row",
]

"""dagscope: live visualization of a causal event DAG.

Rows from a relational event log (event + parent link) are projected
into a graph snapshot on every change, and a live view re-lays out and
re-fits the drawing after each full rebuild.
"""

__version__ = "0.1.0"

from dagscope.core.graph_builder import build_snapshot
from dagscope.core.live_query import LiveQuery
from dagscope.view.live_view import LiveGraphView

__all__ = ["LiveGraphView", "LiveQuery", "build_snapshot", "__version__"]

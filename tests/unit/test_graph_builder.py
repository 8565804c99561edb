"""Tests for GraphBuilder: full snapshot from the full row set."""

from __future__ import annotations

from dagscope.core.graph_builder import build_snapshot
from dagscope.models.graph import ROOT_ID


class TestBuildSnapshot:
    def test_empty_rows_yield_root_only(self):
        snap = build_snapshot([])
        assert snap.node_ids == [ROOT_ID]
        assert snap.nodes[0].label == "ROOT"
        assert snap.edges == []

    def test_node_count_is_rows_plus_root(self, make_row):
        rows = [make_row(event_id=i, parent_id=i - 1 if i > 1 else None) for i in range(1, 6)]
        snap = build_snapshot(rows)
        assert len(snap.nodes) == len(rows) + 1
        assert snap.node_ids.count(ROOT_ID) == 1

    def test_one_edge_per_parented_row(self, make_row):
        rows = [
            make_row(event_id=1),
            make_row(event_id=2, parent_id=1),
            make_row(event_id=3, parent_id=1),
            make_row(event_id=4),
        ]
        snap = build_snapshot(rows)
        pairs = [(e.source, e.target) for e in snap.edges]
        assert pairs == [("1", "2"), ("1", "3")]

    def test_root_is_first_and_rows_keep_input_order(self, make_row):
        rows = [make_row(event_id=9), make_row(event_id=3), make_row(event_id=5)]
        assert build_snapshot(rows).node_ids == ["ROOT", "9", "3", "5"]

    def test_edge_targets_are_snapshot_nodes(self, make_row):
        rows = [make_row(event_id=1), make_row(event_id=2, parent_id=1)]
        snap = build_snapshot(rows)
        ids = set(snap.node_ids)
        assert all(e.target in ids for e in snap.edges)

    def test_duplicate_event_ids_not_deduplicated(self, make_row):
        snap = build_snapshot([make_row(event_id=1), make_row(event_id=1)])
        assert snap.node_ids == ["ROOT", "1", "1"]

    def test_idempotent(self, make_row):
        rows = [make_row(event_id=1), make_row(event_id=2, parent_id=1, value="y")]
        assert build_snapshot(rows).structurally_equal(build_snapshot(rows))

    def test_accepts_any_iterable(self, make_row):
        snap = build_snapshot(make_row(event_id=i) for i in range(3))
        assert len(snap.nodes) == 4

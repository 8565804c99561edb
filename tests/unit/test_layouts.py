"""Tests for the layout functions and the LayoutRegistry."""

from __future__ import annotations

import math

import networkx as nx
import pytest

from dagscope.engine.base import UnknownLayoutError
from dagscope.engine.layouts import (
    DEFAULT_LAYOUT,
    LABEL_CHAR_WIDTH,
    NODE_SEP,
    RANK_SEP,
    LayoutRegistry,
    circle_layout,
    grid_layout,
    layered_layout,
)


def _graph(nodes: list[tuple[str, str]], edges: list[tuple[str, str]]) -> nx.DiGraph:
    graph = nx.DiGraph()
    for node_id, label in nodes:
        graph.add_node(node_id, label=label)
    graph.add_edges_from(edges)
    return graph


class TestLayeredLayout:
    def test_empty_graph(self):
        assert layered_layout(nx.DiGraph()) == {}

    def test_sources_share_the_first_rank(self):
        graph = _graph([("ROOT", "ROOT"), ("1", "abcd"), ("2", "ab")], [("1", "2")])
        pos = layered_layout(graph)
        assert pos["ROOT"][1] == 0
        assert pos["1"][1] == 0
        assert pos["2"][1] == RANK_SEP

    def test_rank_is_centered_in_insertion_order(self):
        graph = _graph([("ROOT", "ROOT"), ("1", "abcd")], [])
        pos = layered_layout(graph)
        sep = NODE_SEP + 4 * LABEL_CHAR_WIDTH
        assert pos["ROOT"] == (-sep / 2, 0)
        assert pos["1"] == (sep / 2, 0)

    def test_single_child_under_origin(self):
        graph = _graph([("1", "a"), ("2", "b")], [("1", "2")])
        pos = layered_layout(graph)
        assert pos["1"] == (0, 0)
        assert pos["2"] == (0, RANK_SEP)

    def test_chain_depth(self):
        graph = _graph(
            [("1", "a"), ("2", "b"), ("3", "c")],
            [("1", "2"), ("2", "3")],
        )
        pos = layered_layout(graph)
        assert [pos[n][1] for n in ("1", "2", "3")] == [0, RANK_SEP, 2 * RANK_SEP]

    def test_cycle_raises(self):
        graph = _graph([("1", "a"), ("2", "b")], [("1", "2"), ("2", "1")])
        with pytest.raises(nx.NetworkXUnfeasible):
            layered_layout(graph)


class TestCircleLayout:
    def test_empty_graph(self):
        assert circle_layout(nx.DiGraph()) == {}

    def test_nodes_on_a_common_radius(self):
        graph = _graph([(str(i), str(i)) for i in range(4)], [])
        pos = circle_layout(graph)
        radii = [math.hypot(x, y) for x, y in pos.values()]
        assert radii == pytest.approx([RANK_SEP] * 4, rel=1e-5)

    def test_positions_are_plain_floats(self):
        graph = _graph([("a", "a"), ("b", "b")], [])
        for x, y in circle_layout(graph).values():
            assert type(x) is float
            assert type(y) is float


class TestGridLayout:
    def test_empty_graph(self):
        assert grid_layout(nx.DiGraph()) == {}

    def test_row_major_placement(self):
        graph = _graph([(str(i), str(i)) for i in range(5)], [])
        pos = grid_layout(graph)
        assert pos["0"] == (0, 0)
        assert pos["2"] == (2 * NODE_SEP, 0)
        assert pos["3"] == (0, RANK_SEP)
        assert pos["4"] == (NODE_SEP, RANK_SEP)


class TestLayoutRegistry:
    def test_builtins_registered(self, layouts: LayoutRegistry):
        assert layouts.names() == ["circle", "dagre", "grid"]
        assert DEFAULT_LAYOUT in layouts

    def test_get_returns_function(self, layouts: LayoutRegistry):
        assert layouts.get("dagre") is layered_layout

    def test_unknown_layout_raises(self, layouts: LayoutRegistry):
        with pytest.raises(UnknownLayoutError, match="nope"):
            layouts.get("nope")

    def test_register_replaces(self):
        registry = LayoutRegistry()
        registry.register("custom", grid_layout)
        registry.register("custom", circle_layout)
        assert registry.get("custom") is circle_layout

    def test_empty_registry(self):
        registry = LayoutRegistry()
        assert registry.names() == []
        assert "dagre" not in registry

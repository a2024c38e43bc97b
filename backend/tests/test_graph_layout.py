"""Tests for app.services.graph_layout: layered positions by node type."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from app.services.graph_layout import calculate_node_positions


@dataclass
class _Node:
    id: str
    node_type: str


class TestCalculateNodePositions:
    def test_empty_input(self):
        assert calculate_node_positions([]) == {}

    def test_single_note(self):
        pos = calculate_node_positions([_Node("n1", "note")])["n1"]
        # width 800, one slot: (800 - 800) / 2 + 100 + 0
        assert (pos.x, pos.y) == (100, 50)

    @pytest.mark.parametrize(
        ("node_type", "y"),
        [
            ("note", 50),
            ("book", 180),
            ("passage", 320),
            ("theme", 460),
            ("person", 600),
            ("place", 740),
        ],
    )
    def test_layer_rows(self, node_type, y):
        assert calculate_node_positions([_Node("x", node_type)])["x"].y == y

    def test_layer_ordering(self):
        positions = calculate_node_positions(
            [_Node("p", "person"), _Node("b", "book"), _Node("n", "note")]
        )
        assert positions["n"].y < positions["b"].y < positions["p"].y

    def test_spread_within_base_width(self):
        nodes = [_Node(f"t{i}", "theme") for i in range(4)]
        positions = calculate_node_positions(nodes)
        # 4 * 120 < 800 -> width 800, step 200
        assert [positions[f"t{i}"].x for i in range(4)] == [100, 300, 500, 700]

    def test_wide_layer_grows_and_recenters(self):
        nodes = [_Node(f"n{i}", "note") for i in range(5)]
        positions = calculate_node_positions(nodes)
        # width = 5 * 200 = 1000, offset = (800 - 1000) / 2 + 100 = 0, step 200
        assert [positions[f"n{i}"].x for i in range(5)] == [0, 200, 400, 600, 800]

    def test_unknown_types_get_extra_rows(self):
        positions = calculate_node_positions(
            [
                _Node("a1", "artifact"),
                _Node("n", "note"),
                _Node("e1", "event"),
                _Node("a2", "artifact"),
            ]
        )
        assert (positions["a1"].x, positions["a1"].y) == (100, 880)
        assert (positions["a2"].x, positions["a2"].y) == (250, 880)
        assert (positions["e1"].x, positions["e1"].y) == (100, 1030)

    def test_every_node_positioned_once(self):
        nodes = [_Node(f"id{i}", t) for i, t in enumerate(["note", "book", "odd", "place", "note"])]
        positions = calculate_node_positions(nodes)
        assert set(positions) == {n.id for n in nodes}

    def test_deterministic(self):
        nodes = [_Node(f"id{i}", t) for i, t in enumerate(["passage", "note", "passage", "x"])]
        assert calculate_node_positions(nodes) == calculate_node_positions(nodes)

    def test_relative_order_preserved_within_layer(self):
        nodes = [_Node("second", "book"), _Node("n", "note"), _Node("third", "book")]
        positions = calculate_node_positions(nodes)
        assert positions["second"].x < positions["third"].x

"""Layered layout heuristic for the study graph.

One horizontal row per node type, nodes spread across the row in input
order. Edges are not considered.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple, Protocol

from app.schemas.graph import LayoutPosition


class LayoutNode(Protocol):
    id: str
    node_type: str


class _Layer(NamedTuple):
    node_type: str
    y: float
    spacing: float


# Top to bottom.
LAYERS: tuple[_Layer, ...] = (
    _Layer("note", 50, 200),
    _Layer("book", 180, 180),
    _Layer("passage", 320, 150),
    _Layer("theme", 460, 120),
    _Layer("person", 600, 150),
    _Layer("place", 740, 150),
)

BASE_WIDTH = 800
LEFT_MARGIN = 100
EXTRA_ROWS_START_Y = 880
EXTRA_ROW_GAP = 150
EXTRA_ROW_SPACING = 150


def calculate_node_positions(nodes: Sequence[LayoutNode]) -> dict[str, LayoutPosition]:
    """Map each node id to canvas coordinates.

    Deterministic for a given input order. Types outside the known layers
    get extra rows below them, in order of first appearance.
    """
    groups: dict[str, list[LayoutNode]] = {}
    for node in nodes:
        groups.setdefault(str(node.node_type), []).append(node)

    positions: dict[str, LayoutPosition] = {}

    for layer in LAYERS:
        members = groups.get(layer.node_type, [])
        if not members:
            continue
        width = max(BASE_WIDTH, len(members) * layer.spacing)
        step = width / len(members)
        offset = (BASE_WIDTH - width) / 2 + LEFT_MARGIN
        for i, node in enumerate(members):
            positions[node.id] = LayoutPosition(x=offset + i * step, y=layer.y)

    known = {layer.node_type for layer in LAYERS}
    y = EXTRA_ROWS_START_Y
    for node_type, members in groups.items():
        if node_type in known:
            continue
        for i, node in enumerate(members):
            positions.setdefault(
                node.id, LayoutPosition(x=LEFT_MARGIN + i * EXTRA_ROW_SPACING, y=y)
            )
        y += EXTRA_ROW_GAP

    return positions

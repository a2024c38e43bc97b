"""Presentation of the stored graph: view model, edge-type mapping, export."""

from __future__ import annotations

import csv
import io
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from app.core.logging import get_logger
from app.schemas.graph import (
    GraphEdge,
    GraphNode,
    GraphView,
    GraphViewEdge,
    GraphViewNode,
    LayoutPosition,
)
from app.services.graph_layout import calculate_node_positions

if TYPE_CHECKING:
    from app.repositories.edge_repo import EdgeRepository
    from app.repositories.node_repo import NodeRepository

logger = get_logger(__name__)

# Storage edge type -> presentation edge type.
EDGE_TYPE_MAP: dict[str, str] = {
    "references": "contains",
    "theme_connection": "theme_connection",
    "mentions": "authored",
    "cross_ref": "cross_reference",
}

_ORIGIN = LayoutPosition(x=0, y=0)


def map_edge_type(storage_type: str) -> str:
    """Presentation type for a storage edge type. Unknown values pass through."""
    return EDGE_TYPE_MAP.get(storage_type, storage_type)


def build_graph_view(nodes: Sequence[GraphNode], edges: Sequence[GraphEdge]) -> GraphView:
    positions = calculate_node_positions(nodes)

    view_nodes = []
    for node in nodes:
        data: dict[str, Any] = {"label": node.label, "description": node.description}
        data.update(node.metadata or {})
        view_nodes.append(
            GraphViewNode(
                id=node.id,
                type=node.node_type.value,
                position=positions.get(node.id, _ORIGIN),
                data=data,
            )
        )

    view_edges = [
        GraphViewEdge(
            id=edge.id,
            source=edge.source_node_id,
            target=edge.target_node_id,
            type=map_edge_type(edge.edge_type.value),
        )
        for edge in edges
    ]
    return GraphView(nodes=view_nodes, edges=view_edges)


async def load_graph_view(
    user_id: str,
    node_repo: NodeRepository,
    edge_repo: EdgeRepository,
) -> GraphView:
    """Read every stored node and edge of a user and lay them out."""
    nodes = await node_repo.list_for_user(user_id)
    edges = await edge_repo.list_for_user(user_id)
    logger.debug("graph_view_loaded", user_id=user_id, nodes=len(nodes), edges=len(edges))
    return build_graph_view(nodes, edges)


def export_graph_json(view: GraphView) -> dict[str, list[dict[str, Any]]]:
    return {
        "nodes": [
            {
                "id": node.id,
                "type": node.type,
                "label": node.data.get("label"),
                "description": node.data.get("description"),
            }
            for node in view.nodes
        ],
        "edges": [
            {"source": edge.source, "target": edge.target, "type": edge.type}
            for edge in view.edges
        ],
    }


def export_graph_csv(view: GraphView) -> str:
    """Two CSV sections, ``# Nodes`` then ``# Edges``, every field quoted."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")

    buffer.write("# Nodes\n")
    buffer.write("id,type,label,description\n")
    for node in view.nodes:
        writer.writerow(
            [
                node.id,
                node.type or "",
                node.data.get("label") or "",
                node.data.get("description") or "",
            ]
        )

    buffer.write("\n# Edges\n")
    buffer.write("source,target,type\n")
    for edge in view.edges:
        writer.writerow([edge.source, edge.target, edge.type or ""])

    # No trailing newline after the last row.
    return buffer.getvalue().rstrip("\n")

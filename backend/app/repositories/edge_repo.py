"""Neo4j repository for graph edges.

Edges are LINKS relationships between GraphNode nodes. At most one edge
exists per (user_id, source, target), whatever its edge_type.
"""

from __future__ import annotations

import uuid
from typing import Any

from app.core.logging import get_logger
from app.repositories.base import Neo4jRepository
from app.schemas.graph import EdgeType, GraphEdge

logger = get_logger(__name__)

_EDGE_RETURN = """
RETURN r.id AS id,
       r.user_id AS user_id,
       s.id AS source_node_id,
       t.id AS target_node_id,
       r.edge_type AS edge_type,
       r.weight AS weight
"""


def _to_edge(row: dict[str, Any]) -> GraphEdge:
    return GraphEdge(
        id=row["id"],
        user_id=row["user_id"],
        source_node_id=row["source_node_id"],
        target_node_id=row["target_node_id"],
        edge_type=row["edge_type"],
        weight=row.get("weight") if row.get("weight") is not None else 1.0,
    )


class EdgeRepository(Neo4jRepository):
    """Repository for LINKS relationships between graph nodes."""

    async def exists(self, user_id: str, source_node_id: str, target_node_id: str) -> bool:  # type: ignore[override]
        """True if any edge of this user joins source -> target."""
        rows = await self.execute_read(
            """
            MATCH (s:GraphNode {id: $source_id})-[r:LINKS {user_id: $user_id}]->
                  (t:GraphNode {id: $target_id})
            RETURN count(r) > 0 AS exists
            """,
            {"user_id": user_id, "source_id": source_node_id, "target_id": target_node_id},
        )
        return rows[0]["exists"] if rows else False

    async def create_if_absent(
        self,
        user_id: str,
        source_node_id: str,
        target_node_id: str,
        edge_type: EdgeType,
        weight: float = 1.0,
    ) -> GraphEdge | None:
        """Create source -> target unless an edge already joins them.

        Returns:
            The new edge, or None if one already existed (of any type)
            or either endpoint is missing.
        """
        new_id = str(uuid.uuid4())
        rows = await self.execute_write(
            """
            MATCH (s:GraphNode {id: $source_id, user_id: $user_id})
            MATCH (t:GraphNode {id: $target_id, user_id: $user_id})
            MERGE (s)-[r:LINKS {user_id: $user_id}]->(t)
            ON CREATE SET
                r.id = $new_id,
                r.edge_type = $edge_type,
                r.weight = $weight,
                r.created_at = timestamp()
            RETURN r.id AS id,
                   r.user_id AS user_id,
                   s.id AS source_node_id,
                   t.id AS target_node_id,
                   r.edge_type AS edge_type,
                   r.weight AS weight,
                   r.id = $new_id AS created
            """,
            {
                "user_id": user_id,
                "source_id": source_node_id,
                "target_id": target_node_id,
                "new_id": new_id,
                "edge_type": edge_type.value,
                "weight": weight,
            },
        )
        if not rows:
            logger.warning(
                "graph_edge_endpoint_missing",
                source_node_id=source_node_id,
                target_node_id=target_node_id,
            )
            return None
        if not rows[0]["created"]:
            return None

        edge = _to_edge(rows[0])
        logger.info(
            "graph_edge_created",
            edge_id=edge.id,
            edge_type=edge.edge_type.value,
            source_node_id=source_node_id,
            target_node_id=target_node_id,
        )
        return edge

    async def create(
        self,
        user_id: str,
        source_node_id: str,
        target_node_id: str,
        edge_type: EdgeType,
        weight: float = 1.0,
    ) -> GraphEdge | None:
        """Create an edge unconditionally. None if an endpoint is missing."""
        rows = await self.execute_write(
            """
            MATCH (s:GraphNode {id: $source_id, user_id: $user_id})
            MATCH (t:GraphNode {id: $target_id, user_id: $user_id})
            CREATE (s)-[r:LINKS {
                id: $id,
                user_id: $user_id,
                edge_type: $edge_type,
                weight: $weight,
                created_at: timestamp()
            }]->(t)
            """
            + _EDGE_RETURN,
            {
                "id": str(uuid.uuid4()),
                "user_id": user_id,
                "source_id": source_node_id,
                "target_id": target_node_id,
                "edge_type": edge_type.value,
                "weight": weight,
            },
        )
        return _to_edge(rows[0]) if rows else None

    async def get(self, edge_id: str) -> GraphEdge | None:
        rows = await self.execute_read(
            "MATCH (s:GraphNode)-[r:LINKS {id: $id}]->(t:GraphNode)" + _EDGE_RETURN,
            {"id": edge_id},
        )
        return _to_edge(rows[0]) if rows else None

    async def list_for_user(self, user_id: str) -> list[GraphEdge]:
        rows = await self.execute_read(
            "MATCH (s:GraphNode)-[r:LINKS {user_id: $user_id}]->(t:GraphNode)"
            + _EDGE_RETURN
            + "ORDER BY r.created_at",
            {"user_id": user_id},
        )
        return [_to_edge(row) for row in rows]

    async def list_for_node(self, user_id: str, node_id: str) -> list[GraphEdge]:
        """Edges where the node is the source, then edges where it is the target."""
        outgoing = await self.execute_read(
            "MATCH (s:GraphNode {id: $node_id})-[r:LINKS {user_id: $user_id}]->(t:GraphNode)"
            + _EDGE_RETURN,
            {"user_id": user_id, "node_id": node_id},
        )
        incoming = await self.execute_read(
            "MATCH (s:GraphNode)-[r:LINKS {user_id: $user_id}]->(t:GraphNode {id: $node_id})"
            + _EDGE_RETURN,
            {"user_id": user_id, "node_id": node_id},
        )
        return [_to_edge(row) for row in [*outgoing, *incoming]]

    async def update_weight(self, edge_id: str, weight: float) -> GraphEdge | None:
        rows = await self.execute_write(
            "MATCH (s:GraphNode)-[r:LINKS {id: $id}]->(t:GraphNode) SET r.weight = $weight"
            + _EDGE_RETURN,
            {"id": edge_id, "weight": weight},
        )
        return _to_edge(rows[0]) if rows else None

    async def delete(self, edge_id: str) -> None:
        await self.execute_write(
            "MATCH ()-[r:LINKS {id: $id}]->() DELETE r",
            {"id": edge_id},
        )

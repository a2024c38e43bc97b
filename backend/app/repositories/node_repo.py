"""Neo4j repository for graph nodes.

A node's identity is (user_id, node_type, reference_id), not its id.
``upsert`` MERGEs on that key so repeated or concurrent calls resolve to
one stored node; an existing node is returned unmodified.
"""

from __future__ import annotations

import json
import uuid
from typing import Any

from app.core.logging import get_logger
from app.repositories.base import Neo4jRepository
from app.schemas.graph import GraphNode, NodeType

logger = get_logger(__name__)


def parse_node_metadata(raw: str | None) -> dict[str, Any] | None:
    """Decode the JSON metadata blob stored on a node. Invalid JSON -> None."""
    if not raw:
        return None
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        return None
    return value if isinstance(value, dict) else None


def _to_node(props: dict[str, Any]) -> GraphNode:
    return GraphNode(
        id=props["id"],
        user_id=props["user_id"],
        node_type=props["node_type"],
        reference_id=props.get("reference_id"),
        label=props.get("label") or "",
        description=props.get("description") or None,
        metadata=parse_node_metadata(props.get("metadata")),
    )


def _dump_metadata(metadata: dict[str, Any] | None) -> str:
    return json.dumps(metadata) if metadata else ""


class NodeRepository(Neo4jRepository):
    """Repository for GraphNode CRUD and idempotent upsert."""

    async def find_by_reference(
        self,
        user_id: str,
        node_type: NodeType,
        reference_id: str,
    ) -> GraphNode | None:
        rows = await self.execute_read(
            """
            MATCH (n:GraphNode {user_id: $user_id, node_type: $node_type,
                                reference_id: $reference_id})
            RETURN properties(n) AS node
            LIMIT 1
            """,
            {"user_id": user_id, "node_type": node_type.value, "reference_id": reference_id},
        )
        return _to_node(rows[0]["node"]) if rows else None

    async def upsert(
        self,
        user_id: str,
        node_type: NodeType,
        reference_id: str,
        label: str,
        description: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> tuple[GraphNode, bool]:
        """Return the node for this identity key, creating it if absent.

        Returns:
            (node, created) where created is False when the node already existed.
        """
        new_id = str(uuid.uuid4())
        rows = await self.execute_write(
            """
            MERGE (n:GraphNode {user_id: $user_id, node_type: $node_type,
                                reference_id: $reference_id})
            ON CREATE SET
                n.id = $new_id,
                n.label = $label,
                n.description = $description,
                n.metadata = $metadata,
                n.created_at = timestamp()
            RETURN properties(n) AS node, n.id = $new_id AS created
            """,
            {
                "user_id": user_id,
                "node_type": node_type.value,
                "reference_id": reference_id,
                "new_id": new_id,
                "label": label,
                "description": description or "",
                "metadata": _dump_metadata(metadata),
            },
        )
        if not rows:
            msg = f"MERGE returned no row for {node_type.value} node {reference_id!r}"
            raise RuntimeError(msg)

        node = _to_node(rows[0]["node"])
        created = bool(rows[0]["created"])
        if created:
            logger.info(
                "graph_node_created",
                node_id=node.id,
                node_type=node_type.value,
                reference_id=reference_id,
            )
        return node, created

    async def create(
        self,
        user_id: str,
        node_type: NodeType,
        label: str,
        reference_id: str | None = None,
        description: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> GraphNode:
        """Create a node unconditionally (no identity check)."""
        new_id = str(uuid.uuid4())
        rows = await self.execute_write(
            """
            CREATE (n:GraphNode {
                id: $id,
                user_id: $user_id,
                node_type: $node_type,
                reference_id: $reference_id,
                label: $label,
                description: $description,
                metadata: $metadata,
                created_at: timestamp()
            })
            RETURN properties(n) AS node
            """,
            {
                "id": new_id,
                "user_id": user_id,
                "node_type": node_type.value,
                "reference_id": reference_id,
                "label": label,
                "description": description or "",
                "metadata": _dump_metadata(metadata),
            },
        )
        if rows:
            return _to_node(rows[0]["node"])
        return GraphNode(
            id=new_id,
            user_id=user_id,
            node_type=node_type,
            reference_id=reference_id,
            label=label,
            description=description,
            metadata=metadata,
        )

    async def get(self, node_id: str) -> GraphNode | None:
        rows = await self.execute_read(
            "MATCH (n:GraphNode {id: $id}) RETURN properties(n) AS node",
            {"id": node_id},
        )
        return _to_node(rows[0]["node"]) if rows else None

    async def list_for_user(
        self,
        user_id: str,
        node_type: NodeType | None = None,
    ) -> list[GraphNode]:
        rows = await self.execute_read(
            """
            MATCH (n:GraphNode {user_id: $user_id})
            WHERE $node_type IS NULL OR n.node_type = $node_type
            RETURN properties(n) AS node
            ORDER BY n.created_at
            """,
            {"user_id": user_id, "node_type": node_type.value if node_type else None},
        )
        return [_to_node(row["node"]) for row in rows]

    async def update(
        self,
        node_id: str,
        label: str | None = None,
        description: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> GraphNode | None:
        """Update the editable fields of a node. None leaves a field unchanged."""
        updates: dict[str, Any] = {}
        if label is not None:
            updates["label"] = label
        if description is not None:
            updates["description"] = description
        if metadata is not None:
            updates["metadata"] = json.dumps(metadata)

        rows = await self.execute_write(
            """
            MATCH (n:GraphNode {id: $id})
            SET n += $updates
            RETURN properties(n) AS node
            """,
            {"id": node_id, "updates": updates},
        )
        return _to_node(rows[0]["node"]) if rows else None

    async def delete(self, node_id: str) -> None:
        """Delete a node and every edge touching it."""
        await self.execute_write(
            "MATCH (n:GraphNode {id: $id}) DETACH DELETE n",
            {"id": node_id},
        )

    async def delete_for_user(self, user_id: str) -> int:
        """Delete all graph nodes (and their edges) of a user. Returns nodes deleted."""
        rows = await self.execute_write(
            """
            MATCH (n:GraphNode {user_id: $user_id})
            WITH collect(n) AS nodes
            FOREACH (n IN nodes | DETACH DELETE n)
            RETURN size(nodes) AS deleted
            """,
            {"user_id": user_id},
        )
        deleted = rows[0]["deleted"] if rows else 0
        logger.info("graph_nodes_cleared", user_id=user_id, deleted=deleted)
        return deleted

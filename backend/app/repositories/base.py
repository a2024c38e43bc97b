"""Base repository for Neo4j data access.

Note, node and edge repositories share its read/write helpers. Writes
retry on transient errors; exists only accepts whitelisted labels
and properties.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.core.logging import get_logger
from app.core.resilience import retry_neo4j_write

if TYPE_CHECKING:
    from neo4j import AsyncDriver

logger = get_logger(__name__)


_VALID_LABELS = frozenset({"Note", "GraphNode"})

_VALID_PROPERTIES = frozenset(
    {
        "id",
        "user_id",
        "node_type",
        "reference_id",
        "label",
    }
)


class Neo4jRepository:
    """Base class for Neo4j repositories.

    Provides common query execution patterns with automatic
    session management and error logging.
    """

    def __init__(self, driver: AsyncDriver) -> None:
        self.driver = driver

    @staticmethod
    def _validate_label(label: str) -> str:
        """Validate a Neo4j label against the whitelist to prevent injection."""
        if label not in _VALID_LABELS:
            raise ValueError(f"Invalid Neo4j label: {label!r}")
        return label

    @staticmethod
    def _validate_property(prop: str) -> str:
        """Validate a property name against the whitelist to prevent injection."""
        if prop not in _VALID_PROPERTIES:
            raise ValueError(f"Invalid Neo4j property: {prop!r}")
        return prop

    async def execute_read(
        self,
        query: str,
        parameters: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Execute a read query and return results as list of dicts.

        Args:
            query: Cypher query string with $param placeholders.
            parameters: Query parameters.

        Returns:
            List of record dictionaries.
        """
        async with self.driver.session() as session:
            result = await session.run(query, parameters or {})
            records = await result.data()
            logger.debug(
                "neo4j_read",
                query=query[:100],
                param_count=len(parameters) if parameters else 0,
                result_count=len(records),
            )
            return records

    @retry_neo4j_write(max_attempts=4)
    async def execute_write(
        self,
        query: str,
        parameters: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Execute a write query within a transaction.

        Args:
            query: Cypher query string with $param placeholders.
            parameters: Query parameters.

        Returns:
            List of record dictionaries (if any RETURN clause).
        """
        async with self.driver.session() as session:
            result = await session.run(query, parameters or {})
            records = await result.data()
            summary = await result.consume()
            logger.debug(
                "neo4j_write",
                query=query[:100],
                nodes_created=summary.counters.nodes_created,
                relationships_created=summary.counters.relationships_created,
                properties_set=summary.counters.properties_set,
            )
            return records

    async def exists(self, label: str, property_name: str, value: Any) -> bool:
        """Check if a node exists with a given property value.

        Label and property_name are validated against whitelists
        to prevent Cypher injection.
        """
        safe_label = self._validate_label(label)
        safe_prop = self._validate_property(property_name)
        result = await self.execute_read(
            f"MATCH (n:{safe_label} {{{safe_prop}: $value}}) RETURN count(n) > 0 AS exists",
            {"value": value},
        )
        return result[0]["exists"] if result else False


GRAPH_SCHEMA_STATEMENTS: tuple[str, ...] = (
    "CREATE CONSTRAINT note_id IF NOT EXISTS FOR (n:Note) REQUIRE n.id IS UNIQUE",
    "CREATE CONSTRAINT graph_node_id IF NOT EXISTS FOR (n:GraphNode) REQUIRE n.id IS UNIQUE",
    # Identity key of a graph node; makes the MERGE upsert atomic.
    "CREATE CONSTRAINT graph_node_identity IF NOT EXISTS "
    "FOR (n:GraphNode) REQUIRE (n.user_id, n.node_type, n.reference_id) IS UNIQUE",
    "CREATE INDEX note_user IF NOT EXISTS FOR (n:Note) ON (n.user_id)",
    "CREATE INDEX graph_node_user IF NOT EXISTS FOR (n:GraphNode) ON (n.user_id)",
)


async def ensure_graph_schema(driver: AsyncDriver) -> None:
    """Create the constraints and indexes the graph repositories rely on."""
    async with driver.session() as session:
        for statement in GRAPH_SCHEMA_STATEMENTS:
            await session.run(statement)
    logger.info("graph_schema_ensured", statements=len(GRAPH_SCHEMA_STATEMENTS))

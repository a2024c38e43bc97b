"""Delete derived graph nodes and edges, for all users or one.

Notes are never touched; the graph can be rebuilt from them with
POST /api/graph/{user_id}/generate.

Usage:
    python scripts/clear_graph_data.py [--user-id USER] [--dry-run]
"""

from __future__ import annotations

import argparse
import asyncio

from neo4j import AsyncGraphDatabase

from app.config import settings
from app.repositories.node_repo import NodeRepository

_COUNT_QUERY = """
MATCH (n:GraphNode)
WHERE $user_id IS NULL OR n.user_id = $user_id
OPTIONAL MATCH (n)-[r:LINKS]->()
RETURN count(DISTINCT n) AS nodes, count(r) AS edges
"""

_DELETE_ALL_QUERY = """
MATCH (n:GraphNode)
WITH collect(n) AS nodes
FOREACH (n IN nodes | DETACH DELETE n)
RETURN size(nodes) AS deleted
"""


async def main(user_id: str | None, dry_run: bool) -> None:
    driver = AsyncGraphDatabase.driver(
        settings.neo4j_uri,
        auth=(settings.neo4j_user, settings.neo4j_password),
    )
    repo = NodeRepository(driver)
    scope = f"user {user_id!r}" if user_id else "ALL users"

    try:
        rows = await repo.execute_read(_COUNT_QUERY, {"user_id": user_id})
        counts = rows[0] if rows else {"nodes": 0, "edges": 0}
        print(f"Graph data for {scope}: {counts['nodes']} nodes, {counts['edges']} edges")

        if dry_run:
            print("Dry run: nothing deleted.")
            return

        if user_id:
            deleted = await repo.delete_for_user(user_id)
        else:
            result = await repo.execute_write(_DELETE_ALL_QUERY)
            deleted = result[0]["deleted"] if result else 0
        print(f"Deleted {deleted} nodes (and their edges).")
    finally:
        await driver.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Delete derived study-graph data")
    parser.add_argument("--user-id", help="Only clear this user's graph")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be deleted without actually deleting",
    )
    args = parser.parse_args()
    asyncio.run(main(args.user_id, args.dry_run))

"""Create the Neo4j constraints and indexes the graph relies on.

Idempotent (IF NOT EXISTS); safe to run on every deploy.

Usage: python scripts/init_schema.py
"""

from __future__ import annotations

import asyncio

from neo4j import AsyncGraphDatabase

from app.config import settings
from app.core.logging import setup_logging
from app.repositories.base import GRAPH_SCHEMA_STATEMENTS, ensure_graph_schema


async def main() -> None:
    setup_logging(log_level="INFO", log_format="console")

    driver = AsyncGraphDatabase.driver(
        settings.neo4j_uri,
        auth=(settings.neo4j_user, settings.neo4j_password),
    )
    try:
        await ensure_graph_schema(driver)
        print(f"Applied {len(GRAPH_SCHEMA_STATEMENTS)} schema statements to {settings.neo4j_uri}")
    finally:
        await driver.close()


if __name__ == "__main__":
    asyncio.run(main())

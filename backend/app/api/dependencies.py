"""FastAPI dependency injection.

Shared connections live on ``app.state`` (opened by the lifespan);
repositories are built per request on top of the Neo4j driver.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends, Request  # noqa: TC002 (needed at runtime for FastAPI DI)

from app.core.exceptions import ServiceUnavailableError
from app.repositories.edge_repo import EdgeRepository
from app.repositories.node_repo import NodeRepository
from app.repositories.note_repo import NoteRepository

if TYPE_CHECKING:
    from arq.connections import ArqRedis
    from neo4j import AsyncDriver


async def get_neo4j(request: Request) -> AsyncDriver:
    """Get Neo4j async driver from app state."""
    return request.app.state.neo4j_driver


async def get_arq_pool(request: Request) -> ArqRedis:
    """Get the arq pool for job enqueueing; 503 when the queue is down."""
    pool = getattr(request.app.state, "arq_pool", None)
    if pool is None:
        raise ServiceUnavailableError("Task queue not available (Redis down?)")
    return pool


async def get_note_repo(driver: AsyncDriver = Depends(get_neo4j)) -> NoteRepository:
    return NoteRepository(driver)


async def get_node_repo(driver: AsyncDriver = Depends(get_neo4j)) -> NodeRepository:
    return NodeRepository(driver)


async def get_edge_repo(driver: AsyncDriver = Depends(get_neo4j)) -> EdgeRepository:
    return EdgeRepository(driver)

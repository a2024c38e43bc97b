"""arq worker settings and lifecycle management.

Startup/shutdown mirrors the FastAPI lifespan but is independent of it:
each worker process opens its own Neo4j driver.

Launch:
    arq app.workers.settings.WorkerSettings
"""

from __future__ import annotations

from typing import Any
from urllib.parse import urlparse

from arq.connections import RedisSettings as ArqRedisSettings
from neo4j import AsyncGraphDatabase

from app.config import settings
from app.core.logging import get_logger, setup_logging
from app.workers.tasks import ARQ_QUEUE, generate_note_graph, generate_user_graph

logger = get_logger(__name__)


def parse_redis_settings(redis_url: str | None = None) -> ArqRedisSettings:
    """Split a redis URL (redis://:password@host:port/db) into arq settings."""
    parsed = urlparse(redis_url or settings.redis_url)
    database = parsed.path.lstrip("/")
    return ArqRedisSettings(
        host=parsed.hostname or "localhost",
        port=parsed.port or 6379,
        password=parsed.password or None,
        database=int(database) if database.isdigit() else 0,
    )


async def startup(ctx: dict[str, Any]) -> None:
    """Open the Neo4j driver shared by all tasks of this worker."""
    setup_logging(log_level=settings.log_level, log_format=settings.log_format)
    logger.info("arq_worker_starting", queue=ARQ_QUEUE)

    neo4j_driver = AsyncGraphDatabase.driver(
        settings.neo4j_uri,
        auth=(settings.neo4j_user, settings.neo4j_password),
    )
    await neo4j_driver.verify_connectivity()
    ctx["neo4j_driver"] = neo4j_driver

    logger.info("arq_worker_started")


async def shutdown(ctx: dict[str, Any]) -> None:
    logger.info("arq_worker_stopping")
    if driver := ctx.get("neo4j_driver"):
        await driver.close()
    logger.info("arq_worker_stopped")


class WorkerSettings:
    """arq WorkerSettings for background graph generation."""

    functions = [generate_note_graph, generate_user_graph]
    on_startup = startup
    on_shutdown = shutdown
    redis_settings = parse_redis_settings()
    max_jobs = settings.arq_max_jobs
    job_timeout = settings.arq_job_timeout
    keep_result = settings.arq_keep_result
    queue_name = ARQ_QUEUE

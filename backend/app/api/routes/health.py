"""Health check endpoints.

Neo4j is required; the arq job queue is optional (per-note background
generation degrades to unavailable without it).
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(tags=["health"])


async def _ping_neo4j(request: Request) -> None:
    driver = request.app.state.neo4j_driver
    async with driver.session() as session:
        result = await session.run("RETURN 1 AS n")
        await result.single()


@router.get("/health", response_model=None)
async def health_check(request: Request) -> dict | JSONResponse:
    """Status of each backing service; 503 when a required one is down."""
    checks: dict[str, str] = {}

    try:
        await _ping_neo4j(request)
        checks["neo4j"] = "ok"
    except Exception as e:
        checks["neo4j"] = "error"
        logger.error("health_check_failed", service="neo4j", error=type(e).__name__)

    pool = getattr(request.app.state, "arq_pool", None)
    if pool is None:
        checks["queue"] = "not configured"
    else:
        try:
            await pool.ping()
            checks["queue"] = "ok"
        except Exception as e:
            checks["queue"] = "error"
            logger.error("health_check_failed", service="queue", error=type(e).__name__)

    all_ok = all(v == "ok" for v in checks.values() if v != "not configured")
    body = {"status": "healthy" if all_ok else "degraded", "services": checks}
    if not all_ok:
        return JSONResponse(content=body, status_code=503)
    return body


@router.get("/health/ready", response_model=None)
async def readiness_check(request: Request) -> dict | JSONResponse:
    """Readiness probe: 503 until Neo4j answers."""
    try:
        await _ping_neo4j(request)
    except Exception:
        return JSONResponse(content={"ready": False}, status_code=503)
    return {"ready": True}


@router.get("/health/live")
async def liveness_check() -> dict:
    return {"alive": True}

"""arq task functions for background graph generation.

Each task receives a ``ctx`` dict populated by worker startup with:
  - ctx["neo4j_driver"]: AsyncDriver
  - ctx["redis"]: ArqRedis (arq's own pool)

Generation runs outside the request that saved the note, so a failure
here never affects the save itself.
"""

from __future__ import annotations

from typing import Any

from app.core.logging import get_logger
from app.repositories.edge_repo import EdgeRepository
from app.repositories.node_repo import NodeRepository
from app.repositories.note_repo import NoteRepository
from app.services.graph_generator import generate_graph_for_note, generate_graph_from_notes

logger = get_logger(__name__)

ARQ_QUEUE = "versegraph:arq"


async def generate_note_graph(ctx: dict[str, Any], note_id: str) -> dict[str, Any]:
    """Derive graph nodes and edges for one saved note.

    A note that no longer exists (deleted before the job ran) is skipped.
    """
    driver = ctx["neo4j_driver"]

    note = await NoteRepository(driver).get_note(note_id)
    if note is None:
        logger.warning("task_note_graph_note_missing", note_id=note_id)
        return {"note_id": note_id, "status": "skipped"}

    logger.info("task_note_graph_started", note_id=note_id, user_id=note.user_id)
    result = await generate_graph_for_note(
        note,
        NodeRepository(driver),
        EdgeRepository(driver),
    )

    stats = {
        "note_id": note_id,
        "status": "completed",
        "nodes": len(result.all_nodes()),
        "edges_created": len(result.edges),
    }
    logger.info("task_note_graph_completed", **stats)
    return stats


async def generate_user_graph(ctx: dict[str, Any], user_id: str) -> dict[str, Any]:
    """Re-derive the whole graph of a user. Raises if the notes cannot be read."""
    driver = ctx["neo4j_driver"]

    logger.info("task_user_graph_started", user_id=user_id)
    result = await generate_graph_from_notes(
        user_id,
        NoteRepository(driver),
        NodeRepository(driver),
        EdgeRepository(driver),
    )

    stats = {"user_id": user_id, "status": "completed", **result.summary.model_dump()}
    logger.info("task_user_graph_completed", **stats)
    return stats

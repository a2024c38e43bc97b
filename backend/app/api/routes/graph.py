"""Study-graph API routes.

Generation (synchronous for a whole user, queued for a single note),
the laid-out graph view, export, and admin clearing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from app.api.auth import require_admin, require_auth
from app.api.dependencies import get_arq_pool, get_edge_repo, get_node_repo, get_note_repo
from app.core.exceptions import ConflictError, GraphGenerationError, NotFoundError
from app.core.logging import get_logger
from app.repositories.edge_repo import EdgeRepository
from app.repositories.node_repo import NodeRepository
from app.repositories.note_repo import NoteRepository
from app.schemas.graph import (
    GraphClearResult,
    GraphGenerationResult,
    GraphView,
    JobEnqueuedResult,
    NotesStatus,
)
from app.services.graph_generator import (
    generate_graph_from_notes,
    get_user_notes_count,
    user_has_notes,
)
from app.services.graph_view import export_graph_csv, export_graph_json, load_graph_view
from app.workers.tasks import ARQ_QUEUE

if TYPE_CHECKING:
    from arq.connections import ArqRedis

logger = get_logger(__name__)
router = APIRouter(prefix="/graph", tags=["graph"])


@router.post(
    "/{user_id}/generate",
    response_model=GraphGenerationResult,
    dependencies=[Depends(require_auth)],
)
async def generate_user_graph(
    user_id: str,
    note_repo: NoteRepository = Depends(get_note_repo),
    node_repo: NodeRepository = Depends(get_node_repo),
    edge_repo: EdgeRepository = Depends(get_edge_repo),
) -> GraphGenerationResult:
    """Re-derive the graph from the user's active notes.

    Idempotent: a second call right after the first creates nothing new.
    """
    try:
        return await generate_graph_from_notes(user_id, note_repo, node_repo, edge_repo)
    except Exception as e:
        logger.exception("graph_generation_failed", user_id=user_id)
        raise GraphGenerationError(
            "Failed to generate graph",
            context={"user_id": user_id, "error": type(e).__name__},
        ) from e


@router.post(
    "/{user_id}/notes/{note_id}/generate",
    status_code=202,
    response_model=JobEnqueuedResult,
    dependencies=[Depends(require_auth)],
)
async def enqueue_note_graph(
    user_id: str,
    note_id: str,
    arq_pool: ArqRedis = Depends(get_arq_pool),
    note_repo: NoteRepository = Depends(get_note_repo),
) -> JobEnqueuedResult:
    """Queue graph generation for one note (typically right after a save).

    Raises:
        NotFoundError: The note does not exist or belongs to another user.
    """
    note = await note_repo.get_note(note_id)
    if note is None or note.user_id != user_id:
        raise NotFoundError(
            f"Note {note_id} not found",
            context={"user_id": user_id, "note_id": note_id},
        )

    job = await arq_pool.enqueue_job(
        "generate_note_graph",
        note_id,
        _queue_name=ARQ_QUEUE,
    )
    if job is None:
        raise ConflictError("Job already enqueued or could not be created.")

    logger.info("note_graph_enqueued", user_id=user_id, note_id=note_id, job_id=job.job_id)
    return JobEnqueuedResult(
        job_id=job.job_id,
        message=f"Graph generation queued for note {note_id}.",
    )


@router.get("/{user_id}", response_model=GraphView, dependencies=[Depends(require_auth)])
async def get_graph_view(
    user_id: str,
    node_repo: NodeRepository = Depends(get_node_repo),
    edge_repo: EdgeRepository = Depends(get_edge_repo),
) -> GraphView:
    """All stored nodes and edges of the user, laid out by type."""
    return await load_graph_view(user_id, node_repo, edge_repo)


@router.get("/{user_id}/export", dependencies=[Depends(require_auth)], response_model=None)
async def export_graph(
    user_id: str,
    export_format: Literal["json", "csv"] = Query("json", alias="format"),
    node_repo: NodeRepository = Depends(get_node_repo),
    edge_repo: EdgeRepository = Depends(get_edge_repo),
) -> dict | PlainTextResponse:
    view = await load_graph_view(user_id, node_repo, edge_repo)
    if export_format == "csv":
        return PlainTextResponse(
            export_graph_csv(view),
            media_type="text/csv",
            headers={"Content-Disposition": 'attachment; filename="graph-export.csv"'},
        )
    return export_graph_json(view)


@router.get(
    "/{user_id}/has-notes",
    response_model=NotesStatus,
    dependencies=[Depends(require_auth)],
)
async def notes_status(
    user_id: str,
    note_repo: NoteRepository = Depends(get_note_repo),
) -> NotesStatus:
    return NotesStatus(
        user_id=user_id,
        has_notes=await user_has_notes(user_id, note_repo),
        active_note_count=await get_user_notes_count(user_id, note_repo),
    )


@router.delete(
    "/{user_id}",
    response_model=GraphClearResult,
    dependencies=[Depends(require_admin)],
)
async def clear_user_graph(
    user_id: str,
    node_repo: NodeRepository = Depends(get_node_repo),
) -> GraphClearResult:
    """Delete every graph node and edge of the user. Notes are untouched."""
    deleted = await node_repo.delete_for_user(user_id)
    logger.info("graph_cleared", user_id=user_id, nodes_deleted=deleted)
    return GraphClearResult(user_id=user_id, nodes_deleted=deleted)

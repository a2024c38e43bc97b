"""Graph generator service: derive graph nodes and edges from study notes.

For one note:
  1. Upsert the note node
  2. Upsert a passage node per Bible reference (+ book node, once per book)
  3. Upsert a theme node per tag
  4. Upsert person/place nodes for gazetteer mentions in title + body

Every node and edge write is isolated: a failure is logged and the item
is skipped, the rest of the note is still processed. The graph is
append-only; nodes and edges are never pruned when a note changes.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from app.config import settings
from app.core.logging import get_logger, note_id_var, user_id_var
from app.schemas.graph import (
    EdgeType,
    GraphEdge,
    GraphGenerationResult,
    GraphNode,
    GraphSummary,
    NodeType,
)
from app.services.extraction.entity_detector import detect_entities
from app.services.extraction.reference_parser import extract_book_name, parse_reference

if TYPE_CHECKING:
    from app.repositories.edge_repo import EdgeRepository
    from app.repositories.node_repo import NodeRepository
    from app.repositories.note_repo import NoteRepository
    from app.schemas.note import Note

logger = get_logger(__name__)


@dataclass
class NoteGraphResult:
    """Nodes touched and edges created while processing one note."""

    note_node: GraphNode | None = None
    passage_nodes: list[GraphNode] = field(default_factory=list)
    book_nodes: list[GraphNode] = field(default_factory=list)
    theme_nodes: list[GraphNode] = field(default_factory=list)
    person_nodes: list[GraphNode] = field(default_factory=list)
    place_nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)

    def all_nodes(self) -> list[GraphNode]:
        """Every node in category order: note, passages, books, themes, people, places."""
        head = [self.note_node] if self.note_node is not None else []
        return [
            *head,
            *self.passage_nodes,
            *self.book_nodes,
            *self.theme_nodes,
            *self.person_nodes,
            *self.place_nodes,
        ]


# --- Write primitives ---


async def upsert_node(
    node_repo: NodeRepository,
    user_id: str,
    node_type: NodeType,
    reference_id: str,
    label: str,
    description: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> GraphNode | None:
    """Return the stored node for (user, type, reference_id), creating it if absent.

    Storage failures are logged and yield None.
    """
    try:
        node, _created = await node_repo.upsert(
            user_id,
            node_type,
            reference_id,
            label,
            description=description,
            metadata=metadata,
        )
    except Exception:
        logger.warning(
            "graph_node_upsert_failed",
            node_type=node_type.value,
            reference_id=reference_id,
            exc_info=True,
        )
        return None
    return node


async def create_edge_if_absent(
    edge_repo: EdgeRepository,
    user_id: str,
    source: GraphNode | None,
    target: GraphNode | None,
    edge_type: EdgeType,
) -> GraphEdge | None:
    """Create source -> target unless the pair is already linked.

    Returns the new edge, or None when it already existed, an endpoint
    was not produced, or the write failed.
    """
    if source is None or target is None:
        return None
    try:
        return await edge_repo.create_if_absent(user_id, source.id, target.id, edge_type)
    except Exception:
        logger.warning(
            "graph_edge_create_failed",
            source_node_id=source.id,
            target_node_id=target.id,
            edge_type=edge_type.value,
            exc_info=True,
        )
        return None


def _unique(values: list[str], key: Callable[[str], str] = str) -> list[str]:
    """First occurrence of each key, input order kept."""
    seen: set[str] = set()
    result = []
    for value in values:
        k = key(value)
        if k in seen:
            continue
        seen.add(k)
        result.append(value)
    return result


def _note_description(note: Note) -> str:
    return (note.content_plain or note.content)[: settings.note_description_chars]


# --- Per-note generation ---


async def _add_references(
    note: Note,
    note_node: GraphNode | None,
    result: NoteGraphResult,
    node_repo: NodeRepository,
    edge_repo: EdgeRepository,
) -> None:
    books_seen: set[str] = set()
    for ref in _unique(note.bible_references):
        parsed = parse_reference(ref)
        metadata = (
            {"book": parsed.book, "chapter": parsed.chapter}
            if parsed is not None
            else None
        )
        passage = await upsert_node(
            node_repo,
            note.user_id,
            NodeType.PASSAGE,
            ref,
            ref,
            description=f"Bible passage: {ref}",
            metadata=metadata,
        )
        if passage is not None:
            result.passage_nodes.append(passage)
            edge = await create_edge_if_absent(
                edge_repo, note.user_id, note_node, passage, EdgeType.REFERENCES
            )
            if edge is not None:
                result.edges.append(edge)

        book_name = extract_book_name(ref)
        if book_name is None or book_name in books_seen:
            continue
        books_seen.add(book_name)

        book = await upsert_node(
            node_repo,
            note.user_id,
            NodeType.BOOK,
            book_name,
            book_name,
            description=f"Bible book: {book_name}",
        )
        if book is None:
            continue
        result.book_nodes.append(book)

        edge = await create_edge_if_absent(
            edge_repo, note.user_id, passage, book, EdgeType.REFERENCES
        )
        if edge is not None:
            result.edges.append(edge)


async def _add_themes(
    note: Note,
    note_node: GraphNode | None,
    result: NoteGraphResult,
    node_repo: NodeRepository,
    edge_repo: EdgeRepository,
) -> None:
    for tag in _unique(note.tags, key=str.lower):
        theme = await upsert_node(
            node_repo,
            note.user_id,
            NodeType.THEME,
            tag.lower(),
            tag,
            description=f"Theme: {tag}",
        )
        if theme is None:
            continue
        result.theme_nodes.append(theme)

        edge = await create_edge_if_absent(
            edge_repo, note.user_id, note_node, theme, EdgeType.THEME_CONNECTION
        )
        if edge is not None:
            result.edges.append(edge)


async def _add_mentions(
    note: Note,
    note_node: GraphNode | None,
    result: NoteGraphResult,
    node_repo: NodeRepository,
    edge_repo: EdgeRepository,
) -> None:
    detected = detect_entities(note.text_for_detection)

    for person in detected.people:
        node = await upsert_node(
            node_repo,
            note.user_id,
            NodeType.PERSON,
            person.name.lower(),
            person.name,
            description=person.role or f"Bible figure: {person.name}",
        )
        if node is None:
            continue
        result.person_nodes.append(node)
        edge = await create_edge_if_absent(
            edge_repo, note.user_id, note_node, node, EdgeType.MENTIONS
        )
        if edge is not None:
            result.edges.append(edge)

    for place in detected.places:
        node = await upsert_node(
            node_repo,
            note.user_id,
            NodeType.PLACE,
            place.name.lower(),
            place.name,
            description=f"Region: {place.region}" if place.region else f"Bible place: {place.name}",
        )
        if node is None:
            continue
        result.place_nodes.append(node)
        edge = await create_edge_if_absent(
            edge_repo, note.user_id, note_node, node, EdgeType.MENTIONS
        )
        if edge is not None:
            result.edges.append(edge)


async def generate_graph_for_note(
    note: Note,
    node_repo: NodeRepository,
    edge_repo: EdgeRepository,
) -> NoteGraphResult:
    """Ensure the graph holds every node and edge this note implies.

    Never raises for individual write failures. Edges from the note node
    are skipped when the note node itself could not be written.
    """
    user_token = user_id_var.set(note.user_id)
    note_token = note_id_var.set(note.id)
    try:
        result = NoteGraphResult()
        result.note_node = await upsert_node(
            node_repo,
            note.user_id,
            NodeType.NOTE,
            note.id,
            note.title,
            description=_note_description(note),
        )

        await _add_references(note, result.note_node, result, node_repo, edge_repo)
        await _add_themes(note, result.note_node, result, node_repo, edge_repo)
        await _add_mentions(note, result.note_node, result, node_repo, edge_repo)

        logger.info(
            "note_graph_generated",
            passages=len(result.passage_nodes),
            books=len(result.book_nodes),
            themes=len(result.theme_nodes),
            people=len(result.person_nodes),
            places=len(result.place_nodes),
            edges_created=len(result.edges),
        )
        return result
    finally:
        note_id_var.reset(note_token)
        user_id_var.reset(user_token)


# --- Full-graph assembly ---


def _distinct_references(nodes: list[GraphNode]) -> int:
    return len({n.reference_id for n in nodes})


async def generate_graph_from_notes(
    user_id: str,
    note_repo: NoteRepository,
    node_repo: NodeRepository,
    edge_repo: EdgeRepository,
    limit: int | None = None,
) -> GraphGenerationResult:
    """Re-derive the graph from a user's active notes, one note at a time.

    Nodes are merged by id, category by category across all notes.
    Summary counts are distinct reference ids per category; edge_count
    is edges created by this run only.

    Raises:
        Whatever the note listing raises; per-item write failures do not.
    """
    limit = limit if limit is not None else settings.graph_notes_limit
    notes = await note_repo.list_notes(user_id, archived=False, limit=limit)

    logger.info("graph_generation_started", user_id=user_id, note_count=len(notes))

    note_nodes: list[GraphNode] = []
    merged = NoteGraphResult()
    for note in notes:
        note_result = await generate_graph_for_note(note, node_repo, edge_repo)
        if note_result.note_node is not None:
            note_nodes.append(note_result.note_node)
        merged.passage_nodes.extend(note_result.passage_nodes)
        merged.book_nodes.extend(note_result.book_nodes)
        merged.theme_nodes.extend(note_result.theme_nodes)
        merged.person_nodes.extend(note_result.person_nodes)
        merged.place_nodes.extend(note_result.place_nodes)
        merged.edges.extend(note_result.edges)

    nodes_by_id: dict[str, GraphNode] = {}
    for node in [*note_nodes, *merged.all_nodes()]:
        nodes_by_id[node.id] = node

    summary = GraphSummary(
        note_count=len(note_nodes),
        passage_count=_distinct_references(merged.passage_nodes),
        book_count=_distinct_references(merged.book_nodes),
        theme_count=_distinct_references(merged.theme_nodes),
        person_count=_distinct_references(merged.person_nodes),
        place_count=_distinct_references(merged.place_nodes),
        edge_count=len(merged.edges),
    )

    logger.info("graph_generation_completed", user_id=user_id, **summary.model_dump())
    return GraphGenerationResult(
        nodes=list(nodes_by_id.values()),
        edges=merged.edges,
        summary=summary,
    )


async def user_has_notes(user_id: str, note_repo: NoteRepository) -> bool:
    """True if the user owns any note. Storage errors read as False."""
    try:
        return await note_repo.has_any(user_id)
    except Exception:
        logger.warning("user_has_notes_failed", user_id=user_id, exc_info=True)
        return False


async def get_user_notes_count(user_id: str, note_repo: NoteRepository) -> int:
    """Number of non-archived notes. Storage errors read as 0."""
    try:
        return await note_repo.count_active(user_id)
    except Exception:
        logger.warning("user_notes_count_failed", user_id=user_id, exc_info=True)
        return 0

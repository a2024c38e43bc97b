"""Shared test fixtures for VerseGraph backend tests.

Provides mocked Neo4j infrastructure for repository tests and in-memory
repositories for generator/assembler tests.
"""

from __future__ import annotations

import itertools
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.schemas.graph import EdgeType, GraphEdge, GraphNode, NodeType
from app.schemas.note import Note

# -- Infrastructure mocks -------------------------------------------------


@pytest.fixture
def mock_neo4j_session():
    """Pre-configured Neo4j session with run().data()/.consume() chain."""
    session = AsyncMock()

    result = AsyncMock()
    result.data = AsyncMock(return_value=[])

    summary = MagicMock()
    summary.counters.nodes_created = 0
    summary.counters.relationships_created = 0
    summary.counters.properties_set = 0
    result.consume = AsyncMock(return_value=summary)

    session.run = AsyncMock(return_value=result)

    return session


@pytest.fixture
def mock_neo4j_driver_with_session(mock_neo4j_session):
    """Neo4j driver that yields the pre-configured session.

    driver.session() is synchronous (returns an async context manager),
    so we use MagicMock for the driver and wire __aenter__/__aexit__
    on the returned object.
    """
    driver = MagicMock()
    cm = MagicMock()
    cm.__aenter__ = AsyncMock(return_value=mock_neo4j_session)
    cm.__aexit__ = AsyncMock(return_value=False)
    driver.session.return_value = cm
    return driver


# -- In-memory repositories ----------------------------------------------


class InMemoryNoteRepository:
    def __init__(self, notes: list[Note] | None = None) -> None:
        self.notes: list[Note] = list(notes or [])
        self.fail_listing = False

    async def list_notes(self, user_id: str, archived: bool = False, limit: int = 100) -> list[Note]:
        if self.fail_listing:
            raise ConnectionError("notes unavailable")
        matching = [n for n in self.notes if n.user_id == user_id and n.is_archived == archived]
        return matching[:limit]

    async def get_note(self, note_id: str) -> Note | None:
        return next((n for n in self.notes if n.id == note_id), None)

    async def has_any(self, user_id: str) -> bool:
        if self.fail_listing:
            raise ConnectionError("notes unavailable")
        return any(n.user_id == user_id for n in self.notes)

    async def count_active(self, user_id: str) -> int:
        if self.fail_listing:
            raise ConnectionError("notes unavailable")
        return sum(1 for n in self.notes if n.user_id == user_id and not n.is_archived)


class InMemoryNodeRepository:
    """Stores nodes keyed by identity; ``fail_on`` makes upserts of those types raise."""

    def __init__(self) -> None:
        self.nodes: dict[tuple[str, str, str], GraphNode] = {}
        self.fail_on: set[NodeType] = set()
        self._ids = itertools.count(1)

    async def upsert(
        self,
        user_id: str,
        node_type: NodeType,
        reference_id: str,
        label: str,
        description: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> tuple[GraphNode, bool]:
        if node_type in self.fail_on:
            raise ConnectionError(f"write failed for {node_type}")
        key = (user_id, node_type.value, reference_id)
        if key in self.nodes:
            return self.nodes[key], False
        node = GraphNode(
            id=f"node-{next(self._ids)}",
            user_id=user_id,
            node_type=node_type,
            reference_id=reference_id,
            label=label,
            description=description,
            metadata=metadata,
        )
        self.nodes[key] = node
        return node, True

    async def list_for_user(self, user_id: str, node_type: NodeType | None = None) -> list[GraphNode]:
        return [
            n
            for n in self.nodes.values()
            if n.user_id == user_id and (node_type is None or n.node_type == node_type)
        ]

    def of_type(self, node_type: NodeType) -> list[GraphNode]:
        return [n for n in self.nodes.values() if n.node_type == node_type]


class InMemoryEdgeRepository:
    """Stores at most one edge per (user, source, target); ``fail_on`` makes creation raise."""

    def __init__(self) -> None:
        self.edges: dict[tuple[str, str, str], GraphEdge] = {}
        self.fail_on: set[EdgeType] = set()
        self._ids = itertools.count(1)

    async def create_if_absent(
        self,
        user_id: str,
        source_node_id: str,
        target_node_id: str,
        edge_type: EdgeType,
        weight: float = 1.0,
    ) -> GraphEdge | None:
        if edge_type in self.fail_on:
            raise ConnectionError(f"write failed for {edge_type}")
        key = (user_id, source_node_id, target_node_id)
        if key in self.edges:
            return None
        edge = GraphEdge(
            id=f"edge-{next(self._ids)}",
            user_id=user_id,
            source_node_id=source_node_id,
            target_node_id=target_node_id,
            edge_type=edge_type,
            weight=weight,
        )
        self.edges[key] = edge
        return edge

    async def list_for_user(self, user_id: str) -> list[GraphEdge]:
        return [e for e in self.edges.values() if e.user_id == user_id]


@pytest.fixture
def note_repo():
    return InMemoryNoteRepository()


@pytest.fixture
def node_repo():
    return InMemoryNodeRepository()


@pytest.fixture
def edge_repo():
    return InMemoryEdgeRepository()


# -- Factory fixtures -----------------------------------------------------


@pytest.fixture
def make_note():
    """Factory for Note with sensible defaults."""
    counter = itertools.count(1)

    def _factory(
        user_id: str = "user-1",
        title: str = "Study note",
        content: str = "",
        content_plain: str = "",
        bible_references: list[str] | None = None,
        tags: list[str] | None = None,
        is_archived: bool = False,
        note_id: str | None = None,
    ) -> Note:
        return Note(
            id=note_id or f"note-{next(counter)}",
            user_id=user_id,
            title=title,
            content=content,
            content_plain=content_plain,
            bible_references=bible_references or [],
            tags=tags or [],
            is_archived=is_archived,
        )

    return _factory

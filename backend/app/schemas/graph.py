"""Pydantic schemas for the study knowledge graph.

Two layers:
- Storage records (GraphNode, GraphEdge) keyed by opaque ids, deduplicated
  by their identity keys (user, type, reference_id) and (user, source, target).
- Presentation records (GraphView*) consumed by the visualization widget.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NodeType(StrEnum):
    """Kinds of graph node."""

    NOTE = "note"
    BOOK = "book"
    PASSAGE = "passage"
    THEME = "theme"
    PERSON = "person"
    PLACE = "place"


class EdgeType(StrEnum):
    """Storage-level edge kinds."""

    REFERENCES = "references"
    THEME_CONNECTION = "theme_connection"
    MENTIONS = "mentions"
    CROSS_REF = "cross_ref"


# --- Storage records ---


class GraphNode(BaseModel):
    """A persisted graph node.

    ``metadata`` is a free-form bag; it is not schema-locked per node type.
    """

    id: str
    user_id: str
    node_type: NodeType
    reference_id: str | None = None
    label: str
    description: str | None = None
    metadata: dict[str, Any] | None = None

    @property
    def identity_key(self) -> tuple[str, str, str | None]:
        return (self.user_id, self.node_type.value, self.reference_id)


class GraphEdge(BaseModel):
    """A persisted directed relation between two nodes of one user."""

    id: str
    user_id: str
    source_node_id: str
    target_node_id: str
    edge_type: EdgeType
    weight: float = 1.0

    @property
    def identity_key(self) -> tuple[str, str, str]:
        return (self.user_id, self.source_node_id, self.target_node_id)


class GraphSummary(BaseModel):
    """Counts reported by a full-graph generation run."""

    note_count: int = 0
    passage_count: int = 0
    book_count: int = 0
    theme_count: int = 0
    person_count: int = 0
    place_count: int = 0
    edge_count: int = 0  # edges created during this run


class GraphGenerationResult(BaseModel):
    """Nodes touched and edges created for a user's whole note corpus."""

    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)
    summary: GraphSummary = Field(default_factory=GraphSummary)


# --- Presentation records ---


class LayoutPosition(BaseModel):
    """2D canvas coordinates for a node."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class GraphViewNode(BaseModel):
    id: str
    type: str
    position: LayoutPosition
    data: dict[str, Any] = Field(default_factory=dict)


class GraphViewEdge(BaseModel):
    id: str
    source: str
    target: str
    type: str


class GraphView(BaseModel):
    """The pipeline's output contract, ready for rendering."""

    nodes: list[GraphViewNode] = Field(default_factory=list)
    edges: list[GraphViewEdge] = Field(default_factory=list)


# --- API envelopes ---


class NotesStatus(BaseModel):
    user_id: str
    has_notes: bool
    active_note_count: int


class JobEnqueuedResult(BaseModel):
    """Result of enqueueing a background job."""

    job_id: str
    status: str = "enqueued"
    message: str = ""


class GraphClearResult(BaseModel):
    user_id: str
    nodes_deleted: int

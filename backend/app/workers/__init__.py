"""arq background workers for graph generation.

Entry point:
    arq app.workers.settings.WorkerSettings

Tasks:
    generate_note_graph  - derive the graph for one saved note
    generate_user_graph  - re-derive a user's whole graph
"""

from app.workers.settings import WorkerSettings
from app.workers.tasks import generate_note_graph, generate_user_graph

__all__ = [
    "WorkerSettings",
    "generate_note_graph",
    "generate_user_graph",
]

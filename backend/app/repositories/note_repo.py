"""Neo4j repository for study notes.

Read side used by graph generation, plus a minimal create used by
seeding scripts and tests. Note editing lives in the journal app.
"""

from __future__ import annotations

import uuid
from typing import Any

from app.core.logging import get_logger
from app.repositories.base import Neo4jRepository
from app.schemas.note import Note, NoteCreate

logger = get_logger(__name__)


def _to_note(props: dict[str, Any]) -> Note:
    return Note(
        id=props["id"],
        user_id=props["user_id"],
        title=props.get("title") or "",
        content=props.get("content") or "",
        content_plain=props.get("content_plain") or "",
        bible_references=list(props.get("bible_references") or []),
        tags=list(props.get("tags") or []),
        is_archived=bool(props.get("is_archived", False)),
    )


class NoteRepository(Neo4jRepository):
    """Repository for Note nodes."""

    async def list_notes(
        self,
        user_id: str,
        archived: bool = False,
        limit: int = 100,
    ) -> list[Note]:
        """List a user's notes, newest first."""
        rows = await self.execute_read(
            """
            MATCH (n:Note {user_id: $user_id})
            WHERE coalesce(n.is_archived, false) = $archived
            RETURN properties(n) AS note
            ORDER BY n.created_at DESC
            LIMIT $limit
            """,
            {"user_id": user_id, "archived": archived, "limit": limit},
        )
        return [_to_note(row["note"]) for row in rows]

    async def get_note(self, note_id: str) -> Note | None:
        rows = await self.execute_read(
            "MATCH (n:Note {id: $id}) RETURN properties(n) AS note",
            {"id": note_id},
        )
        return _to_note(rows[0]["note"]) if rows else None

    async def has_any(self, user_id: str) -> bool:
        """True if the user has at least one note, archived or not."""
        return await self.exists("Note", "user_id", user_id)

    async def count_active(self, user_id: str) -> int:
        """Notes not archived; a missing is_archived counts as active, as in list_notes."""
        rows = await self.execute_read(
            """
            MATCH (n:Note {user_id: $user_id})
            WHERE coalesce(n.is_archived, false) = false
            RETURN count(n) AS count
            """,
            {"user_id": user_id},
        )
        return rows[0]["count"] if rows else 0

    async def create_note(self, data: NoteCreate) -> Note:
        note_id = str(uuid.uuid4())
        rows = await self.execute_write(
            """
            CREATE (n:Note {
                id: $id,
                user_id: $user_id,
                title: $title,
                content: $content,
                content_plain: $content_plain,
                bible_references: $bible_references,
                tags: $tags,
                is_archived: $is_archived,
                created_at: timestamp()
            })
            RETURN properties(n) AS note
            """,
            {"id": note_id, **data.model_dump()},
        )
        logger.info("note_created", note_id=note_id, user_id=data.user_id)
        if rows:
            return _to_note(rows[0]["note"])
        return Note(id=note_id, **data.model_dump())

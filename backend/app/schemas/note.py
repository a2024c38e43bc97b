"""Pydantic schema for study notes.

Notes are owned by the surrounding journal application; the graph layer
only reads them.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Note(BaseModel):
    """A study note as read from storage."""

    id: str
    user_id: str
    title: str = ""
    content: str = ""  # rich text
    content_plain: str = ""  # plain-text rendering of content
    bible_references: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    is_archived: bool = False

    @property
    def text_for_detection(self) -> str:
        """Title plus body, preferring the plain-text body."""
        return f"{self.title} {self.content_plain or self.content}"


class NoteCreate(BaseModel):
    """Fields needed to store a new note."""

    user_id: str
    title: str = Field(..., min_length=1, max_length=200)
    content: str = ""
    content_plain: str = ""
    bible_references: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    is_archived: bool = False

"""Request/response schemas for the reference and entity endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ReferenceOut(BaseModel):
    book: str
    chapter: int
    verse_start: int | None = None
    verse_end: int | None = None
    reference: str  # canonical rendering, e.g. "1 John 3:16"


class BookList(BaseModel):
    books: list[str]
    count: int


class EntityDetectRequest(BaseModel):
    text: str = Field(..., max_length=100_000)


class PersonOut(BaseModel):
    name: str
    role: str | None = None


class PlaceOut(BaseModel):
    name: str
    region: str | None = None


class EntityDetectResponse(BaseModel):
    people: list[PersonOut] = Field(default_factory=list)
    places: list[PlaceOut] = Field(default_factory=list)

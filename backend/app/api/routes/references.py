"""Reference parsing and entity detection endpoints.

Stateless: no storage access, useful for editor autocomplete and
previewing what a note will contribute to the graph.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from app.api.auth import require_auth
from app.core.exceptions import ValidationError
from app.schemas.reference import (
    BookList,
    EntityDetectRequest,
    EntityDetectResponse,
    PersonOut,
    PlaceOut,
    ReferenceOut,
)
from app.services.extraction import (
    BOOK_NAMES,
    detect_entities,
    format_reference,
    parse_reference,
)

router = APIRouter(tags=["references"])


@router.get(
    "/references/parse",
    response_model=ReferenceOut,
    dependencies=[Depends(require_auth)],
)
async def parse_reference_endpoint(
    ref: str = Query(..., min_length=1, max_length=100),
) -> ReferenceOut:
    parsed = parse_reference(ref)
    if parsed is None:
        raise ValidationError("Not a Bible reference", context={"ref": ref})
    return ReferenceOut(
        book=parsed.book,
        chapter=parsed.chapter,
        verse_start=parsed.verse_start,
        verse_end=parsed.verse_end,
        reference=format_reference(parsed),
    )


@router.get("/references/books", response_model=BookList)
async def list_books() -> BookList:
    """Canonical book names in canonical order."""
    return BookList(books=list(BOOK_NAMES), count=len(BOOK_NAMES))


@router.post(
    "/entities/detect",
    response_model=EntityDetectResponse,
    dependencies=[Depends(require_auth)],
)
async def detect_entities_endpoint(body: EntityDetectRequest) -> EntityDetectResponse:
    """People and places from the gazetteer mentioned in the text."""
    detected = detect_entities(body.text)
    return EntityDetectResponse(
        people=[PersonOut(name=p.name, role=p.role) for p in detected.people],
        places=[PlaceOut(name=p.name, region=p.region) for p in detected.places],
    )

"""Deterministic extraction from note text.

Two rule-based passes, no model calls:

  - reference_parser: Bible reference strings -> ParsedReference
  - entity_detector: free text -> gazetteer people and places

Usage:
    from app.services.extraction import detect_entities, parse_reference

    parse_reference("1 Jn 3:16")   # ParsedReference(book="1 John", chapter=3, ...)
    detect_entities("Jesus wept in Bethany").people
"""

from __future__ import annotations

from app.services.extraction.entity_detector import (
    DetectedEntities,
    detect_entities,
    find_people_in_text,
    find_places_in_text,
)
from app.services.extraction.gazetteer import (
    BIBLE_PEOPLE,
    BIBLE_PLACES,
    BiblePerson,
    BiblePlace,
)
from app.services.extraction.reference_parser import (
    BOOK_NAMES,
    ParsedReference,
    extract_book_name,
    format_reference,
    is_bible_reference,
    normalize_book_name,
    parse_reference,
)

__all__ = [
    "BIBLE_PEOPLE",
    "BIBLE_PLACES",
    "BOOK_NAMES",
    "BiblePerson",
    "BiblePlace",
    "DetectedEntities",
    "ParsedReference",
    "detect_entities",
    "extract_book_name",
    "find_people_in_text",
    "find_places_in_text",
    "format_reference",
    "is_bible_reference",
    "normalize_book_name",
    "parse_reference",
]

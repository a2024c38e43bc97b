"""Gazetteer-based detection of biblical people and places in note text.

Finds whole-word, case-insensitive mentions of each gazetteer entry's
canonical name or aliases. This is FREE (no model calls) and
deterministic: same text, same result, in gazetteer order.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

from app.core.logging import get_logger
from app.services.extraction.gazetteer import (
    BIBLE_PEOPLE,
    BIBLE_PLACES,
    BiblePerson,
    BiblePlace,
)

logger = get_logger(__name__)

# Texts shorter than this cannot hold a name worth matching.
MIN_TEXT_LENGTH = 3


class GazetteerEntry(Protocol):
    name: str
    aliases: tuple[str, ...]


T = TypeVar("T")
E = TypeVar("E", bound=GazetteerEntry)


@dataclass(frozen=True)
class _EntryMatcher(Generic[T]):
    entry: T
    patterns: tuple[re.Pattern[str], ...]  # canonical name first, then aliases


def _term_pattern(term: str) -> re.Pattern[str]:
    # Word boundaries on both ends: "Mark" must not hit "marksman".
    return re.compile(r"\b" + re.escape(term) + r"\b", re.IGNORECASE)


def _compile(entries: Sequence[E]) -> tuple[_EntryMatcher[E], ...]:
    return tuple(
        _EntryMatcher(
            entry=entry,
            patterns=tuple(_term_pattern(term) for term in (entry.name, *entry.aliases)),
        )
        for entry in entries
    )


_PEOPLE_MATCHERS = _compile(BIBLE_PEOPLE)
_PLACE_MATCHERS = _compile(BIBLE_PLACES)


def _find_entries(text: str, matchers: Sequence[_EntryMatcher[E]]) -> list[E]:
    if len(text) < MIN_TEXT_LENGTH:
        return []

    found: list[E] = []
    found_names: set[str] = set()

    for matcher in matchers:
        if matcher.entry.name in found_names:
            continue
        if any(pattern.search(text) for pattern in matcher.patterns):
            found.append(matcher.entry)
            found_names.add(matcher.entry.name)

    return found


def find_people_in_text(text: str) -> list[BiblePerson]:
    """Return the gazetteer people mentioned in *text*, one per canonical name."""
    return _find_entries(text, _PEOPLE_MATCHERS)


def find_places_in_text(text: str) -> list[BiblePlace]:
    """Return the gazetteer places mentioned in *text*, one per canonical name."""
    return _find_entries(text, _PLACE_MATCHERS)


@dataclass
class DetectedEntities:
    """People and places found in one piece of text."""

    people: list[BiblePerson]
    places: list[BiblePlace]


def detect_entities(text: str) -> DetectedEntities:
    """Run both detectors over *text*."""
    result = DetectedEntities(
        people=find_people_in_text(text),
        places=find_places_in_text(text),
    )
    logger.debug(
        "entity_detection_complete",
        text_length=len(text),
        people_found=len(result.people),
        places_found=len(result.places),
    )
    return result

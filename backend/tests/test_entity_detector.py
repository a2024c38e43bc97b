"""Tests for app.services.extraction.entity_detector: gazetteer matching."""

from __future__ import annotations

import dataclasses

import pytest

from app.services.extraction.entity_detector import (
    detect_entities,
    find_people_in_text,
    find_places_in_text,
)
from app.services.extraction.gazetteer import BIBLE_PEOPLE, BIBLE_PLACES


def _names(entries) -> list[str]:
    return [e.name for e in entries]


class TestFindPeople:
    def test_single_person(self):
        result = find_people_in_text("Abraham went to Canaan")
        assert _names(result) == ["Abraham"]

    def test_multiple_people(self):
        names = _names(find_people_in_text("Moses and Aaron went to Pharaoh"))
        assert "Moses" in names
        assert "Aaron" in names

    def test_alias_maps_to_canonical(self):
        result = find_people_in_text("Abram left Haran")
        assert _names(result) == ["Abraham"]

    def test_name_and_alias_yield_one_record(self):
        result = find_people_in_text("Jesus Christ is the Messiah; Jesus wept")
        assert _names(result).count("Jesus") == 1

    def test_word_boundaries(self):
        assert "Mark" not in _names(find_people_in_text("The marksman shot well"))

    def test_case_insensitive(self):
        assert "Moses" in _names(find_people_in_text("MOSES climbed the mountain"))

    def test_multi_word_name(self):
        names = _names(find_people_in_text("John the Baptist preached"))
        assert names.count("John the Baptist") == 1

    def test_multi_word_name_requires_full_phrase(self):
        assert "Pontius Pilate" not in _names(find_people_in_text("Pontius was away"))

    def test_alias_pilate(self):
        assert "Pontius Pilate" in _names(find_people_in_text("Pilate washed his hands"))

    def test_lord_is_not_jesus(self):
        assert "Jesus" not in _names(find_people_in_text("Praise the Lord"))

    def test_simon_alone_is_not_peter(self):
        assert "Peter" not in _names(find_people_in_text("Simon went fishing"))
        assert "Peter" in _names(find_people_in_text("Simon Peter went fishing"))

    def test_israel_is_not_jacob(self):
        assert "Jacob" not in _names(find_people_in_text("The people of Israel rejoiced"))

    def test_results_follow_gazetteer_order(self):
        assert _names(find_people_in_text("Paul wrote to Peter")) == ["Peter", "Paul"]

    def test_duplicate_canonical_entry_reported_once(self):
        result = find_people_in_text("Joseph dreamed")
        assert _names(result) == ["Joseph"]
        assert result[0].role == "Patriarch"

    def test_empty_and_short_text(self):
        assert find_people_in_text("") == []
        assert find_people_in_text("ab") == []
        assert find_people_in_text("Jo") == []

    def test_no_entities(self):
        assert find_people_in_text("The weather is nice today") == []

    def test_deterministic(self):
        text = "David and Solomon reigned in Jerusalem; Elijah went up"
        assert find_people_in_text(text) == find_people_in_text(text)


class TestFindPlaces:
    def test_single_place(self):
        result = find_places_in_text("Jesus entered Jerusalem")
        assert _names(result) == ["Jerusalem"]

    def test_multiple_places(self):
        names = _names(find_places_in_text("From Jerusalem to Bethlehem"))
        assert "Jerusalem" in names
        assert "Bethlehem" in names

    def test_alias(self):
        assert "Jerusalem" in _names(find_places_in_text("They sang songs of Zion"))

    def test_word_boundaries(self):
        names = _names(find_places_in_text("The Roman soldiers marched"))
        assert "Rome" not in names

    def test_name_and_alias_yield_one_record(self):
        result = find_places_in_text("Jerusalem, the City of David")
        assert _names(result).count("Jerusalem") == 1

    def test_israel_is_a_place(self):
        assert "Israel" in _names(find_places_in_text("The people of Israel rejoiced"))

    def test_multi_word_place(self):
        names = _names(find_places_in_text("He prayed on the Mount of Olives"))
        assert "Mount of Olives" in names

    def test_empty_and_short_text(self):
        assert find_places_in_text("") == []
        assert find_places_in_text("AB") == []

    def test_no_places(self):
        assert find_places_in_text("The weather is nice today") == []


class TestDetectEntities:
    def test_runs_both_detectors(self):
        result = detect_entities("Jesus wept in Bethany")
        assert _names(result.people) == ["Jesus"]
        assert _names(result.places) == ["Bethany"]


class TestGazetteer:
    def test_no_overly_generic_aliases(self):
        aliases = {a for p in BIBLE_PEOPLE for a in p.aliases}
        assert "Lord" not in aliases
        assert "Simon" not in aliases
        assert "Israel" not in aliases

    def test_entries_are_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            BIBLE_PEOPLE[0].name = "Someone"  # type: ignore[misc]

    def test_places_have_regions(self):
        assert all(place.region for place in BIBLE_PLACES)

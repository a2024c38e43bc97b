"""Tests for app.services.extraction.reference_parser."""

from __future__ import annotations

import pytest

from app.services.extraction.reference_parser import (
    BOOK_NAMES,
    ParsedReference,
    extract_book_name,
    format_reference,
    is_bible_reference,
    normalize_book_name,
    parse_reference,
)


class TestNormalizeBookName:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Genesis", "Genesis"),
            ("Revelation", "Revelation"),
            ("Gen", "Genesis"),
            ("Ex", "Exodus"),
            ("Mt", "Matthew"),
            ("Jn", "John"),
            ("Mk", "Mark"),
            ("Lk", "Luke"),
            ("Ps", "Psalms"),
            ("Psalm", "Psalms"),
        ],
    )
    def test_names_and_abbreviations(self, raw, expected):
        assert normalize_book_name(raw) == expected

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("1 John", "1 John"),
            ("1John", "1 John"),
            ("1 Jn", "1 John"),
            ("I John", "1 John"),
            ("III John", "3 John"),
            ("2 Samuel", "2 Samuel"),
            ("I Samuel", "1 Samuel"),
            ("II Samuel", "2 Samuel"),
            ("1 Cor", "1 Corinthians"),
        ],
    )
    def test_numbered_books(self, raw, expected):
        assert normalize_book_name(raw) == expected

    def test_case_insensitive(self):
        assert normalize_book_name("genesis") == "Genesis"
        assert normalize_book_name("GENESIS") == "Genesis"
        assert normalize_book_name("gEn") == "Genesis"

    def test_trims_whitespace(self):
        assert normalize_book_name("  Gen  ") == "Genesis"

    def test_song_of_solomon(self):
        assert normalize_book_name("Song of Solomon") == "Song of Solomon"
        assert normalize_book_name("Song") == "Song of Solomon"
        assert normalize_book_name("SOS") == "Song of Solomon"

    @pytest.mark.parametrize("raw", ["", "   ", "NotABook", "Hello", "Genesisx"])
    def test_unknown_returns_none(self, raw):
        assert normalize_book_name(raw) is None

    def test_every_canonical_name_normalizes_to_itself(self):
        for name in BOOK_NAMES:
            assert normalize_book_name(name) == name

    def test_sixty_six_books(self):
        assert len(BOOK_NAMES) == 66


class TestParseReference:
    def test_book_chapter_verse(self):
        assert parse_reference("John 3:16") == ParsedReference("John", 3, 16)

    def test_chapter_only(self):
        result = parse_reference("Psalm 23")
        assert result == ParsedReference("Psalms", 23)
        assert result.verse_start is None
        assert result.verse_end is None

    def test_verse_range(self):
        assert parse_reference("Genesis 1:1-3") == ParsedReference("Genesis", 1, 1, 3)

    def test_numbered_book_without_spaces(self):
        assert parse_reference("1John3:16") == ParsedReference("1 John", 3, 16)

    def test_abbreviation(self):
        assert parse_reference("1 Cor 13:4-7") == ParsedReference("1 Corinthians", 13, 4, 7)

    def test_roman_prefix(self):
        assert parse_reference("II Samuel 7:12") == ParsedReference("2 Samuel", 7, 12)

    def test_multi_word_book(self):
        assert parse_reference("Song of Solomon 2:4") == ParsedReference("Song of Solomon", 2, 4)

    def test_keeps_trimmed_original(self):
        result = parse_reference("  John 3:16  ")
        assert result is not None
        assert result.book == "John"
        assert result.original == "John 3:16"

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "   ",
            "Hello World",
            "Not a reference",
            "Hello 3:16",
            "John",
            "John 3:",
            "John 0",
            "John 3:0",
            "John 3:16-10",
        ],
    )
    def test_rejects(self, raw):
        assert parse_reference(raw) is None


class TestExtractBookName:
    def test_extracts_book(self):
        assert extract_book_name("John 3:16") == "John"
        assert extract_book_name("1 John 3:16") == "1 John"
        assert extract_book_name("Genesis 1:1-3") == "Genesis"

    def test_invalid_returns_none(self):
        assert extract_book_name("Hello") is None
        assert extract_book_name("") is None


class TestFormatReference:
    def test_chapter_only(self):
        assert format_reference(ParsedReference("Psalms", 23)) == "Psalms 23"

    def test_with_verse(self):
        assert format_reference(ParsedReference("John", 3, 16)) == "John 3:16"

    def test_with_range(self):
        assert format_reference(ParsedReference("Genesis", 1, 1, 3)) == "Genesis 1:1-3"

    @pytest.mark.parametrize(
        "raw",
        ["John 3:16", "1 Jn 3:16", "I John 4:8", "gen 1:1-3", "Ps 23", "1John3:16", "Rev 22"],
    )
    def test_round_trip_is_fixed_point(self, raw):
        parsed = parse_reference(raw)
        assert parsed is not None
        formatted = format_reference(parsed)
        reparsed = parse_reference(formatted)
        assert reparsed == parsed
        assert format_reference(reparsed) == formatted


class TestParsedReferenceInvariants:
    def test_rejects_zero_chapter(self):
        with pytest.raises(ValueError):
            ParsedReference("John", 0)

    def test_rejects_end_without_start(self):
        with pytest.raises(ValueError):
            ParsedReference("John", 3, None, 5)

    def test_rejects_reversed_range(self):
        with pytest.raises(ValueError):
            ParsedReference("John", 3, 16, 10)

    def test_original_not_part_of_equality(self):
        assert ParsedReference("John", 3, 16, original="Jn 3:16") == ParsedReference("John", 3, 16)


class TestIsBibleReference:
    @pytest.mark.parametrize("raw", ["John 3:16", "Genesis 1", "1 John 2:1-5", "Ps 23"])
    def test_true_for_references(self, raw):
        assert is_bible_reference(raw) is True

    @pytest.mark.parametrize("raw", ["", "Hello World", "random text 123"])
    def test_false_for_other_text(self, raw):
        assert is_bible_reference(raw) is False

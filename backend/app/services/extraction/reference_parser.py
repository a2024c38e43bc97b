"""Bible reference parsing: "1 John 3:16" to structured data and back.

This pass is pure (no storage, no I/O). Unrecognized input yields None,
never an exception, so callers can skip bad references silently.

Short abbreviations that collide with ordinary words ("Job", "Am", "Is")
are accepted without context disambiguation.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from app.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ParsedReference:
    """A parsed Scripture reference.

    ``original`` is the trimmed input and does not take part in equality,
    so a reference re-parsed from its formatted form compares equal.
    """

    book: str  # canonical book name
    chapter: int
    verse_start: int | None = None
    verse_end: int | None = None
    original: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if self.chapter < 1:
            raise ValueError(f"chapter must be >= 1, got {self.chapter}")
        if self.verse_start is not None and self.verse_start < 1:
            raise ValueError(f"verse_start must be >= 1, got {self.verse_start}")
        if self.verse_end is not None:
            if self.verse_start is None:
                raise ValueError("verse_end requires verse_start")
            if self.verse_end < self.verse_start:
                raise ValueError(
                    f"verse_end ({self.verse_end}) < verse_start ({self.verse_start})"
                )


def _book(*alternatives: str) -> re.Pattern[str]:
    return re.compile("|".join(alternatives), re.IGNORECASE)


# Canonical name -> accepted spellings. Order matters: first match wins.
BOOK_PATTERNS: dict[str, re.Pattern[str]] = {
    # Old Testament
    "Genesis": _book("genesis", "gen", "ge"),
    "Exodus": _book("exodus", "exod", "ex"),
    "Leviticus": _book("leviticus", "lev", "le"),
    "Numbers": _book("numbers", "num", "nu"),
    "Deuteronomy": _book("deuteronomy", "deut", "de", "dt"),
    "Joshua": _book("joshua", "josh", "jos"),
    "Judges": _book("judges", "judg", "jdg"),
    "Ruth": _book("ruth", "ru"),
    "1 Samuel": _book(r"1\s*samuel", r"1\s*sam", r"1\s*sa", r"i\s*samuel"),
    "2 Samuel": _book(r"2\s*samuel", r"2\s*sam", r"2\s*sa", r"ii\s*samuel"),
    "1 Kings": _book(r"1\s*kings", r"1\s*ki", r"i\s*kings"),
    "2 Kings": _book(r"2\s*kings", r"2\s*ki", r"ii\s*kings"),
    "1 Chronicles": _book(r"1\s*chronicles", r"1\s*chron", r"1\s*ch", r"i\s*chronicles"),
    "2 Chronicles": _book(r"2\s*chronicles", r"2\s*chron", r"2\s*ch", r"ii\s*chronicles"),
    "Ezra": _book("ezra", "ezr"),
    "Nehemiah": _book("nehemiah", "neh", "ne"),
    "Esther": _book("esther", "est", "es"),
    "Job": _book("job", "jb"),
    "Psalms": _book("psalms?", "ps", "psa"),
    "Proverbs": _book("proverbs", "prov", "pr"),
    "Ecclesiastes": _book("ecclesiastes", "eccl", "ecc", "ec"),
    "Song of Solomon": _book(r"song\s*of\s*solomon", "song", "sos", "so", "ss"),
    "Isaiah": _book("isaiah", "isa", "is"),
    "Jeremiah": _book("jeremiah", "jer", "je"),
    "Lamentations": _book("lamentations", "lam", "la"),
    "Ezekiel": _book("ezekiel", "ezek", "eze", "ez"),
    "Daniel": _book("daniel", "dan", "da", "dn"),
    "Hosea": _book("hosea", "hos", "ho"),
    "Joel": _book("joel", "joe", "jl"),
    "Amos": _book("amos", "am"),
    "Obadiah": _book("obadiah", "obad", "ob"),
    "Jonah": _book("jonah", "jon"),
    "Micah": _book("micah", "mic", "mi"),
    "Nahum": _book("nahum", "nah", "na"),
    "Habakkuk": _book("habakkuk", "hab"),
    "Zephaniah": _book("zephaniah", "zeph", "zep"),
    "Haggai": _book("haggai", "hag"),
    "Zechariah": _book("zechariah", "zech", "zec"),
    "Malachi": _book("malachi", "mal"),
    # New Testament
    "Matthew": _book("matthew", "matt", "mat", "mt"),
    "Mark": _book("mark", "mk", "mr"),
    "Luke": _book("luke", "lk", "lu"),
    "John": _book("john", "jn", "joh"),
    "Acts": _book("acts", "act", "ac"),
    "Romans": _book("romans", "rom", "ro"),
    "1 Corinthians": _book(r"1\s*corinthians", r"1\s*cor", r"1\s*co", r"i\s*corinthians"),
    "2 Corinthians": _book(r"2\s*corinthians", r"2\s*cor", r"2\s*co", r"ii\s*corinthians"),
    "Galatians": _book("galatians", "gal", "ga"),
    "Ephesians": _book("ephesians", "eph", "ep"),
    "Philippians": _book("philippians", "phil", "php", "pp"),
    "Colossians": _book("colossians", "col", "co"),
    "1 Thessalonians": _book(
        r"1\s*thessalonians", r"1\s*thess", r"1\s*th", r"i\s*thessalonians"
    ),
    "2 Thessalonians": _book(
        r"2\s*thessalonians", r"2\s*thess", r"2\s*th", r"ii\s*thessalonians"
    ),
    "1 Timothy": _book(r"1\s*timothy", r"1\s*tim", r"1\s*ti", r"i\s*timothy"),
    "2 Timothy": _book(r"2\s*timothy", r"2\s*tim", r"2\s*ti", r"ii\s*timothy"),
    "Titus": _book("titus", "tit", "ti"),
    "Philemon": _book("philemon", "phlm", "phm"),
    "Hebrews": _book("hebrews", "heb", "he"),
    "James": _book("james", "jas", "ja", "jm"),
    "1 Peter": _book(r"1\s*peter", r"1\s*pet", r"1\s*pe", r"i\s*peter"),
    "2 Peter": _book(r"2\s*peter", r"2\s*pet", r"2\s*pe", r"ii\s*peter"),
    "1 John": _book(r"1\s*john", r"1\s*jn", r"1\s*jo", r"i\s*john"),
    "2 John": _book(r"2\s*john", r"2\s*jn", r"2\s*jo", r"ii\s*john"),
    "3 John": _book(r"3\s*john", r"3\s*jn", r"3\s*jo", r"iii\s*john"),
    "Jude": _book("jude", "jud", "jd"),
    "Revelation": _book("revelation", "rev", "re"),
}

BOOK_NAMES: tuple[str, ...] = tuple(BOOK_PATTERNS)

# Book part: optional numeric or Roman prefix, a word, optional "of <word>".
# The chapter may follow with or without a space ("1John3:16").
_REFERENCE_RE = re.compile(
    r"^((?:[1-3]|i{1,3})?\s*[a-z]+(?:\s+of\s+[a-z]+)?)\s*([0-9]+)"
    r"(?::([0-9]+)(?:-([0-9]+))?)?$",
    re.IGNORECASE,
)


def normalize_book_name(book_input: str) -> str | None:
    """Map a book name or abbreviation to its canonical name.

    Matching is case-insensitive against the whole trimmed input.
    Returns None when nothing matches.
    """
    trimmed = book_input.strip()
    if not trimmed:
        return None

    for canonical, pattern in BOOK_PATTERNS.items():
        if pattern.fullmatch(trimmed):
            return canonical
    return None


def parse_reference(ref: str) -> ParsedReference | None:
    """Parse a reference such as "1 John 3:16", "Genesis 1:1-3" or "Psalm 23".

    Returns None if the string is not a reference or the book is unknown.
    Zero chapters/verses and reversed verse ranges are rejected as well.
    """
    trimmed = ref.strip()
    match = _REFERENCE_RE.match(trimmed)
    if not match:
        return None

    book_part, chapter_str, verse_start_str, verse_end_str = match.groups()

    book = normalize_book_name(book_part)
    if book is None:
        return None

    chapter = int(chapter_str, 10)
    verse_start = int(verse_start_str, 10) if verse_start_str else None
    verse_end = int(verse_end_str, 10) if verse_end_str else None

    if chapter < 1 or verse_start == 0:
        return None
    if verse_end is not None and verse_start is not None and verse_end < verse_start:
        logger.debug("reference_reversed_range", reference=trimmed)
        return None

    return ParsedReference(
        book=book,
        chapter=chapter,
        verse_start=verse_start,
        verse_end=verse_end,
        original=trimmed,
    )


def extract_book_name(ref: str) -> str | None:
    """Return the canonical book of a reference, or None if it does not parse."""
    parsed = parse_reference(ref)
    return parsed.book if parsed else None


def format_reference(parsed: ParsedReference) -> str:
    """Render a reference in canonical form: "Book Chapter[:Start[-End]]"."""
    result = f"{parsed.book} {parsed.chapter}"
    if parsed.verse_start is not None:
        result += f":{parsed.verse_start}"
        if parsed.verse_end is not None:
            result += f"-{parsed.verse_end}"
    return result


def is_bible_reference(text: str) -> bool:
    return parse_reference(text) is not None

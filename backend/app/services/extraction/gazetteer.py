"""Static gazetteer of biblical people and places.

Loaded once at import and never mutated. Iteration order is significant:
detection results follow it.

Aliases that are too generic to be useful ("Lord", "Simon", "Israel" as a
name for Jacob) are deliberately absent.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BiblePerson:
    """A biblical figure."""

    name: str  # canonical name
    aliases: tuple[str, ...] = ()
    role: str | None = None


@dataclass(frozen=True)
class BiblePlace:
    """A biblical region, city or geographic feature."""

    name: str  # canonical name
    aliases: tuple[str, ...] = ()
    region: str | None = None


BIBLE_PEOPLE: tuple[BiblePerson, ...] = (
    # Old Testament
    BiblePerson("Adam", (), "First Man"),
    BiblePerson("Eve", (), "First Woman"),
    BiblePerson("Noah", (), "Patriarch"),
    BiblePerson("Abraham", ("Abram",), "Patriarch"),
    BiblePerson("Sarah", ("Sarai",), "Matriarch"),
    BiblePerson("Isaac", (), "Patriarch"),
    BiblePerson("Rebekah", ("Rebecca",), "Matriarch"),
    BiblePerson("Jacob", (), "Patriarch"),
    BiblePerson("Joseph", (), "Patriarch"),
    BiblePerson("Moses", (), "Prophet"),
    BiblePerson("Aaron", (), "High Priest"),
    BiblePerson("Miriam", (), "Prophetess"),
    BiblePerson("Joshua", (), "Leader"),
    BiblePerson("Deborah", (), "Judge"),
    BiblePerson("Gideon", (), "Judge"),
    BiblePerson("Samson", (), "Judge"),
    BiblePerson("Ruth", (), "Ancestor of David"),
    BiblePerson("Samuel", (), "Prophet"),
    BiblePerson("Saul", (), "King"),
    BiblePerson("David", (), "King"),
    BiblePerson("Solomon", (), "King"),
    BiblePerson("Elijah", (), "Prophet"),
    BiblePerson("Elisha", (), "Prophet"),
    BiblePerson("Isaiah", (), "Prophet"),
    BiblePerson("Jeremiah", (), "Prophet"),
    BiblePerson("Ezekiel", (), "Prophet"),
    BiblePerson("Daniel", (), "Prophet"),
    BiblePerson("Jonah", (), "Prophet"),
    BiblePerson("Esther", (), "Queen"),
    BiblePerson("Job", (), "Righteous Man"),
    # New Testament
    BiblePerson("Jesus", ("Christ", "Jesus Christ", "Messiah", "Savior"), "Son of God"),
    BiblePerson("Mary", ("Virgin Mary",), "Mother of Jesus"),
    # Shadowed by the patriarch above: detection keys on the canonical name.
    BiblePerson("Joseph", (), "Earthly Father of Jesus"),
    BiblePerson("John the Baptist", ("John Baptist", "Baptist"), "Prophet"),
    BiblePerson("Peter", ("Simon Peter", "Cephas"), "Apostle"),
    BiblePerson("Andrew", (), "Apostle"),
    BiblePerson("James", (), "Apostle"),
    BiblePerson("John", (), "Apostle"),
    BiblePerson("Philip", (), "Apostle"),
    BiblePerson("Bartholomew", ("Nathanael",), "Apostle"),
    BiblePerson("Matthew", ("Levi",), "Apostle"),
    BiblePerson("Thomas", ("Doubting Thomas",), "Apostle"),
    BiblePerson("Judas Iscariot", ("Judas",), "Apostle"),
    BiblePerson("Paul", ("Saul of Tarsus", "Apostle Paul", "Saint Paul"), "Apostle"),
    BiblePerson("Barnabas", (), "Missionary"),
    BiblePerson("Timothy", (), "Disciple"),
    BiblePerson("Titus", (), "Disciple"),
    BiblePerson("Luke", (), "Evangelist"),
    BiblePerson("Mark", ("John Mark",), "Evangelist"),
    BiblePerson("Stephen", (), "Martyr"),
    BiblePerson("Mary Magdalene", ("Magdalene",), "Disciple"),
    BiblePerson("Martha", (), "Disciple"),
    BiblePerson("Lazarus", (), "Friend of Jesus"),
    BiblePerson("Nicodemus", (), "Pharisee"),
    BiblePerson("Pontius Pilate", ("Pilate",), "Roman Governor"),
    BiblePerson("Herod", ("King Herod",), "King"),
)

BIBLE_PLACES: tuple[BiblePlace, ...] = (
    # Regions
    BiblePlace("Israel", ("Land of Israel",), "Holy Land"),
    BiblePlace("Judah", ("Judea",), "Southern Kingdom"),
    BiblePlace("Galilee", (), "Northern Israel"),
    BiblePlace("Samaria", (), "Central Israel"),
    BiblePlace("Egypt", (), "Africa"),
    BiblePlace("Babylon", ("Babylonia",), "Mesopotamia"),
    BiblePlace("Assyria", (), "Mesopotamia"),
    BiblePlace("Persia", (), "Middle East"),
    BiblePlace("Rome", (), "Italy"),
    BiblePlace("Greece", (), "Europe"),
    # Cities
    BiblePlace("Jerusalem", ("Zion", "City of David"), "Judea"),
    BiblePlace("Bethlehem", (), "Judea"),
    BiblePlace("Nazareth", (), "Galilee"),
    BiblePlace("Capernaum", (), "Galilee"),
    BiblePlace("Bethany", (), "Judea"),
    BiblePlace("Jericho", (), "Judea"),
    BiblePlace("Damascus", (), "Syria"),
    BiblePlace("Antioch", (), "Syria"),
    BiblePlace("Corinth", (), "Greece"),
    BiblePlace("Ephesus", (), "Asia Minor"),
    BiblePlace("Philippi", (), "Macedonia"),
    BiblePlace("Thessalonica", (), "Macedonia"),
    BiblePlace("Athens", (), "Greece"),
    BiblePlace("Tarsus", (), "Cilicia"),
    BiblePlace("Nineveh", (), "Assyria"),
    # Geographic features
    BiblePlace("Jordan River", ("River Jordan", "Jordan"), "Israel"),
    BiblePlace("Sea of Galilee", ("Lake Galilee", "Galilee Sea"), "Galilee"),
    BiblePlace("Dead Sea", ("Salt Sea",), "Judea"),
    BiblePlace("Mount Sinai", ("Sinai", "Horeb"), "Sinai Peninsula"),
    BiblePlace("Mount Zion", ("Zion",), "Jerusalem"),
    BiblePlace("Mount of Olives", ("Olivet",), "Jerusalem"),
    BiblePlace("Garden of Eden", ("Eden",), "Unknown"),
    BiblePlace("Garden of Gethsemane", ("Gethsemane",), "Jerusalem"),
    BiblePlace("Calvary", ("Golgotha",), "Jerusalem"),
    BiblePlace("Red Sea", (), "Egypt"),
)
